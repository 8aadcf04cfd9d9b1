"""
DOCX Writer Module.

Serializes a DocumentTree into Word (.docx) bytes using python-docx.

Author: ML Engineering Team
"""

import io

from docx import Document
from docx.shared import Twips

from question_bank.utils.logger import get_logger
from .document_tree import DocumentTree, Paragraph

# Initialize module logger
logger = get_logger(__name__)


DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class DocxWriter:
    """
    Renders DocumentTree paragraphs with the built-in Word styles.

    Headings use the "Heading N" styles; body paragraphs use "Normal".

    Example:
        >>> content = DocxWriter().serialize(tree)
        >>> content[:2]
        b'PK'
    """

    media_type = DOCX_MEDIA_TYPE

    def serialize(self, tree: DocumentTree) -> bytes:
        document = Document()

        for paragraph in tree.paragraphs:
            self._write_paragraph(document, paragraph)

        buffer = io.BytesIO()
        document.save(buffer)

        logger.debug(f"Serialized {len(tree.paragraphs)} paragraphs to DOCX")
        return buffer.getvalue()

    def _write_paragraph(self, document, paragraph: Paragraph) -> None:
        if paragraph.is_heading:
            style = f"Heading {paragraph.heading_level}"
        else:
            style = "Normal"

        docx_paragraph = document.add_paragraph(style=style)
        for run in paragraph.runs:
            docx_run = docx_paragraph.add_run(run.text)
            if run.bold:
                docx_run.bold = True

        fmt = docx_paragraph.paragraph_format
        if paragraph.spacing_before:
            fmt.space_before = Twips(paragraph.spacing_before)
        if paragraph.spacing_after:
            fmt.space_after = Twips(paragraph.spacing_after)
