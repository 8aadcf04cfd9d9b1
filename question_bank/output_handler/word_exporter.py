"""
Word Exporter Module.

This module maps the question bank onto a DocumentTree and serializes
it to a Word document.

Layout:
    - Title (Heading 1) and a "Total questions" count line
    - Per question, numbered 1..N in bank order:
        * Heading 2 "Question n:"
        * Bold question text (or a placeholder)
        * "Answer: " label followed by the answer (or a placeholder)

Images attached to questions are not embedded.

Author: ML Engineering Team
"""

from datetime import date, timezone
from typing import Optional, Sequence

from config import get_config
from question_bank.utils.logger import get_logger
from question_bank.utils.helpers import generate_timestamp
from question_bank.utils.exceptions import DocumentExportError, EmptyRepositoryError
from question_bank.repository.records import QuestionRecord
from .document_tree import DocumentArtifact, DocumentTree, Paragraph, TextRun
from .docx_writer import DocxWriter

# Initialize module logger
logger = get_logger(__name__)


class DocumentExporter:
    """
    Exports question records to a .docx artifact.

    Attributes:
        title: Document title
        count_label: Count line pattern with a {count} field
        question_heading: Per-question heading pattern with a {number} field
        answer_label: Bold label preceding each answer
        empty_question: Placeholder for an empty question
        empty_answer: Placeholder for an empty answer
        filename_pattern: Filename pattern with a {date} field

    Example:
        >>> exporter = DocumentExporter()
        >>> artifact = exporter.export(repo.all())
        >>> artifact.filename
        'QuestionBank_2026-01-21.docx'
    """

    # Spacing in twips
    COUNT_SPACING_AFTER = 400
    HEADING_SPACING_BEFORE = 400
    HEADING_SPACING_AFTER = 200
    QUESTION_SPACING_AFTER = 200
    ANSWER_SPACING_AFTER = 400

    def __init__(self, writer: Optional[DocxWriter] = None) -> None:
        self.writer = writer or DocxWriter()

        self.title = get_config("export.word.title", "QUESTION BANK")
        self.count_label = get_config("export.word.count_label", "Total questions: {count}")
        self.question_heading = get_config("export.word.question_heading", "Question {number}:")
        self.answer_label = get_config("export.word.answer_label", "Answer: ")
        self.empty_question = get_config("export.word.empty_question", "(No question yet)")
        self.empty_answer = get_config("export.word.empty_answer", "(No answer yet)")
        self.filename_pattern = get_config(
            "export.word.filename_pattern",
            "QuestionBank_{date}.docx"
        )

    def build_document(self, records: Sequence[QuestionRecord]) -> DocumentTree:
        """
        Map records onto a DocumentTree.

        Args:
            records: Questions in bank order.

        Returns:
            DocumentTree ready for serialization.
        """
        tree = DocumentTree()

        tree.add(Paragraph(runs=(TextRun(self.title),), heading_level=1))
        tree.add(Paragraph(
            runs=(TextRun(self.count_label.format(count=len(records))),),
            spacing_after=self.COUNT_SPACING_AFTER
        ))

        for number, record in enumerate(records, 1):
            tree.add(Paragraph(
                runs=(TextRun(self.question_heading.format(number=number)),),
                heading_level=2,
                spacing_before=self.HEADING_SPACING_BEFORE,
                spacing_after=self.HEADING_SPACING_AFTER
            ))
            tree.add(Paragraph(
                runs=(TextRun(record.question or self.empty_question, bold=True),),
                spacing_after=self.QUESTION_SPACING_AFTER
            ))
            tree.add(Paragraph(
                runs=(
                    TextRun(self.answer_label, bold=True),
                    TextRun(record.answer or self.empty_answer),
                ),
                spacing_after=self.ANSWER_SPACING_AFTER
            ))

        return tree

    def get_default_filename(self, export_date: Optional[date] = None) -> str:
        return self.filename_pattern.format(date=generate_timestamp("%Y-%m-%d", export_date, tz=timezone.utc))

    def export(
        self,
        records: Sequence[QuestionRecord],
        export_date: Optional[date] = None
    ) -> DocumentArtifact:
        """
        Export records to a Word document.

        Args:
            records: Questions in bank order.
            export_date: Date embedded in the filename. Defaults to today (UTC).

        Returns:
            DocumentArtifact with the .docx bytes.

        Raises:
            EmptyRepositoryError: If records is empty. Nothing is built.
            DocumentExportError: If serialization fails.
        """
        if not records:
            raise EmptyRepositoryError("docx")

        filename = self.get_default_filename(export_date)
        tree = self.build_document(records)

        try:
            content = self.writer.serialize(tree)
        except Exception as e:
            logger.error(f"Word export failed: {e}")
            raise DocumentExportError(filename, str(e)) from e

        logger.info(f"Word document generated: {filename} ({len(records)} questions)")
        return DocumentArtifact(
            filename=filename,
            content=content,
            media_type=self.writer.media_type,
            record_count=len(records)
        )
