"""
Document Tree Data Classes.

A small, writer-independent description of an exported document:
paragraphs made of text runs, with heading levels, bold, and spacing
hints. Spacing is expressed in twips (1/20 pt), as Word stores it.

Classes:
    TextRun: A span of text with character formatting
    Paragraph: A block of runs with paragraph formatting
    DocumentTree: Ordered paragraphs making up one document
    DocumentArtifact: Serialized binary output plus suggested filename

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from question_bank.utils.helpers import ensure_directory, safe_filename


@dataclass(frozen=True)
class TextRun:
    text: str
    bold: bool = False


@dataclass(frozen=True)
class Paragraph:
    """
    Attributes:
        runs: Text runs in order
        heading_level: 1-9 for headings, None for body text
        spacing_before: Space above, in twips
        spacing_after: Space below, in twips
    """
    runs: Tuple[TextRun, ...] = field(default_factory=tuple)
    heading_level: Optional[int] = None
    spacing_before: int = 0
    spacing_after: int = 0

    @property
    def text(self) -> str:
        return ''.join(run.text for run in self.runs)

    @property
    def is_heading(self) -> bool:
        return self.heading_level is not None


@dataclass
class DocumentTree:
    paragraphs: List[Paragraph] = field(default_factory=list)

    def add(self, paragraph: Paragraph) -> None:
        self.paragraphs.append(paragraph)

    def headings(self, level: Optional[int] = None) -> List[Paragraph]:
        """Heading paragraphs, optionally restricted to one level."""
        return [
            p for p in self.paragraphs
            if p.is_heading and (level is None or p.heading_level == level)
        ]


@dataclass(frozen=True)
class DocumentArtifact:
    """
    Binary export ready to be downloaded or saved.

    Attributes:
        filename: Suggested filename
        content: Serialized document bytes
        media_type: MIME type of content
        record_count: Number of questions in the export
    """
    filename: str
    content: bytes
    media_type: str
    record_count: int = 0

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    def save(self, directory: Union[str, Path]) -> Path:
        """Write the artifact into directory under its suggested filename."""
        path = ensure_directory(directory) / safe_filename(self.filename)
        path.write_bytes(self.content)
        return path

    def __repr__(self) -> str:
        return (
            f"DocumentArtifact(filename='{self.filename}', "
            f"size={self.size_bytes}, records={self.record_count})"
        )
