"""
Question Record Data Classes.

Classes:
    QuestionRecord: A committed, immutable question/answer pair
    IdGenerator: Session-scoped unique id source

Author: ML Engineering Team
"""

import itertools
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from question_bank.input_handler.image_ingestor import ImageHandle


@dataclass(frozen=True)
class QuestionRecord:
    """
    A committed entry of the question bank.

    Records are never edited in place; the only way to change the bank
    is to delete a record and commit a new one.

    Attributes:
        id: Opaque unique identifier, never empty
        question: Question text, may be empty
        answer: Answer text, may be empty
        image: Image attached at commit time, if any

    Example:
        >>> record = QuestionRecord(id="1737000000000-1", question="2+2?", answer="4")
        >>> record.has_image
        False
    """
    id: str
    question: str = ""
    answer: str = ""
    image: Optional[ImageHandle] = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("QuestionRecord id must not be empty")

    @property
    def image_url(self) -> Optional[str]:
        """Data URI of the attached image, or None."""
        return self.image.data_uri if self.image is not None else None

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on question or answer."""
        needle = query.casefold()
        return needle in self.question.casefold() or needle in self.answer.casefold()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            'id': self.id,
            'question': self.question,
            'answer': self.answer,
            'image_url': self.image_url,
        }

    def __repr__(self) -> str:
        return (
            f"QuestionRecord(id='{self.id}', "
            f"question='{self.question[:30]}', "
            f"has_image={self.has_image})"
        )


class IdGenerator:
    """
    Produces ids of the form "<milliseconds>-<sequence>".

    The sequence number increases on every call, so two ids from the same
    generator never collide even within the same millisecond.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.time
        self._sequence = itertools.count(1)

    def __call__(self) -> str:
        return self.next_id()

    def next_id(self) -> str:
        millis = int(self._clock() * 1000)
        return f"{millis}-{next(self._sequence)}"
