"""
Question Repository Module.

In-memory, insertion-ordered store of committed questions for a single
session. Insertion order is the canonical order for display and export.

Author: ML Engineering Team
"""

from typing import Iterator, List, Optional, Tuple

from question_bank.utils.logger import get_logger
from question_bank.utils.exceptions import DuplicateRecordError
from .records import QuestionRecord

# Initialize module logger
logger = get_logger(__name__)


class QuestionRepository:
    """
    Append-only collection of QuestionRecord, plus delete-by-id.

    Display numbers are never stored; position_of() recomputes them from
    the current order, so deletions shift later records down.

    Example:
        >>> repo = QuestionRepository()
        >>> repo.append(record)
        >>> repo.position_of(record.id)
        1
        >>> repo.delete_by_id(record.id)
        True
    """

    def __init__(self) -> None:
        self._records: List[QuestionRecord] = []

    def append(self, record: QuestionRecord) -> None:
        """
        Add a record at the end of the bank.

        Raises:
            DuplicateRecordError: If a record with the same id exists.
        """
        if self.get(record.id) is not None:
            raise DuplicateRecordError(record.id)

        self._records.append(record)
        logger.debug(f"Appended question {record.id} (total: {len(self._records)})")

    def delete_by_id(self, record_id: str) -> bool:
        """
        Remove the record with the given id.

        Returns:
            True if a record was removed, False if the id was unknown.
        """
        for index, record in enumerate(self._records):
            if record.id == record_id:
                del self._records[index]
                logger.debug(f"Deleted question {record_id} (total: {len(self._records)})")
                return True

        logger.debug(f"Delete ignored, unknown question id: {record_id}")
        return False

    def all(self) -> Tuple[QuestionRecord, ...]:
        """Snapshot of all records in insertion order."""
        return tuple(self._records)

    def get(self, record_id: str) -> Optional[QuestionRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def position_of(self, record_id: str) -> Optional[int]:
        """1-based position of a record in the current order, or None."""
        for index, record in enumerate(self._records, 1):
            if record.id == record_id:
                return index
        return None

    @property
    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[QuestionRecord]:
        return iter(self.all())

    def __repr__(self) -> str:
        return f"QuestionRepository(count={len(self._records)})"
