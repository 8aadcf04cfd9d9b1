"""
Search Projection Module.

Derives filtered views of the question bank from (records, query).
Nothing here holds state between calls, so a view can never go stale.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .records import QuestionRecord


@dataclass(frozen=True)
class SearchView:
    """
    Result of projecting the bank through a query.

    Attributes:
        query: The query the view was built from
        entries: (display number, record) pairs in bank order, where the
                 number is the record's position in the full bank
        total: Number of records in the full bank
    """
    query: str
    entries: Tuple[Tuple[int, QuestionRecord], ...] = field(default_factory=tuple)
    total: int = 0

    @property
    def matched(self) -> int:
        return len(self.entries)

    @property
    def records(self) -> List[QuestionRecord]:
        return [record for _, record in self.entries]

    @property
    def summary(self) -> str:
        return f"Found {self.matched} / {self.total} questions"


class SearchProjector:
    """
    Filters records by a free-text query.

    A record matches when the query is a case-insensitive substring of
    its question or its answer. The empty query matches everything.

    Example:
        >>> projector = SearchProjector()
        >>> projector.filter(repo.all(), "cat")
        [QuestionRecord(id='...', question='The cat sat', has_image=False)]
    """

    def filter(self, records: Sequence[QuestionRecord], query: str) -> List[QuestionRecord]:
        """Order-preserving subsequence of records matching query."""
        if not query:
            return list(records)
        return [record for record in records if record.matches(query)]

    def project(self, records: Sequence[QuestionRecord], query: str) -> SearchView:
        """Filter records and number each match by its position in records."""
        entries = tuple(
            (number, record)
            for number, record in enumerate(records, 1)
            if not query or record.matches(query)
        )
        return SearchView(query=query, entries=entries, total=len(records))
