"""
Repository Module for the Question Bank Builder.

This module provides:
    - QuestionRecord: immutable committed question
    - IdGenerator: unique id source for commits
    - QuestionRepository: ordered in-memory store
    - SearchProjector / SearchView: filtered views of the store
"""

from .records import QuestionRecord, IdGenerator
from .repository import QuestionRepository
from .search import SearchProjector, SearchView

__all__ = [
    'QuestionRecord',
    'IdGenerator',
    'QuestionRepository',
    'SearchProjector',
    'SearchView'
]
