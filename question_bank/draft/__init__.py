"""
Draft Module for the Question Bank Builder.

This module provides the editable draft and its scan/commit lifecycle.
"""

from .editor import DraftEditor, DraftState, ScanState

__all__ = ['DraftEditor', 'DraftState', 'ScanState']
