"""
Utility Module for the Question Bank Builder.

This module provides common utilities used across all other modules:
    - Logging configuration
    - File operations
    - Common helpers
"""

from .logger import setup_logger, get_logger
from .helpers import ensure_directory, get_file_extension, generate_timestamp, is_blank

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'get_file_extension',
    'generate_timestamp',
    'is_blank'
]
