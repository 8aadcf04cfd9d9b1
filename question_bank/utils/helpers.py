"""
Helper Utilities Module.

Generic functions shared across the question bank modules.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
    - generate_timestamp: Generate formatted timestamps
    - safe_filename: Sanitize filenames for filesystem
    - is_blank: Check whether text is empty or whitespace-only
"""

import re
from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import Optional, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/exports")
        PosixPath('outputs/exports')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the lowercase file extension (including the dot).

    Example:
        >>> get_file_extension("scan.JPG")
        ".jpg"
        >>> get_file_extension("noextension")
        ""
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(
    format_str: str = "%Y%m%d_%H%M%S",
    moment: Optional[date] = None,
    tz: Optional[tzinfo] = None
) -> str:
    """
    Generate a formatted timestamp string.

    Args:
        format_str: strftime format string.
        moment: Point in time to format. Defaults to now.
        tz: Timezone used when moment is omitted. Defaults to local time.

    Returns:
        Formatted timestamp string.

    Example:
        >>> generate_timestamp("%Y-%m-%d")
        "2026-01-21"
    """
    return (moment or datetime.now(tz)).strftime(format_str)


def safe_filename(filename: str, replacement: str = "_") -> str:
    """
    Sanitize a filename by replacing characters invalid on common filesystems.

    Example:
        >>> safe_filename("bank:2026/01.docx")
        "bank_2026_01.docx"
    """
    invalid_chars = r'[<>:"/\\|?*\x00-\x1f]'
    sanitized = re.sub(invalid_chars, replacement, filename)
    sanitized = sanitized.strip('. ')

    if not sanitized:
        sanitized = "unnamed"

    return sanitized


def is_blank(text: Optional[str]) -> bool:
    """Return True for None, empty, or whitespace-only text."""
    return not text or not text.strip()
