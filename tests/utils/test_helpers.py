"""
Tests for the shared helper functions.
"""

from datetime import date, timezone

from question_bank.utils.helpers import generate_timestamp, is_blank, safe_filename


class TestGenerateTimestamp:

    def test_explicit_moment_is_formatted(self):
        assert generate_timestamp("%Y-%m-%d", date(2026, 3, 7)) == "2026-03-07"

    def test_timezone_applies_when_moment_omitted(self):
        assert generate_timestamp("%Z", tz=timezone.utc) == "UTC"


class TestSafeFilename:

    def test_invalid_characters_replaced(self):
        assert safe_filename("bank:2026/01.docx") == "bank_2026_01.docx"

    def test_blank_name_falls_back(self):
        assert safe_filename(" . ") == "unnamed"


def test_is_blank():
    assert is_blank(None)
    assert is_blank("  \n")
    assert not is_blank(" x ")
