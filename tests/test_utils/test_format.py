"""
Tests for codedigest.utils.format module.
"""

import pytest

from codedigest.utils.format import format_count, format_size, parse_size


@pytest.mark.unit
class TestFormatSize:
    """Tests for format_size function."""

    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0.00 B"),
            (1023, "1023.00 B"),
            (1024, "1.00 KB"),
            (1536, "1.50 KB"),
            (50 * 1024 * 1024, "50.00 MB"),
            (3 * 1024**3, "3.00 GB"),
            (1024**4, "1.00 TB"),
        ],
    )
    def test_units(self, size, expected):
        assert format_size(size) == expected

    def test_beyond_terabytes(self):
        """Test that anything past TB is reported in PB."""
        assert format_size(2 * 1024**5) == "2.00 PB"


@pytest.mark.unit
class TestParseSize:
    """Tests for parse_size function."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1024", 1024),
            ("100B", 100),
            ("1K", 1024),
            ("500KB", 500 * 1024),
            ("2MB", 2 * 1024**2),
            ("1.5GB", int(1.5 * 1024**3)),
            ("1TB", 1024**4),
        ],
    )
    def test_units(self, text, expected):
        assert parse_size(text) == expected

    def test_case_and_whitespace_insensitive(self):
        assert parse_size("  50mb ") == parse_size("50MB") == 50 * 1024**2
        assert parse_size("10 kb") == 10 * 1024

    def test_zero_is_allowed(self):
        assert parse_size("0") == 0

    @pytest.mark.parametrize("text", ["", "abc", "10XB", "-5MB", "1.2.3MB", "MB"])
    def test_invalid_formats(self, text):
        with pytest.raises(ValueError):
            parse_size(text)

    def test_none_is_rejected(self):
        with pytest.raises(ValueError, match="Invalid size string"):
            parse_size(None)


@pytest.mark.unit
class TestFormatCount:
    """Tests for format_count function."""

    def test_singular(self):
        assert format_count(1, "file") == "1 file"

    def test_plural_and_thousands(self):
        assert format_count(0, "warning") == "0 warnings"
        assert format_count(12345, "line") == "12,345 lines"
