"""
Unit tests for unit conversion and display formatting.
"""

import pytest

from jobdiag.units import (
    format_gb,
    format_percent,
    transfer_bytes_to_gb,
    transfer_kb_to_gb,
    transfer_mb_to_gb,
    transfer_ms_to_seconds,
)


@pytest.mark.unit
class TestConversions:
    """Test cases for numeric conversions."""

    def test_mb_to_gb(self):
        assert transfer_mb_to_gb(1024) == 1.0
        assert transfer_mb_to_gb(2048) == 2.0
        assert transfer_mb_to_gb(512) == 0.5

    def test_kb_and_bytes_to_gb(self):
        assert transfer_kb_to_gb(1024 * 1024) == 1.0
        assert transfer_bytes_to_gb(3 * 1024 ** 3) == 3.0

    def test_ms_to_seconds(self):
        assert transfer_ms_to_seconds(1500) == 1.5

    def test_negative_values_are_preserved(self):
        """Conversions never clamp; over-allocation shows as a negative value."""
        assert transfer_mb_to_gb(-512) == -0.5


@pytest.mark.unit
class TestFormatting:
    """Test cases for display formatting."""

    def test_format_percent(self):
        assert format_percent(37.5) == "37.50%"
        assert format_percent(100) == "100.00%"
        assert format_percent(1 / 3 * 100) == "33.33%"

    def test_format_percent_missing_value_is_zero(self):
        assert format_percent(None) == "0.00%"

    def test_format_gb(self):
        assert format_gb(4096) == "4.00GB"
        assert format_gb(1536) == "1.50GB"
        assert format_gb(None) == "0.00GB"
