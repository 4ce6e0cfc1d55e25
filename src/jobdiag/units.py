"""
Unit conversion and display formatting helpers.

All analyzers convert raw metrics through these functions so that every chart
and every formatted variable in a report uses the same scale and precision.
Conversions are for display only; thresholds are always compared in the
units the detector reported.
"""

from typing import Optional, Union

Number = Union[int, float]

BYTES_PER_GB = 1024 ** 3
KB_PER_GB = 1024 ** 2
MB_PER_GB = 1024
MS_PER_SECOND = 1000


def transfer_bytes_to_gb(value: Number) -> float:
    """Convert bytes to GB (binary scale)."""
    return value / BYTES_PER_GB


def transfer_kb_to_gb(value: Number) -> float:
    """Convert KB to GB (binary scale)."""
    return value / KB_PER_GB


def transfer_mb_to_gb(value: Number) -> float:
    """Convert MB to GB (binary scale)."""
    return value / MB_PER_GB


def transfer_ms_to_seconds(value: Number) -> float:
    """Convert milliseconds to seconds."""
    return value / MS_PER_SECOND


def format_percent(value: Optional[Number]) -> str:
    """
    Format a percentage value for display, e.g. 37.5 -> "37.50%".

    A missing value is rendered as zero.
    """
    return "%.2f%%" % (value or 0.0)


def format_gb(value_mb: Optional[Number]) -> str:
    """Format a size given in MB as GB for display, e.g. 4096 -> "4.00GB"."""
    return "%.2fGB" % transfer_mb_to_gb(value_mb or 0.0)
