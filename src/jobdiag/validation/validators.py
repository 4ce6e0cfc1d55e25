"""
Validation functions for configuration values.

Numbers coming out of TOML or from the command line are checked here before
they become configuration objects. Booleans are never accepted as numbers,
even though Python treats them as integers.
"""

from typing import Any, Callable, List, Optional, TypeVar

from .exceptions import ValidationError

N = TypeVar("N", int, float)


def _coerce_bounded(
    value: Any,
    convert: Callable[[Any], N],
    kind: str,
    min_value: N,
    max_value: Optional[N],
    field_name: str,
) -> N:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a valid {kind}, got {value}",
                              field_name=field_name, value=value)
    try:
        number = convert(value)
    except (ValueError, TypeError, OverflowError):
        raise ValidationError(f"{field_name} must be a valid {kind}, got {value}",
                              field_name=field_name, value=value)
    # NaN fails both comparisons, so it is checked explicitly.
    if number != number or number < min_value:
        raise ValidationError(f"{field_name} must be >= {min_value}, got {number}",
                              field_name=field_name, value=value)
    if max_value is not None and number > max_value:
        raise ValidationError(f"{field_name} must be <= {max_value}, got {number}",
                              field_name=field_name, value=value)
    return number


def validate_positive_integer(value: Any, min_value: int = 1, max_value: Optional[int] = None,
                              field_name: str = "value") -> int:
    """
    Validate that a value is an integer in ``[min_value, max_value]``.

    Raises:
        ValidationError: If the value is not an integer or is out of bounds
    """
    return _coerce_bounded(value, int, "integer", min_value, max_value, field_name)


def validate_positive_float(value: Any, min_value: float = 0.0, max_value: Optional[float] = None,
                            field_name: str = "value") -> float:
    """Validate that a value is a number in ``[min_value, max_value]``."""
    return _coerce_bounded(value, float, "number", min_value, max_value, field_name)


def validate_percentage(value: Any, field_name: str = "value") -> float:
    """Validate a threshold expressed as a percentage in [0, 100]."""
    return validate_positive_float(value, min_value=0.0, max_value=100.0, field_name=field_name)


def validate_enum_choice(value: Any, valid_choices: List[str], field_name: str = "value") -> str:
    """Validate that a value is one of a fixed set of strings."""
    if value not in valid_choices:
        raise ValidationError(f"{field_name} must be one of {valid_choices}, got {value}",
                              field_name=field_name, value=value)
    return value
