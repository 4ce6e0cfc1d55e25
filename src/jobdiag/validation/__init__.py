"""
Validation and error handling for the jobdiag package.

This module provides input validation and error handling with consistent
error reporting across the application.
"""

from .exceptions import (
    ErrorSeverity,
    PayloadError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
)
from .validators import (
    validate_enum_choice,
    validate_percentage,
    validate_positive_float,
    validate_positive_integer,
)

__all__ = [
    "ErrorSeverity",
    "PayloadError",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_cli_error",
    "validate_enum_choice",
    "validate_percentage",
    "validate_positive_float",
    "validate_positive_integer",
]
