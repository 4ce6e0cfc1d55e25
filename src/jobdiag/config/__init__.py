"""
Configuration management for the jobdiag package.

This module provides a clean interface for loading, validating, and accessing
threshold and orchestration settings from a TOML file with singleton
pattern management.
"""

from .loader import load_main_config, load_toml_file
from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    load_config,
    set_config_path,
)
from .validators import (
    validate_app_config,
    validate_detector_config,
    validate_diagnosis_settings,
)

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "load_config",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "validate_app_config",
    "validate_detector_config",
    "validate_diagnosis_settings",
]
