"""
Process-wide access to the jobdiag configuration.

The configuration file is read and validated on first use and cached until
the path changes or the cache is cleared. The CLI points it at ``--config``;
tests point it at temporary files.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import AppConfig
from ..validation import ErrorSeverity, ValidationError, handle_config_error
from .loader import load_main_config
from .validators import validate_app_config

logger = logging.getLogger(__name__)

_CONFIG: Optional[AppConfig] = None

# conf/config.toml at the repository root
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """Use another config.toml from now on; drops the cached configuration."""
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = config_path
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def load_config(config_path: Path) -> AppConfig:
    """
    Read and validate a config.toml without touching the cache.

    Raises:
        FileNotFoundError: If the file is missing
        tomllib.TOMLDecodeError: If the file is not valid TOML
        ValidationError: If a threshold or setting is out of range
    """
    try:
        app_config = validate_app_config(load_main_config(config_path))
    except (FileNotFoundError, tomllib.TOMLDecodeError, ValidationError) as e:
        handle_config_error(
            error=e,
            context=f"loading {config_path}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger,
        )
        raise
    logger.info(f"Loaded configuration from {config_path}")
    return app_config


def get_config() -> AppConfig:
    """Return the cached configuration, loading it from the current path on first use."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    return _CONFIG is not None


def get_config_info() -> Dict[str, Any]:
    """Describe the configuration state, for diagnostics output."""
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
    }
