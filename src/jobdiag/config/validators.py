"""
Configuration validation utilities.

This module turns raw configuration sections into validated configuration
objects. Missing keys fall back to the dataclass defaults; present keys must
be valid.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    AppConfig,
    CpuWasteConfig,
    DetectorConfig,
    DiagnosisSettings,
    MemWasteConfig,
    MRMemWasteConfig,
)
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_percentage,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _section(data: Dict[str, Any], key: str, prefix: str) -> Dict[str, Any]:
    section = data.get(key, {})
    if not isinstance(section, dict):
        raise ValidationError(
            f"{prefix}.{key} must be a table", field_name=f"{prefix}.{key}", value=section
        )
    return section


def validate_detector_config(detector_data: Dict[str, Any]) -> DetectorConfig:
    """
    Validate and create a DetectorConfig from the raw `[detector]` table.

    Args:
        detector_data: Raw detector configuration from TOML

    Returns:
        Validated DetectorConfig instance

    Raises:
        ValidationError: If a threshold is not a percentage in [0, 100]
    """
    mr_settings = _section(detector_data, "mr_memory_waste", "detector")
    mem_settings = _section(detector_data, "memory_waste", "detector")
    cpu_settings = _section(detector_data, "cpu_waste", "detector")

    mr_defaults = MRMemWasteConfig()
    mem_defaults = MemWasteConfig()
    cpu_defaults = CpuWasteConfig()

    mr_mem_waste = MRMemWasteConfig(
        map_threshold=validate_percentage(
            mr_settings.get("map_threshold", mr_defaults.map_threshold),
            field_name="detector.mr_memory_waste.map_threshold",
        ),
        reduce_threshold=validate_percentage(
            mr_settings.get("reduce_threshold", mr_defaults.reduce_threshold),
            field_name="detector.mr_memory_waste.reduce_threshold",
        ),
    )
    mem_waste = MemWasteConfig(
        threshold=validate_percentage(
            mem_settings.get("threshold", mem_defaults.threshold),
            field_name="detector.memory_waste.threshold",
        ),
    )
    cpu_waste = CpuWasteConfig(
        executor_threshold=validate_percentage(
            cpu_settings.get("executor_threshold", cpu_defaults.executor_threshold),
            field_name="detector.cpu_waste.executor_threshold",
        ),
        driver_threshold=validate_percentage(
            cpu_settings.get("driver_threshold", cpu_defaults.driver_threshold),
            field_name="detector.cpu_waste.driver_threshold",
        ),
    )
    return DetectorConfig(mr_mem_waste=mr_mem_waste, mem_waste=mem_waste, cpu_waste=cpu_waste)


def validate_diagnosis_settings(diagnosis_data: Dict[str, Any]) -> DiagnosisSettings:
    """
    Validate and create DiagnosisSettings from the raw `[diagnosis]` table.

    Raises:
        ValidationError: If validation fails
    """
    defaults = DiagnosisSettings()

    parallel = diagnosis_data.get("parallel", defaults.parallel)
    if not isinstance(parallel, bool):
        raise ValidationError(
            "diagnosis.parallel must be a boolean", field_name="diagnosis.parallel", value=parallel
        )

    max_workers = validate_positive_integer(
        diagnosis_data.get("max_workers", defaults.max_workers),
        min_value=1,
        max_value=64,
        field_name="diagnosis.max_workers",
    )
    return DiagnosisSettings(parallel=parallel, max_workers=max_workers)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate the whole parsed config.toml.

    Args:
        config_data: Parsed TOML document

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If any section fails validation
    """
    detector = validate_detector_config(_section(config_data, "detector", "config"))
    diagnosis = validate_diagnosis_settings(_section(config_data, "diagnosis", "config"))

    logging_settings = _section(config_data, "logging", "config")
    log_level = validate_enum_choice(
        str(logging_settings.get("level", "INFO")).upper(),
        valid_choices=LOG_LEVELS,
        field_name="logging.level",
    )
    return AppConfig(detector=detector, diagnosis=diagnosis, log_level=log_level)
