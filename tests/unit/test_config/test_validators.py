"""
Unit tests for configuration validation functionality.

Tests the validation of detector thresholds, orchestration settings and the
logging section, including defaults for missing sections.
"""

import pytest

from jobdiag.config.validators import (
    validate_app_config,
    validate_detector_config,
    validate_diagnosis_settings,
)
from jobdiag.models.config import DetectorConfig, DiagnosisSettings
from jobdiag.validation import ValidationError


@pytest.mark.unit
class TestDetectorConfigValidation:
    """Test cases for detector threshold validation."""

    def test_validate_detector_config_success(self, sample_config_data):
        config = validate_detector_config(sample_config_data["detector"])

        assert config.mr_mem_waste.map_threshold == 25.0
        assert config.mr_mem_waste.reduce_threshold == 35.0
        assert config.mem_waste.threshold == 45.0
        assert config.cpu_waste.executor_threshold == 55.0
        assert config.cpu_waste.driver_threshold == 90.0

    def test_missing_sections_use_defaults(self):
        config = validate_detector_config({})
        assert config == DetectorConfig()

    def test_partial_section(self):
        config = validate_detector_config({"mr_memory_waste": {"map_threshold": 10}})

        assert config.mr_mem_waste.map_threshold == 10.0
        assert config.mr_mem_waste.reduce_threshold == DetectorConfig().mr_mem_waste.reduce_threshold

    @pytest.mark.parametrize("value", [-1.0, 100.5, "high", True])
    def test_invalid_threshold(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_detector_config({"mr_memory_waste": {"reduce_threshold": value}})

        assert "reduce_threshold" in str(exc_info.value)
        assert exc_info.value.field_name == "detector.mr_memory_waste.reduce_threshold"

    def test_boundary_thresholds_accepted(self):
        config = validate_detector_config({"memory_waste": {"threshold": 0}})
        assert config.mem_waste.threshold == 0.0

        config = validate_detector_config({"memory_waste": {"threshold": 100}})
        assert config.mem_waste.threshold == 100.0

    def test_section_must_be_table(self):
        with pytest.raises(ValidationError):
            validate_detector_config({"cpu_waste": 50})


@pytest.mark.unit
class TestDiagnosisSettingsValidation:
    """Test cases for orchestrator settings validation."""

    def test_defaults(self):
        assert validate_diagnosis_settings({}) == DiagnosisSettings()

    def test_values(self):
        settings = validate_diagnosis_settings({"parallel": True, "max_workers": 8})

        assert settings.parallel is True
        assert settings.max_workers == 8

    def test_parallel_must_be_boolean(self):
        with pytest.raises(ValidationError):
            validate_diagnosis_settings({"parallel": "yes"})

    def test_max_workers_bounds(self):
        with pytest.raises(ValidationError):
            validate_diagnosis_settings({"max_workers": 0})


@pytest.mark.unit
class TestAppConfigValidation:
    """Test cases for whole-file validation."""

    def test_validate_app_config(self, sample_config_data):
        app_config = validate_app_config(sample_config_data)

        assert app_config.detector.mem_waste.threshold == 45.0
        assert app_config.diagnosis.max_workers == 2
        assert app_config.log_level == "DEBUG"

    def test_empty_document(self):
        app_config = validate_app_config({})

        assert app_config.detector == DetectorConfig()
        assert app_config.log_level == "INFO"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            validate_app_config({"logging": {"level": "verbose"}})
