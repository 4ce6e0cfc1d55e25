"""
Pytest configuration and shared fixtures for the jobdiag test suite.

This module provides detector payloads, threshold configurations and
configuration files shared by all test modules.
"""

import copy
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")


# ============================================================================
# Detector Payload Fixtures
# ============================================================================


@pytest.fixture
def mr_memory_payload() -> Dict[str, Any]:
    """MapReduce memory waste payload with two map tasks and one reduce task."""
    return {
        "mapTaskMemPeakList": [
            {"taskId": 1, "peakUsed": 1024},
            {"taskId": 2, "peakUsed": 2048},
        ],
        "reduceTaskMemPeakList": [
            {"taskId": 1, "peakUsed": 1536},
        ],
        "mapMemory": 4096,
        "reduceMemory": 3072,
        "mapWastePercent": 37.5,
        "reduceWastePercent": None,
        "abnormal": True,
    }


@pytest.fixture
def spark_memory_payload() -> Dict[str, Any]:
    """Spark executor memory waste payload with three executors."""
    return {
        "executorPeakMemoryList": [
            {"executorId": 1, "peakUsed": 3072},
            {"executorId": 2, "peakUsed": 1024},
            {"executorId": 3, "peakUsed": 2048},
        ],
        "executorMemory": 8192,
        "wastePercent": 62.5,
        "abnormal": True,
    }


@pytest.fixture
def cpu_payload() -> Dict[str, Any]:
    """Spark CPU waste payload with two executors of 2 cores each."""
    return {
        "executorCores": 2,
        "executorCpuList": [
            {"executorId": 1, "computeTime": 30000, "runTime": 60000},
            {"executorId": 2, "computeTime": 90000, "runTime": 60000},
        ],
        "executorWastedPercentOverAll": 50.0,
        "driverWastedPercentOverAll": None,
        "abnormal": False,
    }


@pytest.fixture
def detector_config():
    """Threshold configuration used across analyzer tests."""
    from jobdiag.models.config import (
        CpuWasteConfig,
        DetectorConfig,
        MemWasteConfig,
        MRMemWasteConfig,
    )

    return DetectorConfig(
        mr_mem_waste=MRMemWasteConfig(map_threshold=20.0, reduce_threshold=30.0),
        mem_waste=MemWasteConfig(threshold=45.0),
        cpu_waste=CpuWasteConfig(executor_threshold=50.0, driver_threshold=95.0),
    )


@pytest.fixture
def detector_results(mr_memory_payload, spark_memory_payload, cpu_payload):
    """One well-formed detector result per shipped category."""
    from jobdiag.models.findings import DetectorResult

    return [
        DetectorResult("mr_memory_waste", copy.deepcopy(mr_memory_payload)),
        DetectorResult("memory_waste", copy.deepcopy(spark_memory_payload)),
        DetectorResult("cpu_waste", copy.deepcopy(cpu_payload)),
    ]


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data() -> Dict[str, Any]:
    """Sample config.toml content as parsed data."""
    return {
        "detector": {
            "mr_memory_waste": {"map_threshold": 25.0, "reduce_threshold": 35.0},
            "memory_waste": {"threshold": 45.0},
            "cpu_waste": {"executor_threshold": 55.0, "driver_threshold": 90.0},
        },
        "diagnosis": {"parallel": True, "max_workers": 2},
        "logging": {"level": "debug"},
    }


@pytest.fixture
def config_file(tmp_path, sample_config_data) -> Path:
    """Write the sample configuration to a temporary config.toml."""
    import toml

    config_path = tmp_path / "config.toml"
    with open(config_path, "w") as f:
        toml.dump(sample_config_data, f)
    return config_path


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    default_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield

    from jobdiag.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(default_config_path)
