"""
jobdiag: resource waste diagnosis for finished batch jobs.

This package turns the raw findings of upstream detectors (per-task memory
peaks, per-executor CPU usage, waste percentages) into a structured verdict,
supporting charts and a plain-language explanation per resource category.

The package is organized into specialized modules:
- models: Detector results, typed findings, charts, artifacts and reports
- analyzers: The analyzer contract, one analyzer per category, the registry
- diagnosis: The orchestrator assembling a report from the analyzers
- config: TOML configuration loading and validation
- validation: Error types and error handling helpers
- units: Unit conversions and display formatting
- reporting / plotter: JSON/text rendering and chart export
- cli: Command-line interface

Usage:
    From command line:
        jobdiag findings.json --format text

    Programmatically:
        from jobdiag import DiagnosisOrchestrator, DetectorResult, DetectorConfig
        report = DiagnosisOrchestrator().diagnose(job_id, results, DetectorConfig())
"""

from .analyzers import (
    AbstractResourceAnalyzer,
    AnalyzerRegistry,
    CpuWasteAnalyzer,
    MemoryWasteAnalyzer,
    MRMemoryWasteAnalyzer,
    get_default_registry,
)
from .config import clear_config_cache, get_config, set_config_path
from .diagnosis import DiagnosisOrchestrator, diagnose
from .models import (
    AppConfig,
    Category,
    Chart,
    DetectorConfig,
    DetectorResult,
    DiagnosisItem,
    DiagnosisReport,
    DiagnosticArtifact,
    MetricPoint,
)
from .validation import PayloadError, ValidationError

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "DiagnosisOrchestrator",
    "diagnose",
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Analyzers
    "AbstractResourceAnalyzer",
    "AnalyzerRegistry",
    "CpuWasteAnalyzer",
    "MemoryWasteAnalyzer",
    "MRMemoryWasteAnalyzer",
    "get_default_registry",
    # Models
    "AppConfig",
    "Category",
    "Chart",
    "DetectorConfig",
    "DetectorResult",
    "DiagnosisItem",
    "DiagnosisReport",
    "DiagnosticArtifact",
    "MetricPoint",
    # Errors
    "PayloadError",
    "ValidationError",
]
