"""
Data models for the diagnosis framework.

Configuration Models:
- Threshold groups per diagnosis category
- Orchestrator and logging settings

Finding Models:
- Detector results as received from the detection pipeline
- Typed, category-specific findings built from their payloads

Chart Models:
- Categorical charts, legend entries and metric points

Result Models:
- Diagnostic artifacts, report items and the final report

All models are frozen dataclasses created per diagnosis request.
"""

from .chart import KEY_COLOR, PLAIN_COLOR, Chart, MetricPoint, SeriesInfo, ValueInfo
from .config import (
    AppConfig,
    CpuWasteConfig,
    DetectorConfig,
    DiagnosisSettings,
    MemWasteConfig,
    MRMemWasteConfig,
)
from .findings import (
    FINDING_TYPES,
    Category,
    CpuWasteFinding,
    DetectorResult,
    ExecutorCpuUsage,
    ExecutorMemoryPeak,
    ExecutorMemoryWasteFinding,
    MemoryWasteFinding,
    TaskMemoryPeak,
    TypedFinding,
    parse_finding,
)
from .results import DiagnosisItem, DiagnosisReport, DiagnosticArtifact

__all__ = [
    # Chart
    "KEY_COLOR",
    "PLAIN_COLOR",
    "Chart",
    "MetricPoint",
    "SeriesInfo",
    "ValueInfo",
    # Configuration
    "AppConfig",
    "CpuWasteConfig",
    "DetectorConfig",
    "DiagnosisSettings",
    "MemWasteConfig",
    "MRMemWasteConfig",
    # Findings
    "FINDING_TYPES",
    "Category",
    "CpuWasteFinding",
    "DetectorResult",
    "ExecutorCpuUsage",
    "ExecutorMemoryPeak",
    "ExecutorMemoryWasteFinding",
    "MemoryWasteFinding",
    "TaskMemoryPeak",
    "TypedFinding",
    "parse_finding",
    # Results
    "DiagnosisItem",
    "DiagnosisReport",
    "DiagnosticArtifact",
]
