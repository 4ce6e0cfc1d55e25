"""
Spark executor memory waste analyzer.
"""

from typing import Optional

from ..models.config import DetectorConfig
from ..models.findings import Category, ExecutorMemoryWasteFinding
from ..models.results import DiagnosticArtifact
from ..units import format_gb, format_percent
from .base import AbstractResourceAnalyzer
from .charts import build_peak_memory_chart


class MemoryWasteAnalyzer(AbstractResourceAnalyzer):
    """Peak versus allocated memory of every executor of a Spark application."""

    finding_type = ExecutorMemoryWasteFinding

    def category(self) -> str:
        return Category.MEMORY_WASTE.value

    def display_type(self) -> str:
        return "memoryChart"

    def priority(self) -> int:
        return 2

    def short_label(self) -> str:
        return "Spark memory waste"

    def build_artifact(
        self, finding: ExecutorMemoryWasteFinding, config: DetectorConfig, job_id: str
    ) -> Optional[DiagnosticArtifact]:
        if not finding.executor_peaks:
            return None

        chart, executor_peak_used = build_peak_memory_chart(
            description="Peak and allocated memory of executors",
            x_label="executor id",
            peaks=((p.executor_id, p.peak_used_mb) for p in finding.executor_peaks),
            allocated_mb=finding.executor_allocated_mb,
        )
        vars = {
            "wastePercent": format_percent(finding.waste_percent),
            "executorMemory": format_gb(finding.executor_allocated_mb),
            "executorPeak": format_gb(executor_peak_used),
            "threshold": format_percent(config.mem_waste.threshold),
        }
        return DiagnosticArtifact(abnormal=finding.abnormal, charts=(chart,), vars=vars)

    def explain(self, artifact: DiagnosticArtifact) -> str:
        return (
            "Memory waste rule:\n"
            "  total memory-time = sum(executor allocated memory * executor run time)\n"
            "  consumed memory-time = sum(executor peak memory * executor run time)\n"
            "  wasted memory percentage = (total memory-time - consumed memory-time) / total memory-time\n"
            "  Memory is considered wasted when the wasted percentage exceeds {threshold}."
        ).format(threshold=artifact.vars.get("threshold", ""))
