"""
Spark CPU waste analyzer.

For every executor, compares the CPU time its tasks actually consumed with
the core time the executor held (cores times executor lifetime). As with the
memory analyzers, the waste percentages and the verdict are taken from the
detector as-is.
"""

from typing import Optional

from ..models.chart import KEY_COLOR, PLAIN_COLOR, Chart, MetricPoint, SeriesInfo, ValueInfo
from ..models.config import DetectorConfig
from ..models.findings import Category, CpuWasteFinding
from ..models.results import DiagnosticArtifact
from ..units import format_percent, transfer_ms_to_seconds
from .base import AbstractResourceAnalyzer

COMPUTE_SERIES = "compute"
IDLE_SERIES = "idle"


class CpuWasteAnalyzer(AbstractResourceAnalyzer):
    """CPU time used versus CPU time held by the executors of a Spark application."""

    finding_type = CpuWasteFinding

    def category(self) -> str:
        return Category.CPU_WASTE.value

    def display_type(self) -> str:
        return "cpuChart"

    def priority(self) -> int:
        return 1

    def short_label(self) -> str:
        return "Spark CPU waste"

    def build_artifact(
        self, finding: CpuWasteFinding, config: DetectorConfig, job_id: str
    ) -> Optional[DiagnosticArtifact]:
        if not finding.executor_usages:
            return None

        points = []
        for usage in finding.executor_usages:
            held_ms = finding.executor_cores * usage.run_time_ms
            points.append(
                MetricPoint(
                    x_value=str(usage.executor_id),
                    y_values=(
                        ValueInfo(transfer_ms_to_seconds(usage.compute_time_ms), COMPUTE_SERIES),
                        ValueInfo(transfer_ms_to_seconds(held_ms - usage.compute_time_ms), IDLE_SERIES),
                    ),
                )
            )
        chart = Chart(
            description="Consumed and idle CPU time of executors",
            unit="s",
            x_label="executor id",
            y_label="cpu time",
            series_legend={
                COMPUTE_SERIES: SeriesInfo("Compute time", KEY_COLOR),
                IDLE_SERIES: SeriesInfo("Idle time", PLAIN_COLOR),
            },
            points=tuple(points),
        )

        thresholds = config.cpu_waste
        vars = {
            "executorWastePercent": format_percent(finding.executor_waste_percent),
            "driverWastePercent": format_percent(finding.driver_waste_percent),
            "executorThreshold": format_percent(thresholds.executor_threshold),
            "driverThreshold": format_percent(thresholds.driver_threshold),
            "executorCores": str(finding.executor_cores),
        }
        return DiagnosticArtifact(abnormal=finding.abnormal, charts=(chart,), vars=vars)

    def explain(self, artifact: DiagnosticArtifact) -> str:
        return (
            "CPU waste rule:\n"
            "  total CPU time = sum(executor cores * executor run time)\n"
            "  consumed CPU time = sum(task compute time)\n"
            "  wasted CPU percentage = (total CPU time - consumed CPU time) / total CPU time\n"
            "  CPU is considered wasted when executor waste exceeds {executorThreshold} "
            "or driver waste exceeds {driverThreshold}."
        ).format(
            executorThreshold=artifact.vars.get("executorThreshold", ""),
            driverThreshold=artifact.vars.get("driverThreshold", ""),
        )
