"""
MapReduce memory waste analyzer.

Visualizes, for every map and reduce task, the peak memory the task used
against the container memory it was given, and explains the memory-time rule
the detector applied. The waste percentages and the abnormal verdict come
from the detector unchanged; nothing here recomputes them from the charts.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..models.chart import Chart
from ..models.config import DetectorConfig
from ..models.findings import Category, MemoryWasteFinding, TaskMemoryPeak
from ..models.results import DiagnosticArtifact
from ..units import format_gb, format_percent
from .base import AbstractResourceAnalyzer
from .charts import build_peak_memory_chart

logger = logging.getLogger(__name__)

MAP_FAMILY = "map"
REDUCE_FAMILY = "reduce"


class MRMemoryWasteAnalyzer(AbstractResourceAnalyzer):
    """Memory waste of MapReduce map and reduce tasks."""

    finding_type = MemoryWasteFinding

    def category(self) -> str:
        return Category.MR_MEMORY_WASTE.value

    def display_type(self) -> str:
        return "memoryChart"

    def priority(self) -> int:
        return 3

    def short_label(self) -> str:
        return "MapReduce memory waste"

    def build_artifact(
        self, finding: MemoryWasteFinding, config: DetectorConfig, job_id: str
    ) -> Optional[DiagnosticArtifact]:
        if not finding.map_task_peaks and not finding.reduce_task_peaks:
            return None

        vars: Dict[str, str] = {}
        charts: List[Chart] = []
        families: Tuple[Tuple[str, Tuple[TaskMemoryPeak, ...], float], ...] = (
            (MAP_FAMILY, finding.map_task_peaks, finding.map_allocated_mb),
            (REDUCE_FAMILY, finding.reduce_task_peaks, finding.reduce_allocated_mb),
        )
        for family, task_peaks, allocated_mb in families:
            chart, family_peak_used = build_peak_memory_chart(
                description=f"Peak and allocated memory of {family} tasks",
                x_label="task id",
                peaks=((p.task_id, p.peak_used_mb) for p in task_peaks),
                allocated_mb=allocated_mb,
            )
            vars[f"{family}Peak"] = format_gb(family_peak_used)
            if chart.is_empty:
                logger.debug(f"Job {job_id} has no {family} tasks; omitting {family} chart")
                continue
            charts.append(chart)

        thresholds = config.mr_mem_waste
        vars["mapWastePercent"] = format_percent(finding.map_waste_percent)
        vars["reduceWastePercent"] = format_percent(finding.reduce_waste_percent)
        vars["mapMemory"] = format_gb(finding.map_allocated_mb)
        vars["reduceMemory"] = format_gb(finding.reduce_allocated_mb)
        vars["mapThreshold"] = format_percent(thresholds.map_threshold)
        vars["reduceThreshold"] = format_percent(thresholds.reduce_threshold)

        return DiagnosticArtifact(
            abnormal=finding.abnormal,
            charts=tuple(charts),
            vars=vars,
        )

    def explain(self, artifact: DiagnosticArtifact) -> str:
        return (
            "Memory waste rule:\n"
            "  total memory-time = sum(map/reduce allocated memory * map/reduce run time)\n"
            "  consumed memory-time = sum(map/reduce peak memory * map/reduce run time)\n"
            "  wasted memory percentage = (total memory-time - consumed memory-time) / total memory-time\n"
            "  Memory is considered wasted when map waste exceeds {mapThreshold} "
            "or reduce waste exceeds {reduceThreshold}."
        ).format(
            mapThreshold=artifact.vars.get("mapThreshold", ""),
            reduceThreshold=artifact.vars.get("reduceThreshold", ""),
        )
