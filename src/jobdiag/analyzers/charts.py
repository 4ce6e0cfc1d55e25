"""
Chart builders shared by the memory analyzers.

Both the MapReduce and the Spark memory analyzers draw the same picture: for
every task or executor, the peak memory it used stacked on the memory it was
allocated but never touched.
"""

from typing import Dict, Iterable, Tuple

from ..models.chart import KEY_COLOR, PLAIN_COLOR, Chart, MetricPoint, SeriesInfo, ValueInfo
from ..units import transfer_mb_to_gb

PEAK_SERIES = "peak"
FREE_SERIES = "free"


def peak_memory_legend() -> Dict[str, SeriesInfo]:
    return {
        PEAK_SERIES: SeriesInfo("Peak memory", KEY_COLOR),
        FREE_SERIES: SeriesInfo("Free memory", PLAIN_COLOR),
    }


def build_peak_memory_chart(
    description: str,
    x_label: str,
    peaks: Iterable[Tuple[int, float]],
    allocated_mb: float,
) -> Tuple[Chart, float]:
    """
    Build a peak-versus-free memory chart.

    Args:
        description: Chart caption.
        x_label: Label of the x axis (e.g. "task id").
        peaks: ``(id, peak_used_mb)`` pairs, one per task or executor.
        allocated_mb: Memory allocated to each task or executor, in MB.

    Returns:
        A tuple of the chart (values in GB) and the largest peak in MB.
        The largest peak is 0 when ``peaks`` is empty.
    """
    points = []
    peak_used_mb = None
    for point_id, peak_mb in peaks:
        # Free memory is not clamped: a task exceeding its allocation shows
        # up as a negative value.
        points.append(
            MetricPoint(
                x_value=str(point_id),
                y_values=(
                    ValueInfo(transfer_mb_to_gb(peak_mb), PEAK_SERIES),
                    ValueInfo(transfer_mb_to_gb(allocated_mb - peak_mb), FREE_SERIES),
                ),
            )
        )
        peak_used_mb = peak_mb if peak_used_mb is None else max(peak_used_mb, peak_mb)

    chart = Chart(
        description=description,
        unit="GB",
        x_label=x_label,
        y_label="memory",
        series_legend=peak_memory_legend(),
        points=tuple(points),
    )
    return chart, peak_used_mb if peak_used_mb is not None else 0.0
