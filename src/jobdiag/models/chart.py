"""
Chart and metric point data models.

These value objects describe a two-dimensional categorical chart: a list of
x-axis categories (task ids, executor ids, ...) and, for each category, one
value per named series. They carry no domain logic; analyzers fill them and
the report renderer or plot exporter reads them.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

import polars as pl

# Colors used by the report renderer to distinguish the series that matter
# (peak usage, compute time) from the remainder (free memory, idle time).
KEY_COLOR = "#F55E5E"
PLAIN_COLOR = "#5B8FF9"


@dataclass(frozen=True)
class SeriesInfo:
    """Legend entry for one series of a chart."""

    label: str
    color: str

    def to_dict(self) -> Dict[str, str]:
        return {"label": self.label, "color": self.color}


@dataclass(frozen=True)
class ValueInfo:
    """A single y value tagged with the series it belongs to."""

    value: float
    series_key: str

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "seriesKey": self.series_key}


@dataclass(frozen=True)
class MetricPoint:
    """
    One x-axis category with a value for every series present at it.

    Attributes:
        x_value: The category label, e.g. a task id rendered as a string.
        y_values: The values at this category, one per series key.
    """

    x_value: str
    y_values: Tuple[ValueInfo, ...] = ()

    def value_of(self, series_key: str) -> float:
        """Return the value of ``series_key`` at this point."""
        for value_info in self.y_values:
            if value_info.series_key == series_key:
                return value_info.value
        raise KeyError(f"No value for series '{series_key}' at x={self.x_value}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "xValue": self.x_value,
            "yValues": [v.to_dict() for v in self.y_values],
        }


@dataclass(frozen=True)
class Chart:
    """
    A categorical chart with a legend and one point per x category.

    Attributes:
        description: Caption shown above the chart.
        unit: Unit of every y value (e.g. "GB").
        x_label: Label of the x axis (e.g. "task id").
        y_label: Label of the y axis (e.g. "memory").
        series_legend: Legend entries keyed by series key, in display order.
        points: Chart points in x order.
    """

    description: str
    unit: str
    x_label: str
    y_label: str
    series_legend: Mapping[str, SeriesInfo] = field(default_factory=dict)
    points: Tuple[MetricPoint, ...] = ()

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0

    @property
    def is_finite(self) -> bool:
        """True if no value is NaN or infinite."""
        return all(math.isfinite(v.value) for p in self.points for v in p.y_values)

    def series_keys(self) -> List[str]:
        return list(self.series_legend.keys())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "unit": self.unit,
            "xLabel": self.x_label,
            "yLabel": self.y_label,
            "seriesLegend": {k: v.to_dict() for k, v in self.series_legend.items()},
            "points": [p.to_dict() for p in self.points],
        }

    def to_dataframe(self) -> pl.DataFrame:
        """
        Flatten the chart into a long-format DataFrame.

        Columns are ``x`` (category), ``series`` (series key), ``label``
        (legend label) and ``value``. Row order follows point order, then the
        order of values within each point.
        """
        rows: Dict[str, List[Any]] = {"x": [], "series": [], "label": [], "value": []}
        for point in self.points:
            for value_info in point.y_values:
                legend = self.series_legend.get(value_info.series_key)
                rows["x"].append(point.x_value)
                rows["series"].append(value_info.series_key)
                rows["label"].append(legend.label if legend else value_info.series_key)
                rows["value"].append(float(value_info.value))
        return pl.DataFrame(
            rows,
            schema={"x": pl.Utf8, "series": pl.Utf8, "label": pl.Utf8, "value": pl.Float64},
        )
