"""
Unit tests for the shared peak-versus-free memory chart builder.
"""

import random

import pytest

from jobdiag.analyzers.charts import FREE_SERIES, PEAK_SERIES, build_peak_memory_chart


@pytest.mark.unit
class TestBuildPeakMemoryChart:
    """Test cases for build_peak_memory_chart."""

    def test_one_point_per_id_in_input_order(self):
        chart, _ = build_peak_memory_chart(
            "caption", "task id", [(5, 100.0), (3, 200.0), (9, 50.0)], 1024.0
        )

        assert [p.x_value for p in chart.points] == ["5", "3", "9"]
        assert [v.series_key for v in chart.points[0].y_values] == [PEAK_SERIES, FREE_SERIES]

    def test_family_peak_is_true_maximum(self):
        rng = random.Random(7)
        for _ in range(20):
            peaks = [(i, rng.uniform(0, 4096)) for i in range(rng.randint(1, 30))]

            _, family_peak = build_peak_memory_chart("caption", "task id", peaks, 4096.0)

            values = [peak for _, peak in peaks]
            assert all(family_peak >= v for v in values)
            assert family_peak in values

    def test_peak_plus_free_is_allocation(self):
        rng = random.Random(11)
        peaks = [(i, rng.uniform(0, 8192)) for i in range(25)]

        chart, _ = build_peak_memory_chart("caption", "task id", peaks, 6144.0)

        for point in chart.points:
            assert point.value_of(PEAK_SERIES) + point.value_of(FREE_SERIES) == pytest.approx(6.0)

    def test_empty_input(self):
        chart, family_peak = build_peak_memory_chart("caption", "task id", [], 1024.0)

        assert chart.is_empty
        assert family_peak == 0.0
