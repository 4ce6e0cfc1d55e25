"""
Exports report charts as plot files.

Each chart of a diagnosis report is flattened into a Polars DataFrame and
drawn as a stacked bar chart with Plotly, one bar per x category (task id,
executor id) and one colour per series, using the colours of the chart
legend. Plots are saved as interactive HTML files and, if Kaleido is
installed, as static PNG images.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

# Third-party library imports
import plotly.express as px
import plotly.graph_objects as go

from .models.chart import Chart
from .models.results import DiagnosisReport

logger = logging.getLogger(__name__)


def _safe_name(value: str) -> str:
    return re.sub(r"[^\w.-]+", "_", value).strip("_") or "job"


def _save_plotly_figure(fig: go.Figure, base_filename: str, output_dir: Path) -> Optional[Path]:
    """
    Saves a Plotly figure to both HTML and, if possible, PNG formats.

    Args:
        fig: The Plotly figure object to save.
        base_filename: The base name for the output files (without extension).
        output_dir: The directory to save the files in.

    Returns:
        Path of the HTML file, or None if it could not be written.
    """
    plot_filename_html = output_dir / f"{base_filename}.html"
    try:
        fig.write_html(plot_filename_html)
        logger.info(f"Interactive plot saved to: {plot_filename_html}")
    except Exception as e:
        logger.error(
            f"Failed to save plot {plot_filename_html} using Plotly: {e}",
            exc_info=True,
        )
        return None

    # Attempt to save a static PNG image if Kaleido is installed.
    try:
        plot_filename_png = output_dir / f"{base_filename}.png"
        fig.write_image(plot_filename_png, width=1200, height=600)
        logger.info(f"Static plot saved to: {plot_filename_png}")
    except Exception as e_kaleido:
        # Non-critical: HTML output is already on disk.
        logger.warning(
            f"Failed to save static plot to PNG (Kaleido might be missing or misconfigured): {e_kaleido}. "
            f"To enable PNG export, install Kaleido: `pip install jobdiag[export]`"
        )
    return plot_filename_html


def build_chart_figure(chart: Chart, title: Optional[str] = None) -> Optional[go.Figure]:
    """
    Build a stacked bar figure from a chart.

    Args:
        chart: The chart to draw.
        title: Figure title; defaults to the chart description.

    Returns:
        The figure, or None if the chart has no points.
    """
    df_chart = chart.to_dataframe()
    if df_chart.is_empty():
        logger.warning(f"Chart '{chart.description}' has no points. Skipping.")
        return None

    color_map = {info.label: info.color for info in chart.series_legend.values()}
    x_order = list(dict.fromkeys(df_chart["x"].to_list()))
    label_order = [info.label for info in chart.series_legend.values()]

    fig = px.bar(
        df_chart.to_pandas(),  # Plotly Express prefers Pandas.
        x="x",
        y="value",
        color="label",
        color_discrete_map=color_map,
        category_orders={"x": x_order, "label": label_order},
        barmode="stack",
        title=title or chart.description,
        labels={
            "x": chart.x_label,
            "value": f"{chart.y_label} ({chart.unit})",
            "label": "Series",
        },
    )
    fig.update_xaxes(type="category")
    fig.update_layout(
        legend_title_text="Series",
        xaxis_title=chart.x_label,
        yaxis_title=f"{chart.y_label} ({chart.unit})",
    )
    return fig


def plot_report(report: DiagnosisReport, output_dir: Path) -> List[Path]:
    """
    Save every chart of a report as a plot file.

    Args:
        report: The diagnosis report.
        output_dir: Directory for the plot files; created if missing.

    Returns:
        Paths of the HTML files written, in report order.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    job_name = _safe_name(report.job_id)

    written: List[Path] = []
    for item in report.items:
        for index, chart in enumerate(item.artifact.charts):
            fig = build_chart_figure(chart, title=f"{item.short_label} - {chart.description}")
            if fig is None:
                continue
            base_filename = f"{job_name}_{item.category}_{index}"
            html_path = _save_plotly_figure(fig, base_filename, output_dir)
            if html_path is not None:
                written.append(html_path)

    logger.info(f"Saved {len(written)} plot(s) for job {report.job_id} to {output_dir}")
    return written
