"""
Report serialization.

Renders a diagnosis report either as the JSON document consumed by the report
UI or as a plain-text summary for terminals and logs. Neither rendering
reformats numbers: the text summary prints the stored display variables.
"""

import json
from typing import List

from .models.results import DiagnosisReport


def report_to_json(report: DiagnosisReport, indent: int = 2) -> str:
    """Serialize a report to strict JSON (no NaN or Infinity) with stable key order."""
    return json.dumps(report.to_dict(), indent=indent, ensure_ascii=False, allow_nan=False)


def render_text_summary(report: DiagnosisReport) -> str:
    """
    Render a human-readable summary of a report.

    Each category gets a header line with its verdict, its display variables,
    one line per chart and the explanation text.
    """
    lines: List[str] = [f"Diagnosis of job {report.job_id}"]
    if not report.items:
        lines.append("  no resource findings")
        return "\n".join(lines)

    verdict = "ABNORMAL" if report.abnormal else "normal"
    lines.append(f"Overall: {verdict}")
    for item in report.items:
        status = "ABNORMAL" if item.abnormal else "normal"
        lines.append("")
        lines.append(f"[{status}] {item.short_label} ({item.category})")
        for key, value in item.artifact.vars.items():
            lines.append(f"  {key}: {value}")
        for chart in item.artifact.charts:
            lines.append(f"  chart: {chart.description} ({len(chart.points)} points, {chart.unit})")
        for explanation_line in item.explanation.splitlines():
            lines.append(f"  {explanation_line}")
    return "\n".join(lines)
