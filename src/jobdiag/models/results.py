"""
Diagnosis result data models.

A ``DiagnosticArtifact`` is what a single analyzer produces for one category.
The orchestrator wraps each artifact into a ``DiagnosisItem`` together with
the analyzer's display metadata and explanation, and collects the items into
the ordered ``DiagnosisReport`` handed to the report renderer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

from .chart import Chart


@dataclass(frozen=True)
class DiagnosticArtifact:
    """
    Output of one analyzer.

    Attributes:
        abnormal: Verdict reported by the upstream detector.
        charts: Supporting charts, possibly empty.
        vars: Pre-formatted display strings (percentages, sizes) keyed by
              stable names; explanation text is rendered from these only.
    """

    abnormal: bool
    charts: Tuple[Chart, ...] = ()
    vars: Mapping[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "abnormal": self.abnormal,
            "charts": [c.to_dict() for c in self.charts],
            "vars": dict(self.vars),
        }


@dataclass(frozen=True)
class DiagnosisItem:
    """One row of a diagnosis report."""

    category: str
    display_type: str
    short_label: str
    explanation: str
    artifact: DiagnosticArtifact

    @property
    def abnormal(self) -> bool:
        return self.artifact.abnormal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "displayType": self.display_type,
            "shortLabel": self.short_label,
            "explanation": self.explanation,
            "artifact": self.artifact.to_dict(),
        }


@dataclass(frozen=True)
class DiagnosisReport:
    """
    Ordered diagnosis of one job execution.

    Items are sorted by analyzer priority, then by category.
    """

    job_id: str
    items: Tuple[DiagnosisItem, ...] = ()

    @property
    def abnormal(self) -> bool:
        """True when any category was judged abnormal."""
        return any(item.abnormal for item in self.items)

    def categories(self) -> List[str]:
        return [item.category for item in self.items]

    def get(self, category: str) -> DiagnosisItem:
        for item in self.items:
            if item.category == category:
                return item
        raise KeyError(category)

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobId": self.job_id,
            "abnormal": self.abnormal,
            "items": [item.to_dict() for item in self.items],
        }
