"""
Defines the abstract contract shared by all resource analyzers.

An analyzer owns one diagnosis category. It turns the typed finding of that
category plus the job's threshold configuration into a ``DiagnosticArtifact``,
and knows how to explain and label the artifact it produced.

The public entry point ``analyze`` is implemented here once: it checks the
category tag, builds the typed finding and only then hands over to the
subclass. Payloads that do not fit are reported as absent rather than raised,
so a single bad category never breaks a whole diagnosis.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional, Type

from ..models.config import DetectorConfig
from ..models.findings import DetectorResult
from ..models.results import DiagnosticArtifact
from ..validation import PayloadError

logger = logging.getLogger(__name__)


class AbstractResourceAnalyzer(ABC):
    """
    Abstract base class for resource analyzers.

    Subclasses set ``finding_type`` to the finding class of their category and
    implement the metadata methods, ``build_artifact`` and ``explain``.
    Analyzers hold no per-request state, so one instance can serve any number
    of concurrent diagnoses.
    """

    finding_type: ClassVar[Type[Any]]

    @abstractmethod
    def category(self) -> str:
        """
        Returns the stable category identifier this analyzer owns.

        The orchestrator matches it against the category tag of detector results.
        """
        pass

    @abstractmethod
    def display_type(self) -> str:
        """Returns the rendering hint passed through to the UI layer."""
        pass

    @abstractmethod
    def priority(self) -> int:
        """
        Returns the ordering value of this analyzer's row in a report.

        Lower values come first; ties are broken by category.
        """
        pass

    @abstractmethod
    def short_label(self) -> str:
        """Returns the stable display title of this analyzer's row."""
        pass

    @abstractmethod
    def build_artifact(
        self, finding: Any, config: DetectorConfig, job_id: str
    ) -> Optional[DiagnosticArtifact]:
        """
        Builds the artifact from an already typed finding.

        Args:
            finding: Instance of ``finding_type``.
            config: Threshold configuration of the job execution.
            job_id: Identifier of the job execution, for logging.

        Returns:
            The artifact, or None when the finding holds no usable data.
        """
        pass

    @abstractmethod
    def explain(self, artifact: DiagnosticArtifact) -> str:
        """
        Renders the explanation text of an artifact.

        Implementations only format strings already stored in ``artifact.vars``.
        """
        pass

    def analyze(
        self, result: DetectorResult, config: DetectorConfig, job_id: str
    ) -> Optional[DiagnosticArtifact]:
        """
        Produces the diagnostic artifact for one detector result.

        Args:
            result: Detector result whose category must match ``category()``.
            config: Threshold configuration of the job execution.
            job_id: Identifier of the job execution.

        Returns:
            The artifact, or None if the result belongs to another category,
            its payload does not match the expected shape, it holds no data,
            or its chart values overflow.
        """
        if result.category != self.category():
            logger.warning(
                f"{self.__class__.__name__} refused a '{result.category}' result "
                f"for job {job_id}; it only handles '{self.category()}'"
            )
            return None

        try:
            finding = self.finding_type.from_payload(result.data)
        except PayloadError as e:
            logger.warning(
                f"Skipping '{self.category()}' diagnosis for job {job_id}: malformed payload ({e})"
            )
            return None

        artifact = self.build_artifact(finding, config, job_id)
        if artifact is None:
            logger.info(f"No '{self.category()}' data to diagnose for job {job_id}")
            return None
        if not all(chart.is_finite for chart in artifact.charts):
            # Finite inputs can still overflow once combined, e.g. cores * run time.
            logger.warning(
                f"Skipping '{self.category()}' diagnosis for job {job_id}: chart values out of range"
            )
            return None
        return artifact
