"""
Diagnosis orchestration.

The orchestrator matches the detector results of one job execution against
the analyzer registry, runs every applicable analyzer and assembles the
non-absent artifacts into an ordered ``DiagnosisReport``.

A category whose analyzer returns nothing, or fails outright, is left out of
the report; it never prevents the other categories from being reported.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Tuple

from ..analyzers.registry import AnalyzerRegistry, RegistryEntry, get_default_registry
from ..models.config import DetectorConfig
from ..models.findings import DetectorResult
from ..models.results import DiagnosisItem, DiagnosisReport
from ..validation import ErrorSeverity, handle_error

logger = logging.getLogger(__name__)


class DiagnosisOrchestrator:
    """
    Runs the registered analyzers over the detector results of a job.

    The orchestrator keeps no per-request state, so one instance can serve
    concurrent diagnoses.
    """

    def __init__(
        self,
        registry: Optional[AnalyzerRegistry] = None,
        parallel: bool = False,
        max_workers: int = 4,
        thread_name_prefix: str = "DiagnosisWorker",
    ):
        """
        Args:
            registry: Analyzers to run; defaults to the process-wide registry.
            parallel: Run analyzers on a thread pool instead of sequentially.
            max_workers: Maximum pool size when ``parallel`` is set.
            thread_name_prefix: Name prefix of pool threads.
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.registry = registry if registry is not None else get_default_registry()
        self.parallel = parallel
        self.max_workers = max_workers
        self.thread_name_prefix = thread_name_prefix

    def diagnose(
        self,
        job_id: str,
        results: Iterable[DetectorResult],
        config: DetectorConfig,
    ) -> DiagnosisReport:
        """
        Diagnose one job execution.

        Args:
            job_id: Identifier of the job execution.
            results: Detector results of the job, at most one per category.
            config: Threshold configuration of the job execution.

        Returns:
            The report, with items sorted by analyzer priority then category.
        """
        selected = self._select(job_id, results)
        if not selected:
            logger.info(f"No applicable detector results for job {job_id}")
            return DiagnosisReport(job_id=job_id, items=())

        if self.parallel and len(selected) > 1:
            workers = min(self.max_workers, len(selected))
            logger.debug(f"Running {len(selected)} analyzers for job {job_id} on {workers} threads")
            with ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix=self.thread_name_prefix
            ) as executor:
                futures = [
                    executor.submit(self._run_entry, entry, result, config, job_id)
                    for entry, result in selected
                ]
                outcomes = [future.result() for future in futures]
        else:
            outcomes = [
                self._run_entry(entry, result, config, job_id) for entry, result in selected
            ]

        ranked: List[Tuple[Tuple[int, str], DiagnosisItem]] = [
            (entry.sort_key, item)
            for (entry, _), item in zip(selected, outcomes)
            if item is not None
        ]
        ranked.sort(key=lambda pair: pair[0])
        items = tuple(item for _, item in ranked)

        logger.info(
            f"Diagnosis of job {job_id} produced {len(items)} of {len(selected)} "
            f"applicable categories: {[item.category for item in items]}"
        )
        return DiagnosisReport(job_id=job_id, items=items)

    def _select(
        self, job_id: str, results: Iterable[DetectorResult]
    ) -> List[Tuple[RegistryEntry, DetectorResult]]:
        """Pair every registry entry with the detector result of its category."""
        by_category: Dict[str, DetectorResult] = {}
        for result in results:
            if result.category not in self.registry:
                logger.debug(f"No analyzer registered for category '{result.category}' (job {job_id})")
                continue
            if result.category in by_category:
                logger.warning(
                    f"Job {job_id} has more than one '{result.category}' result; using the first"
                )
                continue
            by_category[result.category] = result

        return [
            (entry, by_category[entry.category])
            for entry in self.registry
            if entry.category in by_category
        ]

    @staticmethod
    def _run_entry(
        entry: RegistryEntry,
        result: DetectorResult,
        config: DetectorConfig,
        job_id: str,
    ) -> Optional[DiagnosisItem]:
        analyzer = entry.analyzer
        try:
            artifact = analyzer.analyze(result, config, job_id)
            if artifact is None:
                return None
            return DiagnosisItem(
                category=entry.category,
                display_type=analyzer.display_type(),
                short_label=analyzer.short_label(),
                explanation=analyzer.explain(artifact),
                artifact=artifact,
            )
        except Exception as e:
            handle_error(
                error=e,
                context=f"'{entry.category}' analyzer for job {job_id}",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            return None


def diagnose(
    job_id: str,
    results: Iterable[DetectorResult],
    config: DetectorConfig,
    registry: Optional[AnalyzerRegistry] = None,
) -> DiagnosisReport:
    """Diagnose a job sequentially with the given (or default) registry."""
    return DiagnosisOrchestrator(registry=registry).diagnose(job_id, results, config)
