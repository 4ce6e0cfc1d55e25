"""
Unit tests for the diagnosis orchestrator.
"""

import json
from typing import Any, Mapping

import pytest

from jobdiag.analyzers import AbstractResourceAnalyzer, AnalyzerRegistry, build_default_registry
from jobdiag.diagnosis import DiagnosisOrchestrator, diagnose
from jobdiag.models.config import DetectorConfig
from jobdiag.models.findings import DetectorResult
from jobdiag.models.results import DiagnosticArtifact
from jobdiag.validation import PayloadError


class _PassThroughFinding:
    """Finding type accepting any mapping with an 'abnormal' flag."""

    def __init__(self, abnormal: bool):
        self.abnormal = abnormal

    @classmethod
    def from_payload(cls, data: Any) -> "_PassThroughFinding":
        if not isinstance(data, Mapping) or "abnormal" not in data:
            raise PayloadError("missing required field 'abnormal'", "stub")
        return cls(bool(data["abnormal"]))


class _StubAnalyzer(AbstractResourceAnalyzer):
    finding_type = _PassThroughFinding

    def __init__(self, category: str, priority: int, fail: bool = False):
        self._category = category
        self._priority = priority
        self._fail = fail

    def category(self) -> str:
        return self._category

    def display_type(self) -> str:
        return "stubChart"

    def priority(self) -> int:
        return self._priority

    def short_label(self) -> str:
        return f"stub {self._category}"

    def build_artifact(self, finding, config, job_id):
        if self._fail:
            raise RuntimeError("analyzer bug")
        return DiagnosticArtifact(abnormal=finding.abnormal, vars={"category": self._category})

    def explain(self, artifact: DiagnosticArtifact) -> str:
        return f"explanation of {artifact.vars['category']}"


@pytest.mark.unit
class TestDiagnosisOrchestrator:
    """Test cases for DiagnosisOrchestrator."""

    def test_full_report(self, detector_results, detector_config):
        report = DiagnosisOrchestrator().diagnose("job_1", detector_results, detector_config)

        assert report.job_id == "job_1"
        assert report.categories() == ["cpu_waste", "memory_waste", "mr_memory_waste"]
        item = report.get("mr_memory_waste")
        assert item.display_type == "memoryChart"
        assert item.short_label == "MapReduce memory waste"
        assert "exceeds 20.00%" in item.explanation
        assert report.abnormal

    def test_ordering_ignores_registration_and_input_order(self, detector_config):
        registry = AnalyzerRegistry([_StubAnalyzer("late", 3), _StubAnalyzer("early", 1)])
        results = [
            DetectorResult("late", {"abnormal": False}),
            DetectorResult("early", {"abnormal": True}),
        ]

        report = DiagnosisOrchestrator(registry).diagnose("job_1", results, detector_config)

        assert report.categories() == ["early", "late"]

    def test_ties_broken_by_category(self, detector_config):
        registry = AnalyzerRegistry([_StubAnalyzer("zeta", 2), _StubAnalyzer("alpha", 2)])
        results = [DetectorResult("zeta", {"abnormal": False}), DetectorResult("alpha", {"abnormal": False})]

        report = DiagnosisOrchestrator(registry).diagnose("job_1", results, detector_config)

        assert report.categories() == ["alpha", "zeta"]

    def test_malformed_result_is_excluded(self, detector_results, detector_config):
        orchestrator = DiagnosisOrchestrator()
        full = orchestrator.diagnose("job_1", detector_results, detector_config)

        broken = list(detector_results)
        broken[0] = DetectorResult("mr_memory_waste", {"mapTaskMemPeakList": []})
        partial = orchestrator.diagnose("job_1", broken, detector_config)

        assert len(partial) == len(full) - 1
        assert "mr_memory_waste" not in partial.categories()

    def test_failing_analyzer_is_isolated(self, detector_config):
        registry = AnalyzerRegistry(
            [_StubAnalyzer("broken", 1, fail=True), _StubAnalyzer("healthy", 2)]
        )
        results = [
            DetectorResult("broken", {"abnormal": True}),
            DetectorResult("healthy", {"abnormal": False}),
        ]

        report = DiagnosisOrchestrator(registry).diagnose("job_1", results, detector_config)

        assert report.categories() == ["healthy"]

    def test_missing_category_is_not_invoked(self, detector_config, cpu_payload):
        report = DiagnosisOrchestrator().diagnose(
            "job_1", [DetectorResult("cpu_waste", cpu_payload)], detector_config
        )

        assert report.categories() == ["cpu_waste"]

    def test_unknown_category_is_ignored(self, detector_config):
        report = DiagnosisOrchestrator().diagnose(
            "job_1", [DetectorResult("shuffle_skew", {"abnormal": True})], detector_config
        )

        assert len(report) == 0
        assert not report.abnormal

    def test_no_results(self, detector_config):
        report = DiagnosisOrchestrator().diagnose("job_1", [], detector_config)

        assert report.items == ()

    def test_first_duplicate_wins(self, detector_config, cpu_payload):
        second = dict(cpu_payload, abnormal=True)
        results = [DetectorResult("cpu_waste", cpu_payload), DetectorResult("cpu_waste", second)]

        report = DiagnosisOrchestrator().diagnose("job_1", results, detector_config)

        assert len(report) == 1
        assert report.get("cpu_waste").abnormal is False

    def test_parallel_matches_sequential(self, detector_results, detector_config):
        sequential = DiagnosisOrchestrator(build_default_registry()).diagnose(
            "job_1", detector_results, detector_config
        )
        parallel = DiagnosisOrchestrator(
            build_default_registry(), parallel=True, max_workers=3
        ).diagnose("job_1", detector_results, detector_config)

        assert json.dumps(parallel.to_dict()) == json.dumps(sequential.to_dict())

    def test_repeated_runs_are_identical(self, detector_results):
        config = DetectorConfig()

        first = diagnose("job_1", detector_results, config)
        second = diagnose("job_1", detector_results, config)

        assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())

    def test_invalid_max_workers(self):
        with pytest.raises(ValueError):
            DiagnosisOrchestrator(max_workers=0)
