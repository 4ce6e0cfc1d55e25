"""
Diagnosis orchestration for the jobdiag package.

This module turns the detector results of one job execution into an ordered
diagnosis report.
"""

from .orchestrator import DiagnosisOrchestrator, diagnose

__all__ = [
    "DiagnosisOrchestrator",
    "diagnose",
]
