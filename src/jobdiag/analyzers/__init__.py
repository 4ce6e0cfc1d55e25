"""
Resource analyzers.

This package provides the analyzer contract and its implementations, one per
diagnosis category:

- MapReduce memory waste (map and reduce tasks)
- Spark memory waste (executors)
- Spark CPU waste (executors)

Analyzers are collected in an immutable registry that the orchestrator walks
in priority order. New categories are added by writing a new analyzer and
listing it in ``build_default_registry``.
"""

from .base import AbstractResourceAnalyzer
from .cpu_waste import CpuWasteAnalyzer
from .memory_waste import MemoryWasteAnalyzer
from .mr_memory_waste import MRMemoryWasteAnalyzer
from .registry import AnalyzerRegistry, RegistryEntry, build_default_registry, get_default_registry

__all__ = [
    "AbstractResourceAnalyzer",
    "CpuWasteAnalyzer",
    "MemoryWasteAnalyzer",
    "MRMemoryWasteAnalyzer",
    "AnalyzerRegistry",
    "RegistryEntry",
    "build_default_registry",
    "get_default_registry",
]
