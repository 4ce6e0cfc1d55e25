"""
Analyzer registry.

The registry pairs every diagnosis category with the analyzer that owns it
and the priority of its row in a report. It is built once, sorted by
``(priority, category)``, and never mutated afterwards.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .base import AbstractResourceAnalyzer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryEntry:
    """One registered analyzer."""

    category: str
    analyzer: AbstractResourceAnalyzer
    priority: int

    @property
    def sort_key(self) -> Tuple[int, str]:
        return (self.priority, self.category)


class AnalyzerRegistry:
    """
    Immutable, ordered collection of analyzers keyed by category.

    Iteration yields entries in report order, independent of the order the
    analyzers were passed in.
    """

    def __init__(self, analyzers: Iterable[AbstractResourceAnalyzer]):
        """
        Args:
            analyzers: Analyzer instances, at most one per category.

        Raises:
            ValueError: If two analyzers claim the same category.
        """
        by_category: Dict[str, RegistryEntry] = {}
        for analyzer in analyzers:
            entry = RegistryEntry(
                category=analyzer.category(),
                analyzer=analyzer,
                priority=analyzer.priority(),
            )
            if entry.category in by_category:
                raise ValueError(
                    f"Duplicate analyzer for category '{entry.category}': "
                    f"{by_category[entry.category].analyzer.__class__.__name__} and "
                    f"{analyzer.__class__.__name__}"
                )
            by_category[entry.category] = entry

        self._entries: Tuple[RegistryEntry, ...] = tuple(
            sorted(by_category.values(), key=lambda e: e.sort_key)
        )
        logger.debug(
            f"Analyzer registry built with categories: {[e.category for e in self._entries]}"
        )

    @property
    def entries(self) -> Tuple[RegistryEntry, ...]:
        return self._entries

    def categories(self) -> Tuple[str, ...]:
        return tuple(e.category for e in self._entries)

    def get(self, category: str) -> Optional[AbstractResourceAnalyzer]:
        for entry in self._entries:
            if entry.category == category:
                return entry.analyzer
        return None

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, category: object) -> bool:
        return any(e.category == category for e in self._entries)


# --- Process-wide default registry ---

_DEFAULT_REGISTRY: Optional[AnalyzerRegistry] = None


def build_default_registry() -> AnalyzerRegistry:
    """Create a registry holding every analyzer shipped with the package."""
    from .cpu_waste import CpuWasteAnalyzer
    from .memory_waste import MemoryWasteAnalyzer
    from .mr_memory_waste import MRMemoryWasteAnalyzer

    return AnalyzerRegistry(
        [
            MRMemoryWasteAnalyzer(),
            MemoryWasteAnalyzer(),
            CpuWasteAnalyzer(),
        ]
    )


def get_default_registry() -> AnalyzerRegistry:
    """
    Get the default registry, building it on first use.

    Returns:
        The same registry instance for the lifetime of the process.
    """
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = build_default_registry()
    return _DEFAULT_REGISTRY
