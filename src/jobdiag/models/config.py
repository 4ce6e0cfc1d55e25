"""
Configuration data models.

This module contains the threshold groups read by the analyzers and the
application-level settings loaded from `config.toml`.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MRMemWasteConfig:
    """
    Thresholds for MapReduce memory waste, loaded from `[detector.mr_memory_waste]`.
    """

    # Waste percentage (0-100) above which map tasks are considered wasteful.
    map_threshold: float = 40.0
    # Waste percentage (0-100) above which reduce tasks are considered wasteful.
    reduce_threshold: float = 40.0


@dataclass(frozen=True)
class MemWasteConfig:
    """
    Thresholds for Spark executor memory waste, loaded from `[detector.memory_waste]`.
    """

    threshold: float = 40.0


@dataclass(frozen=True)
class CpuWasteConfig:
    """
    Thresholds for Spark CPU waste, loaded from `[detector.cpu_waste]`.
    """

    executor_threshold: float = 50.0
    driver_threshold: float = 95.0


@dataclass(frozen=True)
class DetectorConfig:
    """
    All threshold groups of one job execution. Read-only to analyzers.
    """

    mr_mem_waste: MRMemWasteConfig = field(default_factory=MRMemWasteConfig)
    mem_waste: MemWasteConfig = field(default_factory=MemWasteConfig)
    cpu_waste: CpuWasteConfig = field(default_factory=CpuWasteConfig)


@dataclass(frozen=True)
class DiagnosisSettings:
    """
    Orchestrator settings, loaded from `[diagnosis]`.
    """

    # Run analyzers on a thread pool instead of sequentially.
    parallel: bool = False
    # Upper bound on pool threads when `parallel` is set.
    max_workers: int = 4


@dataclass(frozen=True)
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    detector: DetectorConfig = field(default_factory=DetectorConfig)
    diagnosis: DiagnosisSettings = field(default_factory=DiagnosisSettings)
    log_level: str = "INFO"
