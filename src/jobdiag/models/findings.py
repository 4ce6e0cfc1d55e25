"""
Detector results and the typed findings they carry.

A ``DetectorResult`` is what the upstream detection pipeline hands over: a
category tag and an untyped payload. Each category owns exactly one payload
schema, modelled here as a frozen dataclass with a ``from_payload``
constructor. ``FINDING_TYPES`` maps every known category to its finding type,
so that a payload is only ever interpreted by the type its tag names.

Missing optional numbers (waste percentages reported as ``null``) are
resolved to ``0.0`` once, inside ``from_payload``, and never re-checked
downstream.
"""

import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from ..validation import PayloadError

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """Stable identifiers of the diagnosis categories known to this package."""

    MR_MEMORY_WASTE = "mr_memory_waste"
    MEMORY_WASTE = "memory_waste"
    CPU_WASTE = "cpu_waste"


@dataclass(frozen=True)
class DetectorResult:
    """
    Raw per-category finding for one job execution.

    Attributes:
        category: Category tag, e.g. "mr_memory_waste".
        data: Untyped payload, either a mapping or a JSON object string.
    """

    category: str
    data: Any

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "DetectorResult":
        """Build a result from the ``{"category": ..., "data": ...}`` wire shape."""
        if not isinstance(raw, Mapping) or "category" not in raw:
            raise ValueError(f"Detector result must be an object with a 'category', got {raw!r}")
        return cls(category=str(raw["category"]), data=raw.get("data"))


# --- Payload readers ---

_MAX_INTEGER = 2**63 - 1


def _as_mapping(data: Any, category: str) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError as e:
            raise PayloadError(f"payload is not valid JSON: {e}", category) from e
    if not isinstance(data, Mapping):
        raise PayloadError(
            f"payload must be an object, got {type(data).__name__}", category, value=data
        )
    return data


def _require(payload: Mapping[str, Any], key: str, category: str) -> Any:
    if key not in payload:
        raise PayloadError(f"missing required field '{key}'", category, field_name=key)
    return payload[key]


def _read_number(value: Any, key: str, category: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadError(
            f"field '{key}' must be a number, got {value!r}", category, field_name=key, value=value
        )
    try:
        number = float(value)
    except OverflowError as e:
        raise PayloadError(
            f"field '{key}' is out of range", category, field_name=key, value=value
        ) from e
    if not math.isfinite(number):
        raise PayloadError(
            f"field '{key}' must be finite, got {value!r}", category, field_name=key, value=value
        )
    return number


def _read_optional_number(payload: Mapping[str, Any], key: str, category: str) -> float:
    value = payload.get(key)
    if value is None:
        return 0.0
    return _read_number(value, key, category)


def _read_integer(value: Any, key: str, category: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PayloadError(
            f"field '{key}' must be an integer, got {value!r}", category, field_name=key, value=value
        )
    if abs(value) > _MAX_INTEGER:
        raise PayloadError(
            f"field '{key}' does not fit in 64 bits", category, field_name=key, value=value
        )
    return value


def _read_bool(value: Any, key: str, category: str) -> bool:
    if not isinstance(value, bool):
        raise PayloadError(
            f"field '{key}' must be a boolean, got {value!r}", category, field_name=key, value=value
        )
    return value


def _read_list(payload: Mapping[str, Any], key: str, category: str) -> List[Mapping[str, Any]]:
    # A present key holding null means "no tasks of this kind".
    value = _require(payload, key, category)
    if value is None:
        return []
    if not isinstance(value, list):
        raise PayloadError(
            f"field '{key}' must be a list, got {type(value).__name__}",
            category, field_name=key, value=value
        )
    for item in value:
        if not isinstance(item, Mapping):
            raise PayloadError(
                f"entries of '{key}' must be objects, got {item!r}",
                category, field_name=key, value=item
            )
    return value


# --- MapReduce memory waste ---


@dataclass(frozen=True)
class TaskMemoryPeak:
    """Peak memory used by one map or reduce task instance."""

    task_id: int
    peak_used_mb: float


@dataclass(frozen=True)
class MemoryWasteFinding:
    """
    Memory waste finding of a MapReduce job.

    Allocations are the fixed per-task container sizes of each family, in MB.
    Waste percentages are computed upstream on a memory-time basis.
    """

    map_task_peaks: Tuple[TaskMemoryPeak, ...]
    reduce_task_peaks: Tuple[TaskMemoryPeak, ...]
    map_allocated_mb: float
    reduce_allocated_mb: float
    map_waste_percent: float
    reduce_waste_percent: float
    abnormal: bool

    category = Category.MR_MEMORY_WASTE.value

    @classmethod
    def from_payload(cls, data: Any) -> "MemoryWasteFinding":
        category = cls.category
        payload = _as_mapping(data, category)

        def peaks(key: str) -> Tuple[TaskMemoryPeak, ...]:
            return tuple(
                TaskMemoryPeak(
                    task_id=_read_integer(_require(item, "taskId", category), "taskId", category),
                    peak_used_mb=_read_number(_require(item, "peakUsed", category), "peakUsed", category),
                )
                for item in _read_list(payload, key, category)
            )

        return cls(
            map_task_peaks=peaks("mapTaskMemPeakList"),
            reduce_task_peaks=peaks("reduceTaskMemPeakList"),
            map_allocated_mb=_read_number(_require(payload, "mapMemory", category), "mapMemory", category),
            reduce_allocated_mb=_read_number(
                _require(payload, "reduceMemory", category), "reduceMemory", category
            ),
            map_waste_percent=_read_optional_number(payload, "mapWastePercent", category),
            reduce_waste_percent=_read_optional_number(payload, "reduceWastePercent", category),
            abnormal=_read_bool(_require(payload, "abnormal", category), "abnormal", category),
        )


# --- Spark memory waste ---


@dataclass(frozen=True)
class ExecutorMemoryPeak:
    """Peak memory used by one Spark executor."""

    executor_id: int
    peak_used_mb: float


@dataclass(frozen=True)
class ExecutorMemoryWasteFinding:
    """Memory waste finding of a Spark application, per executor."""

    executor_peaks: Tuple[ExecutorMemoryPeak, ...]
    executor_allocated_mb: float
    waste_percent: float
    abnormal: bool

    category = Category.MEMORY_WASTE.value

    @classmethod
    def from_payload(cls, data: Any) -> "ExecutorMemoryWasteFinding":
        category = cls.category
        payload = _as_mapping(data, category)
        executor_peaks = tuple(
            ExecutorMemoryPeak(
                executor_id=_read_integer(_require(item, "executorId", category), "executorId", category),
                peak_used_mb=_read_number(_require(item, "peakUsed", category), "peakUsed", category),
            )
            for item in _read_list(payload, "executorPeakMemoryList", category)
        )
        return cls(
            executor_peaks=executor_peaks,
            executor_allocated_mb=_read_number(
                _require(payload, "executorMemory", category), "executorMemory", category
            ),
            waste_percent=_read_optional_number(payload, "wastePercent", category),
            abnormal=_read_bool(_require(payload, "abnormal", category), "abnormal", category),
        )


# --- Spark CPU waste ---


@dataclass(frozen=True)
class ExecutorCpuUsage:
    """CPU time consumed by the tasks of one executor versus its lifetime."""

    executor_id: int
    compute_time_ms: float
    run_time_ms: float


@dataclass(frozen=True)
class CpuWasteFinding:
    """CPU waste finding of a Spark application."""

    executor_cores: int
    executor_usages: Tuple[ExecutorCpuUsage, ...]
    executor_waste_percent: float
    driver_waste_percent: float
    abnormal: bool

    category = Category.CPU_WASTE.value

    @classmethod
    def from_payload(cls, data: Any) -> "CpuWasteFinding":
        category = cls.category
        payload = _as_mapping(data, category)
        executor_usages = tuple(
            ExecutorCpuUsage(
                executor_id=_read_integer(_require(item, "executorId", category), "executorId", category),
                compute_time_ms=_read_number(
                    _require(item, "computeTime", category), "computeTime", category
                ),
                run_time_ms=_read_number(_require(item, "runTime", category), "runTime", category),
            )
            for item in _read_list(payload, "executorCpuList", category)
        )
        return cls(
            executor_cores=_read_integer(
                _require(payload, "executorCores", category), "executorCores", category
            ),
            executor_usages=executor_usages,
            executor_waste_percent=_read_optional_number(
                payload, "executorWastedPercentOverAll", category
            ),
            driver_waste_percent=_read_optional_number(
                payload, "driverWastedPercentOverAll", category
            ),
            abnormal=_read_bool(_require(payload, "abnormal", category), "abnormal", category),
        )


TypedFinding = Union[MemoryWasteFinding, ExecutorMemoryWasteFinding, CpuWasteFinding]

FINDING_TYPES: Dict[str, Type[TypedFinding]] = {
    Category.MR_MEMORY_WASTE.value: MemoryWasteFinding,
    Category.MEMORY_WASTE.value: ExecutorMemoryWasteFinding,
    Category.CPU_WASTE.value: CpuWasteFinding,
}


def parse_finding(result: DetectorResult) -> Optional[TypedFinding]:
    """
    Interpret a detector result with the finding type its category names.

    Returns:
        The typed finding, or None when the category is unknown.

    Raises:
        PayloadError: If the payload does not match the category's schema.
    """
    finding_type = FINDING_TYPES.get(result.category)
    if finding_type is None:
        logger.debug(f"No finding type registered for category '{result.category}'")
        return None
    return finding_type.from_payload(result.data)
