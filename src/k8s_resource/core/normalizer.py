# src/k8s_resource/core/normalizer.py
"""
Converts raw Kubernetes quantities into cores and GiB, and merges usage and
capacity records of one snapshot into a single NormalizedNodeRecord per node.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..models.node import NodeCapacityRecord, NodeUsageRecord, NormalizedNodeRecord
from ..utils.k8s_utils import to_cores, to_gib
from .classifier import NodeClassifier

logger = logging.getLogger(__name__)


def _or_zero(value: Optional[float]) -> float:
    return 0.0 if value is None else value


def _non_negative(name: str, field: str, value: float) -> float:
    if value < 0:
        logger.debug("Node '%s' reported a negative %s (%s); using 0.", name, field, value)
        return 0.0
    return value


def usage_record_from_raw(name: str, cpu_raw, memory_raw) -> NodeUsageRecord:
    """Build a usage record from metrics.k8s.io quantities ("123456789n", "2048Ki")."""
    return NodeUsageRecord(
        name=name,
        cpu_usage_cores=_non_negative(name, "cpu usage", to_cores(cpu_raw)),
        memory_usage_gb=_non_negative(name, "memory usage", to_gib(memory_raw)),
    )


def capacity_record_from_raw(name: str, cpu_raw, memory_raw) -> NodeCapacityRecord:
    """Build a capacity record from node allocatable quantities ("3920m", "16252928Ki")."""
    return NodeCapacityRecord(
        name=name,
        allocatable_cpu_cores=_non_negative(name, "allocatable cpu", to_cores(cpu_raw)),
        allocatable_memory_gb=_non_negative(name, "allocatable memory", to_gib(memory_raw)),
    )


def merge_records(
    usage: Iterable[NodeUsageRecord],
    capacity: Iterable[NodeCapacityRecord],
    classifier: Optional[NodeClassifier] = None,
) -> List[NormalizedNodeRecord]:
    """Merge usage and capacity records by node name.

    Merge rules:
    - Every name seen in either input appears exactly once in the output.
    - A name found on only one side gets zeros for the other side's fields.
    - Output order is first-seen order: usage names first, then names that only
      have a capacity record.
    - When a name repeats within one input, the later record wins.

    Returns a new list of NormalizedNodeRecord objects.
    """
    classifier = classifier or NodeClassifier()
    merged: Dict[str, dict] = {}

    for record in usage:
        fields = merged.setdefault(record.name, {})
        fields["cpu_used"] = _or_zero(record.cpu_usage_cores)
        fields["mem_used"] = _or_zero(record.memory_usage_gb)

    for record in capacity:
        fields = merged.setdefault(record.name, {})
        fields["cpu_total"] = _or_zero(record.allocatable_cpu_cores)
        fields["mem_total"] = _or_zero(record.allocatable_memory_gb)

    result: List[NormalizedNodeRecord] = []
    for name, fields in merged.items():
        if "cpu_used" not in fields:
            logger.debug("Node '%s' has no usage record; using zero usage.", name)
        if "cpu_total" not in fields:
            logger.debug("Node '%s' has no capacity record; using zero capacity.", name)
        result.append(
            NormalizedNodeRecord(
                name=name,
                cpu_used=fields.get("cpu_used", 0.0),
                cpu_total=fields.get("cpu_total", 0.0),
                mem_used=fields.get("mem_used", 0.0),
                mem_total=fields.get("mem_total", 0.0),
                is_burstable=classifier.is_burstable(name),
            )
        )

    return result
