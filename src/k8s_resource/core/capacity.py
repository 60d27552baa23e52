# src/k8s_resource/core/capacity.py
"""
Free-capacity rules shared by the node table and the fit checker.

Burstable nodes treat CPU as elastic (the whole allocatable figure counts as
free) while memory is always total minus used. The node table additionally
applies a display correction for burstable nodes; the fit checker does not.
"""

from typing import Optional, Tuple

from ..models.cluster import NodeCapacityView
from ..models.node import NormalizedNodeRecord
from .config import config


def free_capacity(record: NormalizedNodeRecord) -> Tuple[float, float]:
    """Return (cpu_free, mem_free). Values are signed and never clamped."""
    mem_free = record.mem_total - record.mem_used
    if record.is_burstable:
        return record.cpu_total, mem_free
    return record.cpu_total - record.cpu_used, mem_free


def node_capacity_view(record: NormalizedNodeRecord, cpu_epsilon: Optional[float] = None) -> NodeCapacityView:
    """Compute the node table row for a record.

    For burstable nodes:
    - a CPU total below `cpu_epsilon` with positive usage is replaced by the usage;
    - CPU free is then total - used;
    - negative memory free is clamped to 0 and the memory total becomes the usage.

    The record itself is left untouched.
    """
    epsilon = config.BURSTABLE_CPU_EPSILON if cpu_epsilon is None else cpu_epsilon

    cpu_total = record.cpu_total
    mem_total = record.mem_total
    cpu_free, mem_free = free_capacity(record)

    if record.is_burstable:
        if cpu_total < epsilon and record.cpu_used > 0:
            cpu_total = record.cpu_used
        cpu_free = cpu_total - record.cpu_used

        if mem_free < 0:
            mem_free = 0.0
            mem_total = record.mem_used

    return NodeCapacityView(
        name=record.name,
        cpu_used=record.cpu_used,
        cpu_free=cpu_free,
        cpu_total=cpu_total,
        mem_used=record.mem_used,
        mem_free=mem_free,
        mem_total=mem_total,
    )
