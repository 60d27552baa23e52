# src/k8s_resource/core/aggregator.py
"""
Aggregates NormalizedNodeRecord data into cluster-wide totals and
classifies how well the cluster is provisioned.
"""

from typing import Iterable, Optional

from ..models.cluster import ClusterTotals, ProvisioningAssessment, ProvisioningState
from ..models.node import NormalizedNodeRecord
from .config import config


def aggregate(records: Iterable[NormalizedNodeRecord]) -> ClusterTotals:
    """Sum a snapshot into ClusterTotals.

    Aggregation rules:
    - Usage is summed over every record.
    - Capacity is summed only over records with a positive total, so nodes whose
      capacity report failed do not deflate utilization.

    An empty snapshot yields all-zero totals.
    """
    total_cpu = 0.0
    used_cpu = 0.0
    total_memory = 0.0
    used_memory = 0.0

    for record in records:
        used_cpu += record.cpu_used
        used_memory += record.mem_used
        if record.cpu_total > 0:
            total_cpu += record.cpu_total
        if record.mem_total > 0:
            total_memory += record.mem_total

    return ClusterTotals(
        total_cpu=total_cpu,
        used_cpu=used_cpu,
        total_memory=total_memory,
        used_memory=used_memory,
    )


def classify(
    utilization: float,
    under_threshold: Optional[float] = None,
    over_threshold: Optional[float] = None,
) -> ProvisioningState:
    """Classify a utilization percentage. Both thresholds belong to the optimal band."""
    under = config.UNDER_UTILIZED_THRESHOLD if under_threshold is None else under_threshold
    over = config.OVER_PROVISIONED_THRESHOLD if over_threshold is None else over_threshold

    if utilization < under:
        return ProvisioningState.UNDER_UTILIZED
    if utilization > over:
        return ProvisioningState.OVER_PROVISIONED
    return ProvisioningState.OPTIMAL


def assess(totals: ClusterTotals) -> ProvisioningAssessment:
    return ProvisioningAssessment(
        cpu=classify(totals.cpu_utilization),
        memory=classify(totals.memory_utilization),
    )
