# src/k8s_resource/models/cluster.py

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class ProvisioningState(str, Enum):
    UNDER_UTILIZED = "under-utilized"
    OPTIMAL = "optimally provisioned"
    OVER_PROVISIONED = "over-provisioned"


class ClusterTotals(BaseModel):
    """
    Cluster-wide sums over a snapshot.

    Attributes:
        total_cpu: Sum of allocatable CPU over nodes that report a positive value (cores)
        used_cpu: Sum of CPU usage over all nodes (cores)
        total_memory: Sum of allocatable memory over nodes that report a positive value (GiB)
        used_memory: Sum of memory usage over all nodes (GiB)
    """

    model_config = ConfigDict(frozen=True)

    total_cpu: float = 0.0
    used_cpu: float = 0.0
    total_memory: float = 0.0
    used_memory: float = 0.0

    @property
    def available_cpu(self) -> float:
        return self.total_cpu - self.used_cpu

    @property
    def available_memory(self) -> float:
        return self.total_memory - self.used_memory

    @property
    def cpu_utilization(self) -> float:
        return _percent(self.used_cpu, self.total_cpu)

    @property
    def memory_utilization(self) -> float:
        return _percent(self.used_memory, self.total_memory)


def _percent(used: float, total: float) -> float:
    if total > 0:
        return 100 * used / total
    return 0.0


class ProvisioningAssessment(BaseModel):
    cpu: ProvisioningState
    memory: ProvisioningState


class NodeCapacityView(BaseModel):
    """A row of the node table, after display corrections."""

    name: str
    cpu_used: float
    cpu_free: float
    cpu_total: float
    mem_used: float
    mem_free: float
    mem_total: float


class FitCandidate(BaseModel):
    """A node with enough free capacity for a job."""

    model_config = ConfigDict(frozen=True)

    name: str
    cpu_free: float
    mem_free: float

    def as_row(self) -> Tuple[str, str, str]:
        return (self.name, f"{self.cpu_free:.2f}", f"{self.mem_free:.2f}")


class JobRequirement(BaseModel):
    """CPU cores and GiB of memory a job needs."""

    model_config = ConfigDict(frozen=True)

    cpu: float = Field(..., ge=0, description="Required CPU cores")
    memory: float = Field(..., ge=0, description="Required memory in GiB")
