# src/k8s_resource/models/node.py

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class NodeKind(str, Enum):
    """How a node exposes its capacity."""

    FIXED = "fixed"
    BURSTABLE = "burstable"


class NodeUsageRecord(BaseModel):
    """
    Current usage of one node, as reported by the metrics.k8s.io API.

    Attributes:
        name: Node name
        cpu_usage_cores: CPU usage in cores (reported in nanocores)
        memory_usage_gb: Memory usage in GiB (reported in kibibytes)
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Node name")
    cpu_usage_cores: float = Field(0.0, ge=0, description="CPU usage in cores")
    memory_usage_gb: float = Field(0.0, ge=0, description="Memory usage in GiB")


class NodeCapacityRecord(BaseModel):
    """
    Allocatable capacity of one node, as reported by the node status.

    Attributes:
        name: Node name
        allocatable_cpu_cores: Allocatable CPU in cores (reported in millicores)
        allocatable_memory_gb: Allocatable memory in GiB (reported in kibibytes)
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Node name")
    allocatable_cpu_cores: float = Field(0.0, ge=0, description="Allocatable CPU in cores")
    allocatable_memory_gb: float = Field(0.0, ge=0, description="Allocatable memory in GiB")


class NormalizedNodeRecord(BaseModel):
    """
    One node of a snapshot with usage and capacity merged. This is what every
    report and the fit checker read.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Node name")
    cpu_used: float = Field(0.0, ge=0, description="CPU usage in cores")
    cpu_total: float = Field(0.0, ge=0, description="Allocatable CPU in cores, 0 when unknown")
    mem_used: float = Field(0.0, ge=0, description="Memory usage in GiB")
    mem_total: float = Field(0.0, ge=0, description="Allocatable memory in GiB, 0 when unknown")
    is_burstable: bool = Field(False, description="Node belongs to a serverless/autoscaled pool")


class CollectionStrategy(str, Enum):
    BULK = "bulk"
    PER_NODE = "per_node"


class CollectionResult(BaseModel):
    """Raw records of one snapshot, tagged with the strategy that produced them."""

    strategy: CollectionStrategy
    usage: List[NodeUsageRecord] = Field(default_factory=list)
    capacity: List[NodeCapacityRecord] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.usage and not self.capacity
