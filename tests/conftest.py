# tests/conftest.py

import pytest

from k8s_resource.collectors.base_collector import BaseCollector
from k8s_resource.models.node import (
    CollectionResult,
    CollectionStrategy,
    NodeCapacityRecord,
    NodeUsageRecord,
    NormalizedNodeRecord,
)


class FakeCollector(BaseCollector):
    """Collector returning a canned CollectionResult, standing in for the Kubernetes API."""

    def __init__(self, result: CollectionResult):
        self.result = result
        self.closed = False

    async def collect(self) -> CollectionResult:
        return self.result

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_k8s_config(monkeypatch):
    """
    Autouse fixture so every test starts with the Kubernetes configuration
    not yet loaded, and never talks to a real cluster by accident.
    """
    from k8s_resource.core import k8s_client

    monkeypatch.setattr(k8s_client, "_CONFIG_LOADED", False)
    monkeypatch.setenv("BURSTABLE_NODE_PREFIX", "fargate-")


@pytest.fixture
def single_node_result():
    """One fixed node using half of its CPU and memory."""
    return CollectionResult(
        strategy=CollectionStrategy.BULK,
        usage=[NodeUsageRecord(name="n1", cpu_usage_cores=2.0, memory_usage_gb=8.0)],
        capacity=[NodeCapacityRecord(name="n1", allocatable_cpu_cores=4.0, allocatable_memory_gb=16.0)],
    )


@pytest.fixture
def make_collector():
    def _make(result: CollectionResult) -> FakeCollector:
        return FakeCollector(result)

    return _make


@pytest.fixture
def mixed_records():
    """A fixed node, a burstable node with a tiny CPU total, and a node whose capacity report failed."""
    return [
        NormalizedNodeRecord(name="ip-10-0-1-5", cpu_used=0.2, cpu_total=8.0, mem_used=3.5, mem_total=32.0),
        NormalizedNodeRecord(
            name="fargate-ip-10-0-2-7",
            cpu_used=0.08,
            cpu_total=0.05,
            mem_used=1.0,
            mem_total=0.5,
            is_burstable=True,
        ),
        NormalizedNodeRecord(name="ip-10-0-3-9", cpu_used=1.0, cpu_total=0.0, mem_used=2.0, mem_total=0.0),
    ]
