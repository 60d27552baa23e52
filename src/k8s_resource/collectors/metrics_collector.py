# src/k8s_resource/collectors/metrics_collector.py
"""
Collects per-node usage (metrics.k8s.io) and allocatable capacity (node
status) from the Kubernetes API.

Two strategies are tried in order:
- bulk: one list call for usage and one for capacity;
- per node: enumerate node names, then read usage and capacity for each node.
  A failed call for one node yields zeros for that node only.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from kubernetes_asyncio.client.rest import ApiException

from ..core.k8s_client import get_core_v1_api, get_custom_objects_api
from ..core.normalizer import capacity_record_from_raw, usage_record_from_raw
from ..models.node import CollectionResult, CollectionStrategy, NodeCapacityRecord, NodeUsageRecord
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

METRICS_GROUP = "metrics.k8s.io"
METRICS_VERSION = "v1beta1"
METRICS_PLURAL = "nodes"


class MetricsCollector(BaseCollector):
    """Collects node usage and capacity records from the Kubernetes cluster."""

    def __init__(self):
        self._core_api = None
        self._metrics_api = None

    async def _ensure_clients(self):
        """
        Lazily initialize the Kubernetes Async clients using the centralized loader.
        """
        if self._core_api is None:
            self._core_api = await get_core_v1_api()
        if self._metrics_api is None:
            self._metrics_api = await get_custom_objects_api()
        return self._core_api, self._metrics_api

    async def collect(self) -> CollectionResult:
        """
        Collects usage and capacity records for every node.

        Returns:
            CollectionResult: the records, tagged with the strategy that produced them.
                An empty result means no node could be seen at all.
        """
        result = await self.collect_bulk()
        if not result.is_empty:
            return result

        logger.warning("Bulk node queries returned no data; using per-node collection.")
        return await self.collect_per_node()

    async def collect_bulk(self) -> CollectionResult:
        core_api, metrics_api = await self._ensure_clients()
        usage = await self._list_usage(metrics_api)
        capacity = await self._list_capacity(core_api)
        logger.info("Bulk collection: %d usage record(s), %d capacity record(s).", len(usage), len(capacity))
        return CollectionResult(strategy=CollectionStrategy.BULK, usage=usage, capacity=capacity)

    async def collect_per_node(self) -> CollectionResult:
        core_api, metrics_api = await self._ensure_clients()
        names = await self._list_node_names(core_api)
        if not names:
            logger.warning("No nodes found in the cluster.")
            return CollectionResult(strategy=CollectionStrategy.PER_NODE)

        # gather keeps the order of `names`, whatever order the calls complete in.
        pairs: List[Tuple[NodeUsageRecord, NodeCapacityRecord]] = await asyncio.gather(
            *(self._collect_node(core_api, metrics_api, name) for name in names)
        )
        return CollectionResult(
            strategy=CollectionStrategy.PER_NODE,
            usage=[usage for usage, _ in pairs],
            capacity=[capacity for _, capacity in pairs],
        )

    async def close(self):
        """Close the Kubernetes API clients if they exist."""
        for api in (self._core_api, self._metrics_api):
            if api:
                await api.api_client.close()
        self._core_api = None
        self._metrics_api = None
        logger.debug("MetricsCollector Kubernetes clients closed.")

    # --- bulk path ---

    async def _list_usage(self, metrics_api) -> List[NodeUsageRecord]:
        if not metrics_api:
            logger.debug("Kubernetes client not configured; skipping usage collection.")
            return []
        try:
            response = await metrics_api.list_cluster_custom_object(METRICS_GROUP, METRICS_VERSION, METRICS_PLURAL)
        except ApiException as e:
            logger.warning("Kubernetes API error while listing node metrics: %s", e.reason)
            return []
        except Exception as e:
            logger.error("An unexpected error occurred while listing node metrics: %s", e)
            return []

        records = []
        for item in (response or {}).get("items") or []:
            name = _metrics_item_name(item)
            if not name:
                logger.debug("Skipping node metrics item without a name.")
                continue
            cpu_raw, memory_raw = _metrics_item_usage(item)
            records.append(usage_record_from_raw(name, cpu_raw, memory_raw))
        return records

    async def _list_capacity(self, core_api) -> List[NodeCapacityRecord]:
        if not core_api:
            logger.debug("Kubernetes client not configured; skipping capacity collection.")
            return []
        try:
            nodes = await core_api.list_node(watch=False)
        except ApiException as e:
            logger.error("Kubernetes API error while listing nodes: %s", e.reason)
            return []
        except Exception as e:
            logger.error("An unexpected error occurred while listing nodes: %s", e)
            return []

        records = []
        for node in nodes.items or []:
            name = node.metadata.name if node.metadata else None
            if not name:
                logger.debug("Skipping node without a name.")
                continue
            cpu_raw, memory_raw = _node_allocatable(node)
            records.append(capacity_record_from_raw(name, cpu_raw, memory_raw))
            logger.debug(" -> Node '%s': allocatable cpu=%s, mem=%s", name, cpu_raw, memory_raw)
        return records

    # --- per-node path ---

    async def _list_node_names(self, core_api) -> List[str]:
        if not core_api:
            return []
        try:
            nodes = await core_api.list_node(watch=False)
        except ApiException as e:
            logger.error("Kubernetes API error while listing node names: %s", e.reason)
            return []
        except Exception as e:
            logger.error("Unexpected error while listing node names: %s", e)
            return []
        return [node.metadata.name for node in nodes.items or [] if node.metadata and node.metadata.name]

    async def _collect_node(self, core_api, metrics_api, name: str) -> Tuple[NodeUsageRecord, NodeCapacityRecord]:
        usage, capacity = await asyncio.gather(
            self._read_node_usage(metrics_api, name),
            self._read_node_capacity(core_api, name),
        )
        return usage, capacity

    async def _read_node_usage(self, metrics_api, name: str) -> NodeUsageRecord:
        cpu_raw, memory_raw = None, None
        if metrics_api:
            try:
                item = await metrics_api.get_cluster_custom_object(METRICS_GROUP, METRICS_VERSION, METRICS_PLURAL, name)
                cpu_raw, memory_raw = _metrics_item_usage(item)
            except ApiException as e:
                logger.debug("Could not read metrics for node '%s': %s", name, e.reason)
            except Exception as e:
                logger.debug("Unexpected error reading metrics for node '%s': %s", name, e)
        return usage_record_from_raw(name, cpu_raw, memory_raw)

    async def _read_node_capacity(self, core_api, name: str) -> NodeCapacityRecord:
        cpu_raw, memory_raw = None, None
        try:
            node = await core_api.read_node(name)
            cpu_raw, memory_raw = _node_allocatable(node)
        except ApiException as e:
            logger.debug("Could not read node '%s': %s", name, e.reason)
        except Exception as e:
            logger.debug("Unexpected error reading node '%s': %s", name, e)
        return capacity_record_from_raw(name, cpu_raw, memory_raw)


def _metrics_item_name(item) -> Optional[str]:
    metadata = (item or {}).get("metadata") or {}
    return metadata.get("name")


def _metrics_item_usage(item) -> Tuple[Optional[str], Optional[str]]:
    usage = (item or {}).get("usage") or {}
    return usage.get("cpu"), usage.get("memory")


def _node_allocatable(node) -> Tuple[Optional[str], Optional[str]]:
    status = getattr(node, "status", None)
    allocatable = getattr(status, "allocatable", None) or {}
    return allocatable.get("cpu"), allocatable.get("memory")
