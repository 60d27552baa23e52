# src/k8s_resource/core/processor.py
"""
Runs the collection and normalization steps of one snapshot.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel

from ..collectors.base_collector import BaseCollector
from ..models.node import CollectionResult, NormalizedNodeRecord
from .classifier import NodeClassifier
from .normalizer import merge_records

logger = logging.getLogger(__name__)


class Snapshot(BaseModel):
    """Raw and normalized data of one point-in-time collection."""

    collected: CollectionResult
    records: List[NormalizedNodeRecord]


class DataProcessor:
    """
    Collects node usage and capacity and turns them into NormalizedNodeRecords.
    """

    def __init__(self, collector: BaseCollector, classifier: Optional[NodeClassifier] = None):
        self.collector = collector
        self.classifier = classifier or NodeClassifier()

    async def run(self) -> Snapshot:
        collected = await self.collector.collect()
        records = merge_records(collected.usage, collected.capacity, self.classifier)
        if not records:
            logger.warning("No node data collected; reporting zero cluster capacity.")
        else:
            logger.info("Collected %d node(s) using the %s strategy.", len(records), collected.strategy.value)
        return Snapshot(collected=collected, records=records)

    async def close(self):
        await self.collector.close()
