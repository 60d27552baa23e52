from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..models.node import CollectionResult, NormalizedNodeRecord


class BaseExporter(ABC):
    """Abstract base class for snapshot file exporters.

    An exporter writes the files of one run and can remove them again.
    """

    @abstractmethod
    async def export(self, collected: CollectionResult, records: List[NormalizedNodeRecord]) -> List[str]:
        """Write the snapshot to disk. Return the written paths."""
        raise NotImplementedError()

    @abstractmethod
    def cleanup(self, paths: List[str] | None = None) -> List[str]:
        """Remove written files. Return the removed paths."""
        raise NotImplementedError()
