"""
Writes the intermediate files of one run (usage, allocatable capacity and
merged records) and removes them afterwards.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

import aiofiles

from ..models.node import CollectionResult, NormalizedNodeRecord
from .base_exporter import BaseExporter

logger = logging.getLogger(__name__)

USAGE_FILENAME = "usage.json"
ALLOCATABLE_FILENAME = "allocatable.json"
COMBINED_FILENAME = "combined.json"


class SnapshotExporter(BaseExporter):
    """Keeps track of the snapshot files written during one invocation."""

    def __init__(self, directory: str = "."):
        self.directory = directory
        self.written: List[str] = []

    async def _write_json(self, rows: List[Dict[str, Any]], filename: str) -> str:
        out_path = os.path.join(self.directory, filename)
        os.makedirs(self.directory or ".", exist_ok=True)

        async with aiofiles.open(out_path, "w", encoding="utf-8") as fh:
            await fh.write(json.dumps(rows, ensure_ascii=False, indent=2))

        if out_path not in self.written:
            self.written.append(out_path)
        logger.debug("Wrote %d row(s) to %s", len(rows), out_path)
        return out_path

    async def export(self, collected: CollectionResult, records: List[NormalizedNodeRecord]) -> List[str]:
        """Write usage.json, allocatable.json and combined.json. Returns the written paths."""
        await self._write_json([r.model_dump(mode="json") for r in collected.usage], USAGE_FILENAME)
        await self._write_json([r.model_dump(mode="json") for r in collected.capacity], ALLOCATABLE_FILENAME)
        await self._write_json([r.model_dump(mode="json") for r in records], COMBINED_FILENAME)
        return list(self.written)

    def cleanup(self, paths: Optional[List[str]] = None) -> List[str]:
        """Delete snapshot files. Returns the paths actually removed."""
        removed = []
        for path in paths if paths is not None else self.written:
            try:
                os.remove(path)
                removed.append(path)
            except FileNotFoundError:
                logger.debug("Snapshot file %s already gone.", path)
            except OSError as e:
                logger.warning("Could not remove snapshot file %s: %s", path, e)
        self.written = [p for p in self.written if p not in removed]
        return removed
