"""Exporters package for the snapshot files of a run."""

from .base_exporter import BaseExporter
from .snapshot_exporter import SnapshotExporter

__all__ = ["BaseExporter", "SnapshotExporter"]
