"""
Outbound Adapters

Snapshot export (JSON) and static preview rendering (PNG).
"""

from .json_exporter import JsonSnapshotExporter
from .snapshot_renderer import SnapshotRenderer, HAS_MATPLOTLIB

__all__ = ["JsonSnapshotExporter", "SnapshotRenderer", "HAS_MATPLOTLIB"]
