"""
JSON Snapshot Exporter

Writes layout snapshots (or anything with ``to_dict``) to JSON files.
"""

import json
from pathlib import Path
from typing import Any, Union


class JsonSnapshotExporter:
    """Serialises snapshots to JSON."""

    def export_json(self, data: Any, output_path: Union[str, Path]) -> str:
        """Write *data* to *output_path*, creating parent directories."""
        if hasattr(data, "to_dict"):
            data = data.to_dict()

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2, default=str)

        return str(output_path)

    def dumps(self, data: Any) -> str:
        if hasattr(data, "to_dict"):
            data = data.to_dict()
        return json.dumps(data, indent=2, default=str)
