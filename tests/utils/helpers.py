"""Test helper functions."""

import json
from pathlib import Path
from typing import Any, Dict


def property_dir(config, property_id: str) -> Path:
    return config.properties_path / property_id


def write_version_file(config, property_id: str, file_name: str, data: Dict[str, Any]) -> Path:
    """Write a raw version file (data.json, data-v<stamp>.json) for a property."""
    path = property_dir(config, property_id) / file_name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def read_version_file(config, property_id: str, file_name: str) -> Dict[str, Any]:
    path = property_dir(config, property_id) / file_name
    return json.loads(path.read_text(encoding="utf-8"))


def draft_files(config, property_id: str) -> list:
    return sorted(p.name for p in property_dir(config, property_id).glob("data-v*.json"))


def archive_files(config, property_id: str) -> list:
    archive = property_dir(config, property_id) / "archive"
    if not archive.is_dir():
        return []
    return sorted(p.name for p in archive.iterdir())
