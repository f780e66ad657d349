"""File-system persistence for the single game snapshot."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Protocol

from hugoland import config


class SnapshotStore(Protocol):
    """Durable storage for the latest snapshot under one fixed key."""

    def load_snapshot(self) -> Dict[str, Any] | None: ...

    def save_snapshot(self, payload: Dict[str, Any]) -> None: ...


class JsonSnapshotStore:
    """Stores the snapshot as ``<base_dir>/<key>.json``."""

    def __init__(self, base_dir: Path | str | None = None, key: str = config.DEFAULT_STORAGE_KEY) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else config.get_save_dir()
        self._key = key

    @property
    def path(self) -> Path:
        return self._base_dir / f"{self._key}.json"

    def load_snapshot(self) -> Dict[str, Any] | None:
        """Return the parsed snapshot, or None when nothing has been saved yet."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        return json.loads(text)

    def save_snapshot(self, payload: Dict[str, Any]) -> None:
        """Write the snapshot to a temporary file, then rename it over the old one."""
        self._base_dir.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_suffix(".json.tmp")
        temp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        temp_path.replace(self.path)

    def delete_snapshot(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
