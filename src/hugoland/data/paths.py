"""Helpers for resolving data file locations."""
from __future__ import annotations

from pathlib import Path


def get_package_data_dir() -> Path:
    """Return the directory of the data package."""
    return Path(__file__).resolve().parent


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing JSON definition files."""
    if base_path is not None:
        return Path(base_path)
    return get_package_data_dir() / "definitions"
