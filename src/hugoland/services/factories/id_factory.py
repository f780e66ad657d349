"""Utilities for creating deterministic instance identifiers."""
from __future__ import annotations

from hugoland.core.rng import RNG


def make_instance_id(prefix: str, rng: RNG) -> str:
    """Generate a deterministic identifier using the provided RNG."""
    suffix = rng.randint(10_000_000, 99_999_999)
    return f"{prefix}_{suffix}"
