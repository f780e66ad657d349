"""Relic definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from hugoland.core.types import RelicStat


@dataclass(slots=True)
class RelicDef:
    """Template for relics offered by the Yojef Market."""

    id: str
    name: str
    description: str
    stat: RelicStat
    base_value: int
    cost: int
    upgrade_cost: int
