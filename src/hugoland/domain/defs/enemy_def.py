"""Enemy definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class EnemyDef:
    """Describes an enemy archetype; zone scaling supplies the raw stats."""

    id: str
    name: str
    min_zone: int
    hp_scale: float
    attack_scale: float
    defense_scale: float
