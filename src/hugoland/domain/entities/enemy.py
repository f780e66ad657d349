"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Enemy:
    """Represents the enemy spawned for the current zone."""

    name: str
    hp: int
    max_hp: int
    attack: int
    defense: int
    zone: int
    is_poisoned: bool = False
    poison_turns: int = 0
