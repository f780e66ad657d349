"""Stat models for runtime entities."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PlayerStats:
    """Live player stats plus the base floor that bonuses add onto."""

    hp: int = 100
    max_hp: int = 100
    attack: int = 20
    defense: int = 10
    base_attack: int = 20
    base_defense: int = 10
    base_hp: int = 100
