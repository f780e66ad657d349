"""Menu skill definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class MenuSkillDef:
    """Catalog entry for a time-boxed menu skill and its reward bonuses."""

    id: str
    name: str
    description: str
    coin_bonus: float = 1.0
    gem_bonus: float = 1.0
    xp_bonus: float = 1.0
