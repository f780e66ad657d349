"""Rarity tier definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from hugoland.core.types import Rarity


@dataclass(slots=True)
class RarityDef:
    """Stat and price bands used when generating equipment of a rarity."""

    id: Rarity
    order: int
    attack_range: Tuple[int, int]
    defense_range: Tuple[int, int]
    upgrade_cost: int
    sell_price: int
    weapon_names: Tuple[str, ...]
    armor_names: Tuple[str, ...]
