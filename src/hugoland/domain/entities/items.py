"""Equipment and relic runtime models."""
from __future__ import annotations

from dataclasses import dataclass

from hugoland.core.types import Rarity, RelicStat


@dataclass(slots=True)
class Weapon:
    id: str
    name: str
    rarity: Rarity
    base_attack: int
    level: int = 1
    upgrade_cost: int = 10
    sell_price: int = 25
    is_chest: bool = False


@dataclass(slots=True)
class Armor:
    id: str
    name: str
    rarity: Rarity
    base_defense: int
    level: int = 1
    upgrade_cost: int = 10
    sell_price: int = 25
    is_chest: bool = False


@dataclass(slots=True)
class RelicItem:
    """A relic bought from the Yojef Market; defines attack or defense, not both."""

    id: str
    name: str
    description: str
    stat: RelicStat
    cost: int
    upgrade_cost: int
    level: int = 1
    base_attack: int | None = None
    base_defense: int | None = None
