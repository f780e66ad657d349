"""Runtime entity exports."""

from .enemy import Enemy
from .items import Armor, RelicItem, Weapon
from .stats import PlayerStats

__all__ = [
    "Armor",
    "Enemy",
    "PlayerStats",
    "RelicItem",
    "Weapon",
]
