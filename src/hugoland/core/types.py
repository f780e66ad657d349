"""Shared type aliases for the core and domain layers."""
from typing import Literal

Rarity = Literal["common", "rare", "epic", "legendary", "mythical"]
RARITIES: tuple[Rarity, ...] = ("common", "rare", "epic", "legendary", "mythical")

ItemKind = Literal["weapon", "armor", "relic"]
RelicStat = Literal["attack", "defense"]
GameModeName = Literal["normal", "blitz", "bloodlust", "survival"]
CheatName = Literal["infinite_coins", "infinite_gems", "obtain_any_item"]
MerchantRewardType = Literal["coins", "gems"]

__all__ = [
    "CheatName",
    "GameModeName",
    "ItemKind",
    "MerchantRewardType",
    "RARITIES",
    "Rarity",
    "RelicStat",
]
