"""Events accepted by the transition engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Tuple

from hugoland.core.types import ItemKind


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Base class for every engine event."""


# -----------------------
# Combat
# -----------------------
@dataclass(frozen=True, slots=True)
class StartCombat(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class SelectAdventureSkill(GameEvent):
    skill_id: str


@dataclass(frozen=True, slots=True)
class SkipAdventureSkills(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class UseSkipCard(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class Attack(GameEvent):
    hit: bool
    category: str | None = None


@dataclass(frozen=True, slots=True)
class ReviveAtCheckpoint(GameEvent):
    pass


# -----------------------
# Inventory
# -----------------------
@dataclass(frozen=True, slots=True)
class EquipItem(GameEvent):
    kind: ItemKind
    item_id: str


@dataclass(frozen=True, slots=True)
class UnequipRelic(GameEvent):
    relic_id: str


@dataclass(frozen=True, slots=True)
class UpgradeItem(GameEvent):
    kind: ItemKind
    item_id: str


@dataclass(frozen=True, slots=True)
class BulkUpgrade(GameEvent):
    kind: ItemKind
    item_ids: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SellItem(GameEvent):
    kind: ItemKind
    item_id: str


@dataclass(frozen=True, slots=True)
class BulkSell(GameEvent):
    kind: ItemKind
    item_ids: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DiscardItem(GameEvent):
    kind: ItemKind
    item_id: str


# -----------------------
# Shop
# -----------------------
@dataclass(frozen=True, slots=True)
class OpenChest(GameEvent):
    cost: int


@dataclass(frozen=True, slots=True)
class PurchaseMythical(GameEvent):
    cost: int


@dataclass(frozen=True, slots=True)
class PurchaseRelic(GameEvent):
    relic_id: str


@dataclass(frozen=True, slots=True)
class RefreshMarket(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class MineGem(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class ExchangeShinyGems(GameEvent):
    amount: int


@dataclass(frozen=True, slots=True)
class AddCoins(GameEvent):
    amount: int


@dataclass(frozen=True, slots=True)
class AddGems(GameEvent):
    amount: int


# -----------------------
# Rewards & meta progression
# -----------------------
@dataclass(frozen=True, slots=True)
class ClaimDailyReward(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class ClaimOfflineRewards(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class SpendFragments(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class SelectMerchantReward(GameEvent):
    reward_id: str


@dataclass(frozen=True, slots=True)
class PlantSeed(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class BuyWater(GameEvent):
    hours: int


@dataclass(frozen=True, slots=True)
class RollMenuSkill(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class UpgradeSkill(GameEvent):
    skill_id: str


@dataclass(frozen=True, slots=True)
class Prestige(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class InvestResearch(GameEvent):
    amount: int


@dataclass(frozen=True, slots=True)
class SetExperience(GameEvent):
    experience: int


# -----------------------
# Settings & debug
# -----------------------
@dataclass(frozen=True, slots=True)
class SetGameMode(GameEvent):
    mode: str


@dataclass(frozen=True, slots=True)
class ToggleCheat(GameEvent):
    cheat: str


@dataclass(frozen=True, slots=True)
class UpdateSettings(GameEvent):
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TeleportZone(GameEvent):
    zone: int


# -----------------------
# Lifecycle
# -----------------------
@dataclass(frozen=True, slots=True)
class Tick(GameEvent):
    now: datetime


@dataclass(frozen=True, slots=True)
class ResetGame(GameEvent):
    pass
