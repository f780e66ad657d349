"""Owned equipment and the id references of what is equipped."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from hugoland.core.types import ItemKind
from hugoland.domain.entities import Armor, RelicItem, Weapon

OwnedItem = Weapon | Armor | RelicItem


@dataclass(slots=True)
class Inventory:
    """Owned items plus equipped slots stored as ids into the owned lists."""

    weapons: List[Weapon] = field(default_factory=list)
    armor: List[Armor] = field(default_factory=list)
    relics: List[RelicItem] = field(default_factory=list)
    current_weapon_id: str | None = None
    current_armor_id: str | None = None
    equipped_relic_ids: List[str] = field(default_factory=list)

    @property
    def current_weapon(self) -> Weapon | None:
        return self.find_weapon(self.current_weapon_id) if self.current_weapon_id else None

    @property
    def current_armor(self) -> Armor | None:
        return self.find_armor(self.current_armor_id) if self.current_armor_id else None

    @property
    def equipped_relics(self) -> List[RelicItem]:
        return [relic for relic in self.relics if relic.id in self.equipped_relic_ids]

    def find_weapon(self, weapon_id: str) -> Weapon | None:
        return next((weapon for weapon in self.weapons if weapon.id == weapon_id), None)

    def find_armor(self, armor_id: str) -> Armor | None:
        return next((armor for armor in self.armor if armor.id == armor_id), None)

    def find_relic(self, relic_id: str) -> RelicItem | None:
        return next((relic for relic in self.relics if relic.id == relic_id), None)

    def find(self, kind: ItemKind, item_id: str) -> OwnedItem | None:
        if kind == "weapon":
            return self.find_weapon(item_id)
        if kind == "armor":
            return self.find_armor(item_id)
        if kind == "relic":
            return self.find_relic(item_id)
        raise ValueError(f"Unsupported item kind '{kind}'.")

    def is_equipped(self, kind: ItemKind, item_id: str) -> bool:
        if kind == "weapon":
            return self.current_weapon_id == item_id
        if kind == "armor":
            return self.current_armor_id == item_id
        return item_id in self.equipped_relic_ids

    def remove(self, kind: ItemKind, item_id: str) -> OwnedItem | None:
        """Drop an item from its owned list. Callers must run check_removable first."""
        bucket: List = self._bucket(kind)
        for index, item in enumerate(bucket):
            if item.id == item_id:
                return bucket.pop(index)
        return None

    def _bucket(self, kind: ItemKind) -> List:
        if kind == "weapon":
            return self.weapons
        if kind == "armor":
            return self.armor
        if kind == "relic":
            return self.relics
        raise ValueError(f"Unsupported item kind '{kind}'.")


def check_removable(inventory: Inventory, kind: ItemKind, item_id: str) -> str | None:
    """
    Return the reason an item cannot leave the inventory, or None when it can.

    Every removal path (sell, bulk sell, discard) goes through this check so an
    equipped slot never points at an item that is no longer owned.
    """

    if inventory.find(kind, item_id) is None:
        return "not_found"
    if inventory.is_equipped(kind, item_id):
        return "equipped"
    return None


def stat_contribution(item: OwnedItem | None) -> Tuple[int, int]:
    """Return the (attack, defense) an equipped item adds to the player."""
    if item is None:
        return 0, 0
    if isinstance(item, Weapon):
        return item.base_attack, 0
    if isinstance(item, Armor):
        return 0, item.base_defense
    return item.base_attack or 0, item.base_defense or 0
