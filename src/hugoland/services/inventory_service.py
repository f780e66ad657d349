"""Inventory and equipment orchestration services."""
from __future__ import annotations

import logging
from typing import List, Sequence

from hugoland.core.types import ItemKind
from hugoland.domain import economy
from hugoland.domain.entities import Armor, RelicItem, Weapon
from hugoland.domain.inventory import OwnedItem, check_removable, stat_contribution
from hugoland.domain.state import GameState
from hugoland.services.outcomes import ActionOutcome, failed, ok

logger = logging.getLogger(__name__)


def _upgrade_increment(item: OwnedItem) -> tuple[int, int]:
    """(attack, defense) gained by one upgrade of ``item``."""
    if isinstance(item, Weapon):
        return economy.WEAPON_ATTACK_PER_LEVEL, 0
    if isinstance(item, Armor):
        return 0, economy.ARMOR_DEFENSE_PER_LEVEL
    if item.stat == "attack":
        return economy.RELIC_ATTACK_PER_LEVEL, 0
    return 0, economy.RELIC_DEFENSE_PER_LEVEL


def _sale_value(item: OwnedItem) -> tuple[int, int]:
    """(coins, gems) refunded when ``item`` is sold."""
    if isinstance(item, RelicItem):
        return 0, economy.relic_sell_value(item.cost)
    return item.sell_price, 0


class InventoryService:
    """Equip, upgrade, sell and discard owned items."""

    # -----------------------
    # Equipping
    # -----------------------
    def equip(self, state: GameState, kind: ItemKind, item_id: str) -> ActionOutcome:
        inventory = state.inventory
        item = inventory.find(kind, item_id)
        if item is None:
            return failed("not_found", f"No {kind} with id '{item_id}' is owned.")
        if inventory.is_equipped(kind, item_id):
            return failed("already_equipped", f"{item.name} is already equipped.")

        if kind == "weapon":
            self._apply_delta(state, stat_contribution(inventory.current_weapon), stat_contribution(item))
            inventory.current_weapon_id = item_id
        elif kind == "armor":
            self._apply_delta(state, stat_contribution(inventory.current_armor), stat_contribution(item))
            inventory.current_armor_id = item_id
        else:
            self._apply_delta(state, (0, 0), stat_contribution(item))
            inventory.equipped_relic_ids.append(item_id)
        return ok(f"Equipped {item.name}.", value=item_id)

    def unequip_relic(self, state: GameState, relic_id: str) -> ActionOutcome:
        inventory = state.inventory
        relic = inventory.find_relic(relic_id)
        if relic is None or relic_id not in inventory.equipped_relic_ids:
            return failed("not_equipped", f"Relic '{relic_id}' is not equipped.")
        inventory.equipped_relic_ids.remove(relic_id)
        self._apply_delta(state, stat_contribution(relic), (0, 0))
        return ok(f"Unequipped {relic.name}.", value=relic_id)

    # -----------------------
    # Upgrades
    # -----------------------
    def upgrade(self, state: GameState, kind: ItemKind, item_id: str) -> ActionOutcome:
        item = state.inventory.find(kind, item_id)
        if item is None:
            return failed("not_found", f"No {kind} with id '{item_id}' is owned.")
        if not state.spend_gems(item.upgrade_cost):
            return failed("insufficient_gems", f"Upgrading {item.name} costs {item.upgrade_cost} gems.")
        self._upgrade_item(state, kind, item)
        return ok(f"{item.name} upgraded to level {item.level}.", value=item.upgrade_cost)

    def bulk_upgrade(self, state: GameState, kind: ItemKind, item_ids: Sequence[str]) -> ActionOutcome:
        """Upgrade every listed item once, or none of them when the total is unaffordable."""
        inventory = state.inventory
        items: List[OwnedItem] = []
        for item_id in dict.fromkeys(item_ids):
            item = inventory.find(kind, item_id)
            if item is not None:
                items.append(item)
        if not items:
            return failed("not_found", "None of the listed items are owned.")
        total_cost = sum(item.upgrade_cost for item in items)
        if not state.spend_gems(total_cost):
            return failed("insufficient_gems", f"Bulk upgrade costs {total_cost} gems.")
        for item in items:
            self._upgrade_item(state, kind, item)
        return ok(f"Upgraded {len(items)} item(s).", value=total_cost)

    # -----------------------
    # Removal
    # -----------------------
    def sell(self, state: GameState, kind: ItemKind, item_id: str) -> ActionOutcome:
        reason = check_removable(state.inventory, kind, item_id)
        if reason is not None:
            return failed(reason, self._removal_message(reason, kind, item_id))
        item = state.inventory.remove(kind, item_id)
        assert item is not None
        coins, gems = _sale_value(item)
        state.coins += coins
        state.gems += gems
        state.statistics.items_sold += 1
        return ok(f"Sold {item.name}.", value=coins or gems)

    def bulk_sell(self, state: GameState, kind: ItemKind, item_ids: Sequence[str]) -> ActionOutcome:
        """Sell every listed item that may leave the inventory; equipped ones are skipped."""
        sold = 0
        coins_total = 0
        gems_total = 0
        for item_id in dict.fromkeys(item_ids):
            if check_removable(state.inventory, kind, item_id) is not None:
                continue
            item = state.inventory.remove(kind, item_id)
            assert item is not None
            coins, gems = _sale_value(item)
            coins_total += coins
            gems_total += gems
            sold += 1
        state.coins += coins_total
        state.gems += gems_total
        state.statistics.items_sold += sold
        return ok(f"Sold {sold} item(s).", value=sold)

    def discard(self, state: GameState, kind: ItemKind, item_id: str) -> ActionOutcome:
        reason = check_removable(state.inventory, kind, item_id)
        if reason is not None:
            return failed(reason, self._removal_message(reason, kind, item_id))
        item = state.inventory.remove(kind, item_id)
        assert item is not None
        return ok(f"Discarded {item.name}.", value=item_id)

    # -----------------------
    # Helpers
    # -----------------------
    def _upgrade_item(self, state: GameState, kind: ItemKind, item: OwnedItem) -> None:
        attack_gain, defense_gain = _upgrade_increment(item)
        if isinstance(item, Weapon):
            item.base_attack += attack_gain
        elif isinstance(item, Armor):
            item.base_defense += defense_gain
        elif item.stat == "attack":
            item.base_attack = (item.base_attack or 0) + attack_gain
        else:
            item.base_defense = (item.base_defense or 0) + defense_gain
        item.level += 1
        item.upgrade_cost = economy.next_upgrade_cost(item.upgrade_cost)
        state.statistics.items_upgraded += 1
        if state.inventory.is_equipped(kind, item.id):
            state.player_stats.attack += attack_gain
            state.player_stats.defense += defense_gain
        logger.debug("Upgraded %s to level %d", item.id, item.level)

    @staticmethod
    def _apply_delta(state: GameState, old: tuple[int, int], new: tuple[int, int]) -> None:
        stats = state.player_stats
        stats.attack += new[0] - old[0]
        stats.defense += new[1] - old[1]

    @staticmethod
    def _removal_message(reason: str, kind: ItemKind, item_id: str) -> str:
        if reason == "equipped":
            return f"Unequip the {kind} before removing it."
        return f"No {kind} with id '{item_id}' is owned."
