"""Shop service for chests, the Yojef Market and the gem mine."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Sequence

from hugoland.core.rng import RNG
from hugoland.core.types import RARITIES, ItemKind, Rarity
from hugoland.domain import economy
from hugoland.domain.entities import Armor, RelicItem, Weapon
from hugoland.domain.inventory import stat_contribution
from hugoland.domain.state import MARKET_REFRESH_INTERVAL, GameState
from hugoland.services.factories import ContentFactory
from hugoland.services.outcomes import ActionOutcome, failed, ok

logger = logging.getLogger(__name__)

MIN_MARKET_ITEMS = 3
MAX_MARKET_ITEMS = 5
CHEST_BONUS_GEMS = (5, 14)


@dataclass(slots=True)
class ChestReward:
    kind: ItemKind
    item: Weapon | Armor
    bonus_gems: int = 0


@dataclass(slots=True)
class MiningResult:
    gems: int
    shiny_gems: int


def roll_rarity(weights: Sequence[int], rng: RNG) -> Rarity:
    """Walk the cumulative weights with a roll in [0, 100)."""
    roll = rng.random() * 100
    cumulative = 0
    for rarity, weight in zip(RARITIES, weights):
        cumulative += weight
        if roll <= cumulative:
            return rarity
    return RARITIES[0]


class ShopService:
    """Coin and gem sinks outside of combat."""

    def __init__(
        self,
        factory: ContentFactory,
        rng: RNG,
        *,
        market_refresh: timedelta = MARKET_REFRESH_INTERVAL,
    ) -> None:
        self._factory = factory
        self._rng = rng
        self._market_refresh = market_refresh

    # -----------------------
    # Chests
    # -----------------------
    def open_chest(self, state: GameState, cost: int) -> ActionOutcome:
        if cost <= 0:
            return failed("invalid_amount", "Chest cost must be positive.")
        if not state.spend_coins(cost):
            return failed("insufficient_coins", f"This chest costs {cost} coins.")
        rarity = roll_rarity(self._factory.chest_rarity_weights(cost), self._rng)
        reward = self._grant_equipment(state, rarity, is_chest=True)
        reward.bonus_gems = self._rng.randint(*CHEST_BONUS_GEMS)
        state.gems += reward.bonus_gems
        state.statistics.chests_opened += 1
        return ok(f"Found {reward.item.name} ({rarity})!", value=reward)

    def purchase_mythical(self, state: GameState, cost: int) -> ActionOutcome:
        if cost <= 0:
            return failed("invalid_amount", "Mythical cost must be positive.")
        if not state.spend_coins(cost):
            return failed("insufficient_coins", f"A mythical item costs {cost} coins.")
        reward = self._grant_equipment(state, "mythical", is_chest=False)
        return ok(f"Purchased {reward.item.name}!", value=reward)

    def _grant_equipment(self, state: GameState, rarity: Rarity, *, is_chest: bool) -> ChestReward:
        book = state.collection_book
        if self._rng.random() < 0.5:
            weapon = self._factory.generate_weapon(is_chest, rarity)
            state.inventory.weapons.append(weapon)
            if weapon.name not in book.weapons:
                book.weapons[weapon.name] = True
                book.total_weapons_found += 1
            reward = ChestReward(kind="weapon", item=weapon)
        else:
            armor = self._factory.generate_armor(is_chest, rarity)
            state.inventory.armor.append(armor)
            if armor.name not in book.armor:
                book.armor[armor.name] = True
                book.total_armor_found += 1
            reward = ChestReward(kind="armor", item=armor)
        book.rarity_stats[rarity] = book.rarity_stats.get(rarity, 0) + 1
        state.statistics.items_collected += 1
        return reward

    # -----------------------
    # Yojef Market
    # -----------------------
    def stock_market(self) -> List[RelicItem]:
        count = self._rng.randint(MIN_MARKET_ITEMS, MAX_MARKET_ITEMS)
        return [self._factory.generate_relic_item() for _ in range(count)]

    def refresh_market(self, state: GameState, now: datetime) -> ActionOutcome:
        """Regenerate the market stock and restart its rotation window at ``now``."""
        market = state.yojef_market
        market.items = self.stock_market()
        market.last_refresh = now
        market.next_refresh = now + self._market_refresh
        logger.info("Yojef Market restocked with %d relics", len(market.items))
        return ok(value=len(market.items))

    def purchase_relic(self, state: GameState, relic_id: str) -> ActionOutcome:
        """Buy a relic from the market with gems; purchased relics are equipped at once."""
        market = state.yojef_market
        relic = next((item for item in market.items if item.id == relic_id), None)
        if relic is None:
            return failed("not_found", f"Relic '{relic_id}' is not for sale.")
        if not state.spend_gems(relic.cost):
            return failed("insufficient_gems", f"{relic.name} costs {relic.cost} gems.")
        market.items = [item for item in market.items if item.id != relic_id]
        state.inventory.relics.append(relic)
        state.inventory.equipped_relic_ids.append(relic.id)
        attack, defense = stat_contribution(relic)
        state.player_stats.attack += attack
        state.player_stats.defense += defense
        state.statistics.items_collected += 1
        return ok(f"Purchased {relic.name}.", value=relic.id)

    # -----------------------
    # Mining
    # -----------------------
    def mine_gem(self, state: GameState) -> ActionOutcome:
        is_shiny = self._rng.random() < economy.SHINY_GEM_CHANCE
        result = MiningResult(gems=0 if is_shiny else 1, shiny_gems=1 if is_shiny else 0)
        state.gems += result.gems
        state.shiny_gems += result.shiny_gems
        state.mining.total_gems_mined += result.gems
        state.mining.total_shiny_gems_mined += result.shiny_gems
        state.statistics.shiny_gems_earned += result.shiny_gems
        return ok(value=result)

    def exchange_shiny_gems(self, state: GameState, amount: int) -> ActionOutcome:
        if amount <= 0:
            return failed("invalid_amount", "Exchange amount must be positive.")
        if state.shiny_gems < amount:
            return failed("insufficient_shiny_gems", "Not enough shiny gems.")
        gained = amount * economy.SHINY_GEM_EXCHANGE_RATE
        state.shiny_gems -= amount
        state.gems += gained
        return ok(f"Exchanged {amount} shiny gems for {gained} gems.", value=gained)

    # -----------------------
    # Debug
    # -----------------------
    def grant_debug_coins(self, state: GameState, amount: int) -> ActionOutcome:
        state.coins = max(0, state.coins + amount)
        return ok(value=state.coins)

    def grant_debug_gems(self, state: GameState, amount: int) -> ActionOutcome:
        state.gems = max(0, state.gems + amount)
        return ok(value=state.gems)
