"""State transition engine: the only writer of game state."""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Sequence, Type

from hugoland.core.clock import Clock, utc_now
from hugoland.core.rng import RNG
from hugoland.data.repositories import AdventureSkillsRepository, MenuSkillsRepository
from hugoland.domain.defs import AdventureSkillDef, MenuSkillDef
from hugoland.domain.invariants import enforce_invariants
from hugoland.domain.state import MARKET_REFRESH_INTERVAL, GameState, create_initial_state
from hugoland.services import events as ev
from hugoland.services.combat_service import CombatService
from hugoland.services.factories import ContentFactory, DefaultContentFactory
from hugoland.services.garden_service import GardenService
from hugoland.services.inventory_service import InventoryService
from hugoland.services.outcomes import ActionOutcome, ok
from hugoland.services.progression_service import ProgressionService
from hugoland.services.rewards_service import RewardsService
from hugoland.services.scheduler import Scheduler
from hugoland.services.settings_service import SettingsService
from hugoland.services.shop_service import ShopService
from hugoland.services.skills_service import SkillsService

logger = logging.getLogger(__name__)

Handler = Callable[[GameState, Any], ActionOutcome]


@dataclass(slots=True)
class TransitionResult:
    """
    Snapshot produced by one event.

    On failure ``state`` is the exact snapshot that was passed in and
    ``reason`` names the unmet precondition.
    """

    state: GameState
    success: bool = True
    reason: str | None = None
    message: str = ""
    value: Any = None


class GameEngine:
    """Maps ``(snapshot, event)`` to the next snapshot."""

    def __init__(
        self,
        *,
        rng: RNG | None = None,
        factory: ContentFactory | None = None,
        clock: Clock = utc_now,
        adventure_skills: Sequence[AdventureSkillDef] | None = None,
        menu_skills: Sequence[MenuSkillDef] | None = None,
        market_refresh: timedelta = MARKET_REFRESH_INTERVAL,
    ) -> None:
        self._rng = rng or RNG()
        self._factory = factory or DefaultContentFactory(self._rng)
        self._clock = clock
        if adventure_skills is None:
            adventure_skills = AdventureSkillsRepository().all()
        if menu_skills is None:
            menu_skills = MenuSkillsRepository().all()

        self.progression = ProgressionService()
        self.combat = CombatService(self._factory, self._rng, adventure_skills, self.progression)
        self.inventory = InventoryService()
        self.shop = ShopService(self._factory, self._rng, market_refresh=market_refresh)
        self.rewards = RewardsService(self._rng)
        self.garden = GardenService()
        self.skills = SkillsService(self._rng, menu_skills)
        self.settings = SettingsService()
        self.scheduler = Scheduler(
            shop=self.shop, skills=self.skills, garden=self.garden, rewards=self.rewards
        )
        self._handlers: Dict[Type[ev.GameEvent], Handler] = self._build_handlers()

    def now(self) -> datetime:
        return self._clock()

    def new_game(self) -> GameState:
        """Return a fresh state with a stocked market and today's daily reward offered."""
        now = self._clock()
        state = create_initial_state(now, self.shop.stock_market())
        self.rewards.refresh_daily_reward(state, now)
        logger.info("Created a new game")
        return state

    def apply(self, state: GameState, event: ev.GameEvent) -> TransitionResult:
        """
        Apply ``event`` to a private copy of ``state``.

        Raises TypeError for event types the engine does not know; every
        gameplay precondition failure is reported through the result instead.
        """

        if isinstance(event, ev.ResetGame):
            return TransitionResult(state=self.new_game(), message="Game reset.")
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")

        working = copy.deepcopy(state)
        outcome = handler(working, event)
        if not outcome.success:
            logger.debug("%s rejected: %s", type(event).__name__, outcome.reason)
            return TransitionResult(
                state=state, success=False, reason=outcome.reason, message=outcome.message
            )

        corrections = enforce_invariants(working)
        if corrections:
            logger.debug("%s corrected: %s", type(event).__name__, "; ".join(corrections))
        return TransitionResult(state=working, message=outcome.message, value=outcome.value)

    def _build_handlers(self) -> Dict[Type[ev.GameEvent], Handler]:
        combat = self.combat
        inventory = self.inventory
        shop = self.shop
        rewards = self.rewards
        progression = self.progression
        settings = self.settings
        now = self._clock
        return {
            ev.StartCombat: lambda s, e: combat.start_combat(s),
            ev.SelectAdventureSkill: lambda s, e: combat.select_adventure_skill(s, e.skill_id),
            ev.SkipAdventureSkills: lambda s, e: combat.skip_adventure_skills(s),
            ev.UseSkipCard: lambda s, e: combat.use_skip_card(s),
            ev.Attack: lambda s, e: combat.attack(s, e.hit, e.category),
            ev.ReviveAtCheckpoint: lambda s, e: combat.revive_at_checkpoint(s),
            ev.EquipItem: lambda s, e: inventory.equip(s, e.kind, e.item_id),
            ev.UnequipRelic: lambda s, e: inventory.unequip_relic(s, e.relic_id),
            ev.UpgradeItem: lambda s, e: inventory.upgrade(s, e.kind, e.item_id),
            ev.BulkUpgrade: lambda s, e: inventory.bulk_upgrade(s, e.kind, e.item_ids),
            ev.SellItem: lambda s, e: inventory.sell(s, e.kind, e.item_id),
            ev.BulkSell: lambda s, e: inventory.bulk_sell(s, e.kind, e.item_ids),
            ev.DiscardItem: lambda s, e: inventory.discard(s, e.kind, e.item_id),
            ev.OpenChest: lambda s, e: shop.open_chest(s, e.cost),
            ev.PurchaseMythical: lambda s, e: shop.purchase_mythical(s, e.cost),
            ev.PurchaseRelic: lambda s, e: shop.purchase_relic(s, e.relic_id),
            ev.RefreshMarket: lambda s, e: shop.refresh_market(s, now()),
            ev.MineGem: lambda s, e: shop.mine_gem(s),
            ev.ExchangeShinyGems: lambda s, e: shop.exchange_shiny_gems(s, e.amount),
            ev.AddCoins: lambda s, e: shop.grant_debug_coins(s, e.amount),
            ev.AddGems: lambda s, e: shop.grant_debug_gems(s, e.amount),
            ev.ClaimDailyReward: lambda s, e: rewards.claim_daily_reward(s, now()),
            ev.ClaimOfflineRewards: lambda s, e: rewards.claim_offline_rewards(s),
            ev.SpendFragments: lambda s, e: rewards.spend_fragments(s),
            ev.SelectMerchantReward: lambda s, e: rewards.select_merchant_reward(s, e.reward_id),
            ev.PlantSeed: lambda s, e: self.garden.plant_seed(s, now()),
            ev.BuyWater: lambda s, e: self.garden.buy_water(s, e.hours, now()),
            ev.RollMenuSkill: lambda s, e: self.skills.roll(s, now()),
            ev.UpgradeSkill: lambda s, e: progression.upgrade_skill(s, e.skill_id),
            ev.Prestige: lambda s, e: progression.prestige(s),
            ev.InvestResearch: lambda s, e: progression.invest_research(s, e.amount),
            ev.SetExperience: lambda s, e: progression.set_experience(s, e.experience),
            ev.SetGameMode: lambda s, e: settings.set_game_mode(s, e.mode),
            ev.ToggleCheat: lambda s, e: settings.toggle_cheat(s, e.cheat),
            ev.UpdateSettings: lambda s, e: settings.update_settings(s, e.changes),
            ev.TeleportZone: lambda s, e: settings.teleport(s, e.zone),
            ev.Tick: lambda s, e: ok(value=self.scheduler.run_due(s, e.now)),
        }
