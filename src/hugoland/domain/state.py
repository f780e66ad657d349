"""Domain-level state tracking.

``GameState`` is the single root aggregate. Every subsystem hangs off it and
the transition engine replaces it wholesale on each event.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List

from hugoland.core.types import RARITIES, GameModeName, MerchantRewardType
from hugoland.domain import economy
from hugoland.domain.adventure_skills import AdventureSkillsState
from hugoland.domain.entities import Enemy, PlayerStats, RelicItem
from hugoland.domain.inventory import Inventory
from hugoland.domain.menu_skills import MenuSkillsState

MARKET_REFRESH_INTERVAL = timedelta(minutes=5)
STARTING_COINS = 500
STARTING_GEMS = 50


@dataclass(slots=True)
class KnowledgeStreak:
    current: int = 0
    best: int = 0
    multiplier: float = 1.0


@dataclass(slots=True)
class YojefMarket:
    """Relic shop whose stock rotates on a fixed interval."""

    items: List[RelicItem] = field(default_factory=list)
    last_refresh: datetime | None = None
    next_refresh: datetime | None = None


@dataclass(slots=True)
class GardenOfGrowth:
    is_planted: bool = False
    planted_at: datetime | None = None
    last_watered: datetime | None = None
    last_growth_tick: datetime | None = None
    water_hours_remaining: int = 0
    growth_cm: float = 0.0
    total_growth_bonus: float = 0.0
    seed_cost: int = 1000
    water_cost: int = 1000
    max_growth_cm: float = 100.0


@dataclass(slots=True)
class ResearchBonuses:
    attack: int = 0
    defense: int = 0
    hp: int = 0
    coin_multiplier: float = 1.0
    gem_multiplier: float = 1.0
    xp_multiplier: float = 1.0


@dataclass(slots=True)
class Research:
    level: int = 1
    experience: int = 0
    experience_to_next: int = 100
    total_spent: int = 0
    bonuses: ResearchBonuses = field(default_factory=ResearchBonuses)


@dataclass(slots=True)
class Progression:
    level: int = 1
    experience: int = 0
    experience_to_next: int = 100
    skill_points: int = 0
    unlocked_skills: List[str] = field(default_factory=list)
    prestige_level: int = 0
    prestige_points: int = 0
    mastery_levels: Dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class DailyReward:
    day: int
    coins: int
    gems: int
    claimed: bool = False
    claim_date: datetime | None = None


@dataclass(slots=True)
class DailyRewards:
    last_claim_date: datetime | None = None
    current_streak: int = 0
    max_streak: int = 0
    available_reward: DailyReward | None = None
    reward_history: List[DailyReward] = field(default_factory=list)


@dataclass(slots=True)
class MerchantReward:
    id: str
    type: MerchantRewardType
    name: str
    description: str
    coins: int = 0
    gems: int = 0


@dataclass(slots=True)
class Merchant:
    """Hugoland Fragment wallet and the pending reward choice, if any."""

    hugoland_fragments: int = 0
    total_fragments_earned: int = 0
    last_fragment_zone: int = 0
    show_reward_modal: bool = False
    available_rewards: List[MerchantReward] = field(default_factory=list)


@dataclass(slots=True)
class OfflineProgress:
    last_save_time: datetime | None = None
    offline_coins: int = 0
    offline_gems: int = 0
    offline_time: int = 0
    max_offline_hours: int = 24


@dataclass(slots=True)
class CategoryAccuracy:
    correct: int = 0
    total: int = 0


@dataclass(slots=True)
class Statistics:
    total_questions_answered: int = 0
    correct_answers: int = 0
    total_play_time: int = 0
    zones_reached: int = 1
    items_collected: int = 0
    coins_earned: int = 0
    gems_earned: int = 0
    shiny_gems_earned: int = 0
    chests_opened: int = 0
    accuracy_by_category: Dict[str, CategoryAccuracy] = field(default_factory=dict)
    session_start_time: datetime | None = None
    total_deaths: int = 0
    total_victories: int = 0
    longest_streak: int = 0
    fastest_victory: int = 0
    total_damage_dealt: int = 0
    total_damage_taken: int = 0
    items_upgraded: int = 0
    items_sold: int = 0
    total_research_spent: int = 0
    average_accuracy: float = 0.0
    revivals: int = 0


@dataclass(slots=True)
class Cheats:
    infinite_coins: bool = False
    infinite_gems: bool = False
    obtain_any_item: bool = False


@dataclass(slots=True)
class Mining:
    total_gems_mined: int = 0
    total_shiny_gems_mined: int = 0


@dataclass(slots=True)
class Settings:
    colorblind_mode: bool = False
    dark_mode: bool = True
    language: str = "en"
    notifications: bool = True
    snap_to_grid: bool = False
    beauty_mode: bool = False


def _empty_rarity_stats() -> Dict[str, int]:
    return {rarity: 0 for rarity in RARITIES}


@dataclass(slots=True)
class CollectionBook:
    weapons: Dict[str, bool] = field(default_factory=dict)
    armor: Dict[str, bool] = field(default_factory=dict)
    total_weapons_found: int = 0
    total_armor_found: int = 0
    rarity_stats: Dict[str, int] = field(default_factory=_empty_rarity_stats)


@dataclass(slots=True)
class GameModeState:
    current: GameModeName = "normal"
    speed_mode_active: bool = False
    survival_lives: int = 3
    max_survival_lives: int = 3


@dataclass(slots=True)
class Multipliers:
    coins: float = 1.0
    gems: float = 1.0
    attack: float = 1.0
    defense: float = 1.0
    hp: float = 1.0


@dataclass
class GameState:
    """Complete single-player game state."""

    coins: int = STARTING_COINS
    gems: int = STARTING_GEMS
    shiny_gems: int = 0
    zone: int = 1
    player_stats: PlayerStats = field(default_factory=PlayerStats)
    inventory: Inventory = field(default_factory=Inventory)
    current_enemy: Enemy | None = None
    in_combat: bool = False
    combat_log: List[str] = field(default_factory=list)
    is_premium: bool = False
    has_used_revival: bool = False
    knowledge_streak: KnowledgeStreak = field(default_factory=KnowledgeStreak)
    adventure_skills: AdventureSkillsState = field(default_factory=AdventureSkillsState)
    skills: MenuSkillsState = field(default_factory=MenuSkillsState)
    yojef_market: YojefMarket = field(default_factory=YojefMarket)
    garden_of_growth: GardenOfGrowth = field(default_factory=GardenOfGrowth)
    research: Research = field(default_factory=Research)
    progression: Progression = field(default_factory=Progression)
    daily_rewards: DailyRewards = field(default_factory=DailyRewards)
    merchant: Merchant = field(default_factory=Merchant)
    offline_progress: OfflineProgress = field(default_factory=OfflineProgress)
    statistics: Statistics = field(default_factory=Statistics)
    cheats: Cheats = field(default_factory=Cheats)
    mining: Mining = field(default_factory=Mining)
    settings: Settings = field(default_factory=Settings)
    collection_book: CollectionBook = field(default_factory=CollectionBook)
    game_mode: GameModeState = field(default_factory=GameModeState)
    multipliers: Multipliers = field(default_factory=Multipliers)
    # Owned by external evaluators; the engine stores them opaquely.
    achievements: List[Dict[str, Any]] = field(default_factory=list)
    player_tags: List[Dict[str, Any]] = field(default_factory=list)

    def can_spend_coins(self, amount: int) -> bool:
        return self.cheats.infinite_coins or self.coins >= amount

    def can_spend_gems(self, amount: int) -> bool:
        return self.cheats.infinite_gems or self.gems >= amount

    def spend_coins(self, amount: int) -> bool:
        """Deduct coins if affordable; the infinite coins cheat makes every purchase free."""
        if not self.can_spend_coins(amount):
            return False
        if not self.cheats.infinite_coins:
            self.coins -= amount
        return True

    def spend_gems(self, amount: int) -> bool:
        if not self.can_spend_gems(amount):
            return False
        if not self.cheats.infinite_gems:
            self.gems -= amount
        return True

    def set_streak(self, current: int) -> None:
        streak = self.knowledge_streak
        streak.current = current
        streak.best = max(streak.best, current)
        streak.multiplier = economy.streak_multiplier(current)


def create_initial_state(now: datetime, market_items: List[RelicItem]) -> GameState:
    """Build a fresh game with a stocked market and every clock stamped at ``now``."""
    state = GameState()
    state.yojef_market = YojefMarket(
        items=list(market_items),
        last_refresh=now,
        next_refresh=now + MARKET_REFRESH_INTERVAL,
    )
    state.offline_progress.last_save_time = now
    state.statistics.session_start_time = now
    state.skills.session_start_time = now
    return state
