"""Reward, cost and stat-ratchet formulas.

Every formula floors to an integer; currencies never hold fractions.
"""
from __future__ import annotations

import math
from typing import Tuple

# Upgrades: cost grows geometrically, stats grow linearly per level.
UPGRADE_COST_GROWTH = 1.5
WEAPON_ATTACK_PER_LEVEL = 10
ARMOR_DEFENSE_PER_LEVEL = 5
RELIC_ATTACK_PER_LEVEL = 22
RELIC_DEFENSE_PER_LEVEL = 15

# Victory rewards before streak and bonus scaling.
BASE_COIN_REWARD = 50
COIN_REWARD_PER_ZONE = 10
BASE_GEM_REWARD = 5
ZONES_PER_BONUS_GEM = 5

STREAK_BONUS_PER_ANSWER = 0.1

# A victory that shows the player needing more than this many hits on the
# defeated enemy doubles attack/defense and grows max HP by half.
ANTI_INFLATION_HIT_THRESHOLD = 5
ANTI_INFLATION_HP_MULTIPLIER = 1.5

CHECKPOINT_INTERVAL = 5
REVIVAL_COST_FRACTION = 0.5
PREMIUM_UNLOCK_ZONE = 50

FRAGMENT_ZONE_INTERVAL = 5
FRAGMENTS_PER_REDEMPTION = 5
MERCHANT_REWARD_CHOICES = 3

RELIC_SELL_FRACTION = 0.5
SHINY_GEM_EXCHANGE_RATE = 10
SHINY_GEM_CHANCE = 0.05

# Per-turn sustain.
REGEN_FRACTION = 0.05
HEALING_AURA_FRACTION = 0.10
VAMPIRIC_FRACTION = 0.25
PHOENIX_REVIVE_FRACTION = 0.5
POISON_FRACTION = 0.10
POISON_TURNS = 3

# Progression.
BASE_EXPERIENCE_REWARD = 10
EXPERIENCE_PER_ZONE = 5
EXPERIENCE_CURVE_GROWTH = 1.25
PRESTIGE_MIN_LEVEL = 50
LEVELS_PER_PRESTIGE_POINT = 10

# Research: coins in, permanent stat and multiplier bonuses out.
RESEARCH_CURVE_GROWTH = 1.5
RESEARCH_ATTACK_PER_LEVEL = 2
RESEARCH_DEFENSE_PER_LEVEL = 1
RESEARCH_HP_PER_LEVEL = 10
RESEARCH_MULTIPLIER_PER_LEVEL = 0.05

# Offline accrual per hour away.
OFFLINE_COINS_PER_ZONE_HOUR = 10
OFFLINE_GEM_ZONE_DIVISOR = 5

# Garden of Growth.
GARDEN_GROWTH_CM_PER_HOUR = 0.5
GARDEN_BONUS_PER_CM = 0.01
GARDEN_SEED_WATER_HOURS = 24

# Daily login rewards, capped at a weekly cycle.
DAILY_REWARD_MAX_DAY = 7
DAILY_COINS_PER_DAY = 100
DAILY_GEMS_PER_DAY = 10


def next_upgrade_cost(upgrade_cost: int) -> int:
    return int(upgrade_cost * UPGRADE_COST_GROWTH)


def streak_multiplier(current: int) -> float:
    # Rounded so 1 + n * 0.1 compares equal however it was accumulated.
    return round(1 + current * STREAK_BONUS_PER_ANSWER, 10)


def coin_reward(zone: int, multiplier: float, bonus: float = 1.0) -> int:
    return int((BASE_COIN_REWARD + zone * COIN_REWARD_PER_ZONE) * multiplier * bonus)


def gem_reward(zone: int, multiplier: float, bonus: float = 1.0) -> int:
    return int((BASE_GEM_REWARD + zone // ZONES_PER_BONUS_GEM) * multiplier * bonus)


def hits_needed(enemy_max_hp: int, attack: int, enemy_defense: int) -> int:
    return math.ceil(enemy_max_hp / max(1, attack - enemy_defense))


def needs_anti_inflation_boost(enemy_max_hp: int, attack: int, enemy_defense: int) -> bool:
    return hits_needed(enemy_max_hp, attack, enemy_defense) > ANTI_INFLATION_HIT_THRESHOLD


def checkpoint_zone(zone: int) -> int:
    """Return the checkpoint at or below ``zone`` (1, 6, 11, ...)."""
    return max(1, (zone - 1) // CHECKPOINT_INTERVAL * CHECKPOINT_INTERVAL + 1)


def revival_cost(coins: int, gems: int) -> Tuple[int, int]:
    return int(coins * REVIVAL_COST_FRACTION), int(gems * REVIVAL_COST_FRACTION)


def awards_fragment(new_zone: int, last_fragment_zone: int) -> bool:
    return new_zone % FRAGMENT_ZONE_INTERVAL == 0 and new_zone > last_fragment_zone


def relic_sell_value(cost: int) -> int:
    return int(cost * RELIC_SELL_FRACTION)


def experience_reward(zone: int, bonus: float = 1.0) -> int:
    return int((BASE_EXPERIENCE_REWARD + zone * EXPERIENCE_PER_ZONE) * bonus)


def next_experience_threshold(current: int) -> int:
    return int(current * EXPERIENCE_CURVE_GROWTH)


def prestige_points(level: int) -> int:
    return level // LEVELS_PER_PRESTIGE_POINT


def next_research_threshold(current: int) -> int:
    return int(current * RESEARCH_CURVE_GROWTH)


def offline_rewards(zone: int, hours: float) -> Tuple[int, int]:
    coins = int(hours * zone * OFFLINE_COINS_PER_ZONE_HOUR)
    gems = int(hours * max(1, zone // OFFLINE_GEM_ZONE_DIVISOR))
    return coins, gems


def garden_growth_bonus(growth_cm: float) -> float:
    return round(growth_cm * GARDEN_BONUS_PER_CM, 10)


def daily_reward(streak_day: int) -> Tuple[int, int]:
    day = max(1, min(streak_day, DAILY_REWARD_MAX_DAY))
    return DAILY_COINS_PER_DAY * day, DAILY_GEMS_PER_DAY * day
