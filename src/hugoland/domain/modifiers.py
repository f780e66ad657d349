"""Ordered damage pipelines that adventure skills plug into.

Three pipelines run during a turn:

- offence: scales the damage of a correct answer, every active stage applies.
- avoidance: on a wrong answer, the first stage that fires cancels the hit.
- mitigation: scales incoming damage that was not avoided.

Each stage belongs to one adventure skill type and only runs while that skill
is active, so the composition order lives in the tuples below.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Tuple

from hugoland.core.rng import RNG
from hugoland.domain.adventure_skills import AdventureSkillsState
from hugoland.domain.defs import AdventureSkillType
from hugoland.domain.entities import PlayerStats

CRITICAL_STRIKE_CHANCE = 0.25
DODGE_CHANCE = 0.5
RAMP_BONUS_PER_STREAK = 0.1
BLOOD_PACT_SACRIFICE = 0.2
BLOOD_PACT_MULTIPLIER = 3
ELEMENTAL_MASTERY_MULTIPLIER = 1.5
SHIELD_WALL_MULTIPLIER = 0.5
BERSERKER_DAMAGE_TAKEN_MULTIPLIER = 1.5
RISKER_DAMAGE_TAKEN_MULTIPLIER = 1.25


@dataclass(slots=True)
class TurnContext:
    """Mutable per-turn scratch data shared by the stages of one pipeline."""

    damage: int
    stats: PlayerStats
    skills: AdventureSkillsState
    rng: RNG
    log: List[str]
    streak: int = 0
    category: str | None = None


@dataclass(frozen=True, slots=True)
class DamageStage:
    skill_type: AdventureSkillType
    apply: Callable[[TurnContext], None]


@dataclass(frozen=True, slots=True)
class AvoidanceStage:
    skill_type: AdventureSkillType
    avoids: Callable[[TurnContext], bool]


# -----------------------
# Offence
# -----------------------
def _berserker(ctx: TurnContext) -> None:
    ctx.damage *= 2


def _critical_strike(ctx: TurnContext) -> None:
    if ctx.rng.random() < CRITICAL_STRIKE_CHANCE:
        ctx.damage *= 2
        ctx.log.append("Critical Strike! Double damage!")


def _double_strike(ctx: TurnContext) -> None:
    ctx.damage *= 2
    ctx.log.append("Double Strike activated!")


def _ramp(ctx: TurnContext) -> None:
    ctx.damage = int(ctx.damage * (1 + ctx.streak * RAMP_BONUS_PER_STREAK))


def _berserk_rage(ctx: TurnContext) -> None:
    hp_percent = ctx.stats.hp / ctx.stats.max_hp if ctx.stats.max_hp > 0 else 1.0
    ctx.damage = int(ctx.damage * (1 + (1 - hp_percent)))


def _blood_pact(ctx: TurnContext) -> None:
    sacrifice = int(ctx.stats.hp * BLOOD_PACT_SACRIFICE)
    ctx.stats.hp = max(1, ctx.stats.hp - sacrifice)
    ctx.damage *= BLOOD_PACT_MULTIPLIER
    ctx.log.append(f"Blood Pact: Sacrificed {sacrifice} HP for massive damage!")


def _elemental_mastery(ctx: TurnContext) -> None:
    if not ctx.category:
        return
    ctx.damage = int(ctx.damage * ELEMENTAL_MASTERY_MULTIPLIER)
    ctx.log.append(f"Elemental Mastery: +50% damage from {ctx.category}!")


OFFENCE_PIPELINE: Tuple[DamageStage, ...] = (
    DamageStage(AdventureSkillType.BERSERKER, _berserker),
    DamageStage(AdventureSkillType.CRITICAL_STRIKE, _critical_strike),
    DamageStage(AdventureSkillType.DOUBLE_STRIKE, _double_strike),
    DamageStage(AdventureSkillType.RAMP, _ramp),
    DamageStage(AdventureSkillType.BERSERK_RAGE, _berserk_rage),
    DamageStage(AdventureSkillType.BLOOD_PACT, _blood_pact),
    DamageStage(AdventureSkillType.ELEMENTAL_MASTERY, _elemental_mastery),
)


# -----------------------
# Avoidance
# -----------------------
def _shadow_step(ctx: TurnContext) -> bool:
    ctx.skills.mark_used(AdventureSkillType.SHADOW_STEP)
    ctx.log.append("Shadow Step: First wrong answer ignored!")
    return True


def _dodge(ctx: TurnContext) -> bool:
    # Never consumes dodge_used, so every wrong answer gets a fresh roll.
    if ctx.rng.random() < DODGE_CHANCE:
        ctx.log.append("Dodged the attack!")
        return True
    return False


def _metal_shield(ctx: TurnContext) -> bool:
    ctx.skills.mark_used(AdventureSkillType.METAL_SHIELD)
    ctx.log.append("Metal Shield: Attack blocked!")
    return True


def _arcane_shield(ctx: TurnContext) -> bool:
    ctx.log.append("Arcane Shield: Immune to damage!")
    return True


def _divine_protection(ctx: TurnContext) -> bool:
    if ctx.stats.hp - ctx.damage > 0:
        return False
    ctx.skills.mark_used(AdventureSkillType.DIVINE_PROTECTION)
    ctx.log.append("Divine Protection: Cannot die!")
    return True


AVOIDANCE_PIPELINE: Tuple[AvoidanceStage, ...] = (
    AvoidanceStage(AdventureSkillType.SHADOW_STEP, _shadow_step),
    AvoidanceStage(AdventureSkillType.DODGE, _dodge),
    AvoidanceStage(AdventureSkillType.METAL_SHIELD, _metal_shield),
    AvoidanceStage(AdventureSkillType.ARCANE_SHIELD, _arcane_shield),
    AvoidanceStage(AdventureSkillType.DIVINE_PROTECTION, _divine_protection),
)


# -----------------------
# Mitigation
# -----------------------
def _shield_wall(ctx: TurnContext) -> None:
    ctx.damage = int(ctx.damage * SHIELD_WALL_MULTIPLIER)
    ctx.log.append("Shield Wall: Damage reduced by 50%!")


def _berserker_exposed(ctx: TurnContext) -> None:
    ctx.damage = int(ctx.damage * BERSERKER_DAMAGE_TAKEN_MULTIPLIER)


def _risker_exposed(ctx: TurnContext) -> None:
    ctx.damage = int(ctx.damage * RISKER_DAMAGE_TAKEN_MULTIPLIER)


MITIGATION_PIPELINE: Tuple[DamageStage, ...] = (
    DamageStage(AdventureSkillType.SHIELD_WALL, _shield_wall),
    DamageStage(AdventureSkillType.BERSERKER, _berserker_exposed),
    DamageStage(AdventureSkillType.RISKER, _risker_exposed),
)


def run_damage_pipeline(pipeline: Tuple[DamageStage, ...], ctx: TurnContext) -> int:
    for stage in pipeline:
        if ctx.skills.is_active(stage.skill_type):
            stage.apply(ctx)
    return ctx.damage


def run_avoidance_pipeline(ctx: TurnContext) -> bool:
    """Return True when some active stage cancels the incoming hit."""
    for stage in AVOIDANCE_PIPELINE:
        if ctx.skills.is_active(stage.skill_type) and stage.avoids(ctx):
            return True
    return False
