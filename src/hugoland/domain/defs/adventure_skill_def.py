"""Adventure skill definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AdventureSkillType(str, Enum):
    """Closed set of combat-run modifiers."""

    RISKER = "risker"
    LIGHTNING_CHAIN = "lightning_chain"
    SKIP_CARD = "skip_card"
    METAL_SHIELD = "metal_shield"
    TRUTH_LIES = "truth_lies"
    RAMP = "ramp"
    DODGE = "dodge"
    BERSERKER = "berserker"
    VAMPIRIC = "vampiric"
    PHOENIX = "phoenix"
    TIME_SLOW = "time_slow"
    CRITICAL_STRIKE = "critical_strike"
    SHIELD_WALL = "shield_wall"
    POISON_BLADE = "poison_blade"
    ARCANE_SHIELD = "arcane_shield"
    BATTLE_FRENZY = "battle_frenzy"
    ELEMENTAL_MASTERY = "elemental_mastery"
    SHADOW_STEP = "shadow_step"
    HEALING_AURA = "healing_aura"
    DOUBLE_STRIKE = "double_strike"
    MANA_SHIELD = "mana_shield"
    BERSERK_RAGE = "berserk_rage"
    DIVINE_PROTECTION = "divine_protection"
    STORM_CALL = "storm_call"
    BLOOD_PACT = "blood_pact"
    FROST_ARMOR = "frost_armor"
    FIREBALL = "fireball"


@dataclass(slots=True)
class AdventureSkillDef:
    """Catalog entry for an adventure skill."""

    id: str
    name: str
    description: str
    type: AdventureSkillType
