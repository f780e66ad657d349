"""Adventure skills: per-run combat modifiers chosen from three random draws."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from hugoland.core.rng import RNG
from hugoland.domain.defs import AdventureSkillDef, AdventureSkillType
from hugoland.domain.entities import PlayerStats

SKILLS_PER_DRAW = 3
RISKER_HP_MULTIPLIER = 1.5
BERSERKER_ATTACK_MULTIPLIER = 2
BERSERKER_DEFENSE_MULTIPLIER = 0.5

# One-shot variants track consumption with a "*_used" flag and are live only
# while they are the selected skill. Every other variant is a plain "*_active" flag.
ONE_SHOT_SKILLS = frozenset(
    {
        AdventureSkillType.SKIP_CARD,
        AdventureSkillType.METAL_SHIELD,
        AdventureSkillType.DODGE,
        AdventureSkillType.PHOENIX,
        AdventureSkillType.SHADOW_STEP,
        AdventureSkillType.DIVINE_PROTECTION,
    }
)


@dataclass(slots=True)
class AdventureSkill:
    """A drawn adventure skill offered to the player."""

    id: str
    name: str
    description: str
    type: AdventureSkillType


@dataclass(slots=True)
class SkillEffects:
    """Fixed-shape flag set, one flag per adventure skill type."""

    skip_card_used: bool = False
    metal_shield_used: bool = False
    dodge_used: bool = False
    truth_lies_active: bool = False
    lightning_chain_active: bool = False
    ramp_active: bool = False
    berserker_active: bool = False
    vampiric_active: bool = False
    phoenix_used: bool = False
    time_slow_active: bool = False
    critical_strike_active: bool = False
    shield_wall_active: bool = False
    poison_blade_active: bool = False
    arcane_shield_active: bool = False
    battle_frenzy_active: bool = False
    elemental_mastery_active: bool = False
    shadow_step_used: bool = False
    healing_aura_active: bool = False
    double_strike_active: bool = False
    mana_shield_active: bool = False
    berserk_rage_active: bool = False
    divine_protection_used: bool = False
    storm_call_active: bool = False
    blood_pact_active: bool = False
    frost_armor_active: bool = False
    fireball_active: bool = False
    risker_active: bool = False


def effect_flag_name(skill_type: AdventureSkillType) -> str:
    suffix = "used" if skill_type in ONE_SHOT_SKILLS else "active"
    return f"{skill_type.value}_{suffix}"


@dataclass(slots=True)
class AdventureSkillsState:
    """Selection round state plus the effects of the chosen skill."""

    selected_skill: AdventureSkill | None = None
    available_skills: List[AdventureSkill] = field(default_factory=list)
    show_selection_modal: bool = False
    skill_effects: SkillEffects = field(default_factory=SkillEffects)

    @property
    def selected_type(self) -> AdventureSkillType | None:
        return self.selected_skill.type if self.selected_skill else None

    def is_active(self, skill_type: AdventureSkillType) -> bool:
        """Return True when the skill's effect should fire right now."""
        flag = getattr(self.skill_effects, effect_flag_name(skill_type))
        if skill_type in ONE_SHOT_SKILLS:
            return self.selected_type == skill_type and not flag
        return bool(flag)

    def mark_used(self, skill_type: AdventureSkillType) -> None:
        if skill_type not in ONE_SHOT_SKILLS:
            raise ValueError(f"{skill_type.value} is not a one-shot skill.")
        setattr(self.skill_effects, effect_flag_name(skill_type), True)

    def find_available(self, skill_id: str) -> AdventureSkill | None:
        return next((skill for skill in self.available_skills if skill.id == skill_id), None)


def draw_adventure_skills(
    catalog: Sequence[AdventureSkillDef], rng: RNG, *, count: int = SKILLS_PER_DRAW
) -> List[AdventureSkill]:
    """Draw ``count`` distinct entries from the catalog."""
    drawn: List[AdventureSkill] = []
    for index, skill_def in enumerate(rng.sample(catalog, count)):
        drawn.append(
            AdventureSkill(
                id=f"skill_{index}_{rng.randint(100000, 999999)}",
                name=skill_def.name,
                description=skill_def.description,
                type=skill_def.type,
            )
        )
    return drawn


def begin_selection_round(skills: AdventureSkillsState, offered: List[AdventureSkill]) -> None:
    skills.available_skills = offered
    skills.show_selection_modal = True
    skills.selected_skill = None
    skills.skill_effects = SkillEffects()


def activate_adventure_skill(
    skills: AdventureSkillsState, stats: PlayerStats, skill: AdventureSkill
) -> None:
    """
    Make ``skill`` the run's modifier.

    Risker and Berserker reshape the player's stats immediately. Those changes
    are not reverted when the run ends.
    """

    skills.selected_skill = skill
    skills.show_selection_modal = False
    effects = SkillEffects()
    if skill.type not in ONE_SHOT_SKILLS:
        setattr(effects, effect_flag_name(skill.type), True)
    skills.skill_effects = effects

    if skill.type is AdventureSkillType.RISKER:
        stats.max_hp = int(stats.max_hp * RISKER_HP_MULTIPLIER)
        stats.hp = stats.max_hp
    elif skill.type is AdventureSkillType.BERSERKER:
        stats.attack = int(stats.attack * BERSERKER_ATTACK_MULTIPLIER)
        stats.defense = int(stats.defense * BERSERKER_DEFENSE_MULTIPLIER)


def skip_selection(skills: AdventureSkillsState) -> None:
    skills.selected_skill = None
    skills.show_selection_modal = False
