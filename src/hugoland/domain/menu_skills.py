"""Menu skills: time-boxed meta buffs rolled outside of combat."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Sequence

from hugoland.core.rng import RNG
from hugoland.domain.defs import MenuSkillDef

MENU_SKILL_ROLL_COST = 100
MIN_DURATION_HOURS = 2
MAX_DURATION_HOURS = 8


@dataclass(slots=True)
class MenuSkill:
    id: str
    type: str
    name: str
    description: str
    duration_hours: int
    activated_at: datetime
    expires_at: datetime
    coin_bonus: float = 1.0
    gem_bonus: float = 1.0
    xp_bonus: float = 1.0

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(slots=True)
class MenuSkillsState:
    active_menu_skill: MenuSkill | None = None
    last_roll_time: datetime | None = None
    play_time_this_session: int = 0
    session_start_time: datetime | None = None

    def bonus(self, kind: str) -> float:
        """Reward multiplier granted by the active skill for coins, gems or xp."""
        skill = self.active_menu_skill
        if skill is None:
            return 1.0
        return {"coins": skill.coin_bonus, "gems": skill.gem_bonus, "xp": skill.xp_bonus}[kind]


def roll_menu_skill(catalog: Sequence[MenuSkillDef], rng: RNG, now: datetime) -> MenuSkill:
    """Pick a uniformly random menu skill lasting 2-8 hours from ``now``."""
    skill_def = rng.choice(list(catalog))
    duration = rng.randint(MIN_DURATION_HOURS, MAX_DURATION_HOURS)
    return MenuSkill(
        id=f"menu_{rng.randint(100000, 999999)}",
        type=skill_def.id,
        name=skill_def.name,
        description=skill_def.description,
        duration_hours=duration,
        activated_at=now,
        expires_at=now + timedelta(hours=duration),
        coin_bonus=skill_def.coin_bonus,
        gem_bonus=skill_def.gem_bonus,
        xp_bonus=skill_def.xp_bonus,
    )
