"""Menu skill rolling and expiry."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from hugoland.core.rng import RNG
from hugoland.domain.defs import MenuSkillDef
from hugoland.domain.menu_skills import MENU_SKILL_ROLL_COST, roll_menu_skill
from hugoland.domain.state import GameState
from hugoland.services.outcomes import ActionOutcome, failed, ok

logger = logging.getLogger(__name__)


class SkillsService:
    def __init__(self, rng: RNG, catalog: Sequence[MenuSkillDef]) -> None:
        self._rng = rng
        self._catalog = list(catalog)

    def roll(self, state: GameState, now: datetime) -> ActionOutcome:
        """Pay for a new random menu skill; it replaces any skill still running."""
        if not state.spend_coins(MENU_SKILL_ROLL_COST):
            return failed("insufficient_coins", f"Rolling a skill costs {MENU_SKILL_ROLL_COST} coins.")
        skill = roll_menu_skill(self._catalog, self._rng, now)
        state.skills.active_menu_skill = skill
        state.skills.last_roll_time = now
        return ok(f"{skill.name} active for {skill.duration_hours} hours.", value=skill)

    def expire(self, state: GameState, now: datetime) -> bool:
        skill = state.skills.active_menu_skill
        if skill is None or not skill.is_expired(now):
            return False
        state.skills.active_menu_skill = None
        logger.info("Menu skill %s expired", skill.type)
        return True
