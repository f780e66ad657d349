"""Experience, skill points, prestige and research."""
from __future__ import annotations

import logging

from hugoland.domain import economy
from hugoland.domain.state import GameState
from hugoland.services.outcomes import ActionOutcome, failed, ok

logger = logging.getLogger(__name__)


class ProgressionService:
    """Player levels and coin-funded research."""

    # -----------------------
    # Levels
    # -----------------------
    def grant_experience(self, state: GameState, amount: int) -> int:
        """Add experience and resolve every level-up it pays for. Returns levels gained."""
        progression = state.progression
        progression.experience += max(0, amount)
        levels_gained = 0
        while progression.experience >= progression.experience_to_next:
            progression.experience -= progression.experience_to_next
            progression.level += 1
            progression.skill_points += 1
            progression.experience_to_next = economy.next_experience_threshold(
                progression.experience_to_next
            )
            levels_gained += 1
        if levels_gained:
            logger.debug("Player reached level %d (+%d)", progression.level, levels_gained)
        return levels_gained

    def upgrade_skill(self, state: GameState, skill_id: str) -> ActionOutcome:
        progression = state.progression
        if progression.skill_points < 1:
            return failed("insufficient_skill_points", "No skill points available.")
        if skill_id in progression.unlocked_skills:
            return failed("already_unlocked", f"Skill '{skill_id}' is already unlocked.")
        progression.skill_points -= 1
        progression.unlocked_skills.append(skill_id)
        return ok(f"Unlocked skill '{skill_id}'.", value=skill_id)

    def prestige(self, state: GameState) -> ActionOutcome:
        progression = state.progression
        if progression.level < economy.PRESTIGE_MIN_LEVEL:
            return failed(
                "level_too_low",
                f"Prestige requires level {economy.PRESTIGE_MIN_LEVEL}.",
            )
        points = economy.prestige_points(progression.level)
        progression.level = 1
        progression.experience = 0
        progression.experience_to_next = 100
        progression.skill_points = 0
        progression.unlocked_skills = []
        progression.prestige_level += 1
        progression.prestige_points += points
        logger.info("Prestige %d reached, +%d points", progression.prestige_level, points)
        return ok(f"Prestiged for {points} points.", value=points)

    def set_experience(self, state: GameState, experience: int) -> ActionOutcome:
        state.progression.experience = max(0, experience)
        return ok(value=state.progression.experience)

    # -----------------------
    # Research
    # -----------------------
    def invest_research(self, state: GameState, amount: int) -> ActionOutcome:
        """Spend coins on research; every research level permanently raises stats."""
        if amount <= 0:
            return failed("invalid_amount", "Research investment must be positive.")
        if not state.spend_coins(amount):
            return failed("insufficient_coins", "Not enough coins.")
        research = state.research
        research.total_spent += amount
        research.experience += amount
        state.statistics.total_research_spent += amount

        levels_gained = 0
        while research.experience >= research.experience_to_next:
            research.experience -= research.experience_to_next
            research.level += 1
            research.experience_to_next = economy.next_research_threshold(research.experience_to_next)
            self._apply_research_level(state)
            levels_gained += 1
        return ok(f"Research advanced {levels_gained} level(s).", value=levels_gained)

    @staticmethod
    def _apply_research_level(state: GameState) -> None:
        bonuses = state.research.bonuses
        bonuses.attack += economy.RESEARCH_ATTACK_PER_LEVEL
        bonuses.defense += economy.RESEARCH_DEFENSE_PER_LEVEL
        bonuses.hp += economy.RESEARCH_HP_PER_LEVEL
        step = economy.RESEARCH_MULTIPLIER_PER_LEVEL
        bonuses.coin_multiplier = round(bonuses.coin_multiplier + step, 10)
        bonuses.gem_multiplier = round(bonuses.gem_multiplier + step, 10)
        bonuses.xp_multiplier = round(bonuses.xp_multiplier + step, 10)

        stats = state.player_stats
        stats.attack += economy.RESEARCH_ATTACK_PER_LEVEL
        stats.base_attack += economy.RESEARCH_ATTACK_PER_LEVEL
        stats.defense += economy.RESEARCH_DEFENSE_PER_LEVEL
        stats.base_defense += economy.RESEARCH_DEFENSE_PER_LEVEL
        stats.max_hp += economy.RESEARCH_HP_PER_LEVEL
        stats.base_hp += economy.RESEARCH_HP_PER_LEVEL
        stats.hp += economy.RESEARCH_HP_PER_LEVEL
