"""Combat service resolving one trivia answer per turn."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from hugoland.core.rng import RNG
from hugoland.domain import economy
from hugoland.domain.adventure_skills import (
    activate_adventure_skill,
    begin_selection_round,
    draw_adventure_skills,
    skip_selection,
)
from hugoland.domain.defs import AdventureSkillDef, AdventureSkillType
from hugoland.domain.entities import Enemy
from hugoland.domain.modifiers import (
    MITIGATION_PIPELINE,
    OFFENCE_PIPELINE,
    TurnContext,
    run_avoidance_pipeline,
    run_damage_pipeline,
)
from hugoland.domain.state import CategoryAccuracy, GameState
from hugoland.services.factories import ContentFactory
from hugoland.services.outcomes import ActionOutcome, failed, ok
from hugoland.services.progression_service import ProgressionService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AttackReport:
    """Summary of one resolved turn."""

    hit: bool
    damage_dealt: int = 0
    damage_taken: int = 0
    poison_damage: int = 0
    avoided: bool = False
    revived: bool = False
    victory: bool = False
    defeat: bool = False
    coins_gained: int = 0
    gems_gained: int = 0
    experience_gained: int = 0
    fragment_found: bool = False
    anti_inflation_boost: bool = False


class CombatService:
    """Drives the NotInCombat -> SelectingSkill -> InCombat state machine."""

    def __init__(
        self,
        factory: ContentFactory,
        rng: RNG,
        skill_catalog: Sequence[AdventureSkillDef],
        progression: ProgressionService,
    ) -> None:
        self._factory = factory
        self._rng = rng
        self._skill_catalog = list(skill_catalog)
        self._progression = progression

    # -----------------------
    # Run Lifecycle
    # -----------------------
    def start_combat(self, state: GameState) -> ActionOutcome:
        if state.in_combat:
            return failed("in_combat", "Already in combat.")
        if state.adventure_skills.show_selection_modal:
            return failed("selecting", "An adventure skill selection is already open.")
        offered = draw_adventure_skills(self._skill_catalog, self._rng)
        begin_selection_round(state.adventure_skills, offered)
        return ok("Choose an adventure skill.", value=offered)

    def select_adventure_skill(self, state: GameState, skill_id: str) -> ActionOutcome:
        skills = state.adventure_skills
        if not skills.show_selection_modal:
            return failed("not_selecting", "No adventure skill selection is open.")
        skill = skills.find_available(skill_id)
        if skill is None:
            return failed("not_found", f"Adventure skill '{skill_id}' was not offered.")
        activate_adventure_skill(skills, state.player_stats, skill)
        enemy = self._enter_combat(state)
        state.combat_log.append(f"{skill.name} is now active!")
        logger.debug("Run started in zone %d with %s", state.zone, skill.type.value)
        return ok(f"{skill.name} is now active!", value=enemy)

    def skip_adventure_skills(self, state: GameState) -> ActionOutcome:
        if not state.adventure_skills.show_selection_modal:
            return failed("not_selecting", "No adventure skill selection is open.")
        skip_selection(state.adventure_skills)
        enemy = self._enter_combat(state)
        logger.debug("Run started in zone %d without a skill", state.zone)
        return ok(value=enemy)

    def use_skip_card(self, state: GameState) -> ActionOutcome:
        if not state.in_combat:
            return failed("not_in_combat", "Not in combat.")
        skills = state.adventure_skills
        if not skills.is_active(AdventureSkillType.SKIP_CARD):
            return failed("skill_unavailable", "No unused Skip Card.")
        skills.mark_used(AdventureSkillType.SKIP_CARD)
        state.combat_log.append("Skip Card used! Question skipped.")
        return ok()

    def revive_at_checkpoint(self, state: GameState) -> ActionOutcome:
        if state.in_combat:
            return failed("in_combat", "Cannot revive during combat.")
        coin_cost, gem_cost = economy.revival_cost(state.coins, state.gems)
        if not (state.can_spend_coins(coin_cost) and state.can_spend_gems(gem_cost)):
            return failed("insufficient_funds", "Not enough coins and gems to revive.")
        state.spend_coins(coin_cost)
        state.spend_gems(gem_cost)
        revive_zone = economy.checkpoint_zone(state.zone)
        state.zone = revive_zone
        state.player_stats.hp = state.player_stats.max_hp
        self._clear_combat(state)
        state.has_used_revival = False
        state.statistics.revivals += 1
        state.combat_log = [
            f"You have been revived at checkpoint Zone {revive_zone}! "
            f"Lost {coin_cost} coins and {gem_cost} gems."
        ]
        logger.info("Revived at checkpoint zone %d", revive_zone)
        return ok(state.combat_log[0], value=revive_zone)

    # -----------------------
    # Turn Resolution
    # -----------------------
    def attack(self, state: GameState, hit: bool, category: str | None = None) -> ActionOutcome:
        """
        Resolve one answered question.

        Order: question counters, then the hit or miss branch, then the poison
        tick if the run is still live. Correct answers are rewarded at the streak
        multiplier in effect when the question was asked; a poison kill after a
        wrong answer pays at the reset multiplier.
        """

        enemy = state.current_enemy
        if not state.in_combat or enemy is None:
            return failed("not_in_combat", "Not in combat.")

        statistics = state.statistics
        statistics.total_questions_answered += 1
        if category:
            statistics.accuracy_by_category.setdefault(category, CategoryAccuracy()).total += 1

        asked_multiplier = state.knowledge_streak.multiplier
        report = AttackReport(hit=hit)
        if hit:
            self._resolve_hit(state, enemy, category, asked_multiplier, report)
        else:
            self._resolve_miss(state, enemy, report)

        if state.in_combat and enemy.is_poisoned and enemy.poison_turns > 0:
            self._poison_tick(state, enemy, report)
            if enemy.hp <= 0:
                # Misses pay at the reset multiplier.
                multiplier = asked_multiplier if hit else state.knowledge_streak.multiplier
                self._resolve_victory(state, enemy, multiplier, report)

        statistics.average_accuracy = round(
            statistics.correct_answers / statistics.total_questions_answered * 100, 2
        )
        return ok(value=report)

    def _resolve_hit(
        self,
        state: GameState,
        enemy: Enemy,
        category: str | None,
        asked_multiplier: float,
        report: AttackReport,
    ) -> None:
        stats = state.player_stats
        skills = state.adventure_skills
        log = state.combat_log
        ctx = TurnContext(
            damage=max(1, stats.attack - enemy.defense),
            stats=stats,
            skills=skills,
            rng=self._rng,
            log=log,
            streak=state.knowledge_streak.current,
            category=category,
        )
        damage = run_damage_pipeline(OFFENCE_PIPELINE, ctx)
        enemy.hp = max(0, enemy.hp - damage)
        log.append(f"You deal {damage} damage to the {enemy.name}!")
        report.damage_dealt = damage
        state.statistics.total_damage_dealt += damage

        if skills.is_active(AdventureSkillType.VAMPIRIC):
            healing = int(damage * economy.VAMPIRIC_FRACTION)
            stats.hp = min(stats.max_hp, stats.hp + healing)
            log.append(f"Vampiric: Healed {healing} HP!")

        if skills.is_active(AdventureSkillType.POISON_BLADE):
            enemy.is_poisoned = True
            enemy.poison_turns = economy.POISON_TURNS
            log.append(f"{enemy.name} is poisoned!")

        state.set_streak(state.knowledge_streak.current + 1)
        statistics = state.statistics
        statistics.longest_streak = max(statistics.longest_streak, state.knowledge_streak.current)
        statistics.correct_answers += 1
        if category:
            statistics.accuracy_by_category[category].correct += 1

        regen = int(stats.max_hp * economy.REGEN_FRACTION)
        stats.hp = min(stats.max_hp, stats.hp + regen)
        if regen > 0:
            log.append(f"Regenerated {regen} HP!")
        if skills.is_active(AdventureSkillType.HEALING_AURA):
            aura = int(stats.max_hp * economy.HEALING_AURA_FRACTION)
            stats.hp = min(stats.max_hp, stats.hp + aura)
            log.append(f"Healing Aura: +{aura} HP!")

        if enemy.hp <= 0:
            self._resolve_victory(state, enemy, asked_multiplier, report)

    def _resolve_miss(self, state: GameState, enemy: Enemy, report: AttackReport) -> None:
        stats = state.player_stats
        skills = state.adventure_skills
        log = state.combat_log
        ctx = TurnContext(
            damage=max(1, enemy.attack - stats.defense),
            stats=stats,
            skills=skills,
            rng=self._rng,
            log=log,
            streak=state.knowledge_streak.current,
        )
        if run_avoidance_pipeline(ctx):
            report.avoided = True
        else:
            damage = run_damage_pipeline(MITIGATION_PIPELINE, ctx)
            stats.hp = max(0, stats.hp - damage)
            log.append(f"The {enemy.name} deals {damage} damage to you!")
            report.damage_taken = damage
            state.statistics.total_damage_taken += damage

        state.set_streak(0)

        if stats.hp > 0:
            return
        if skills.is_active(AdventureSkillType.PHOENIX):
            stats.hp = max(1, int(stats.max_hp * economy.PHOENIX_REVIVE_FRACTION))
            skills.mark_used(AdventureSkillType.PHOENIX)
            log.append("Phoenix: Revived with 50% HP!")
            report.revived = True
            return
        log.append("You have been defeated!")
        self._clear_combat(state)
        state.statistics.total_deaths += 1
        report.defeat = True
        logger.debug("Defeated in zone %d", state.zone)

    def _poison_tick(self, state: GameState, enemy: Enemy, report: AttackReport) -> None:
        poison_damage = int(enemy.max_hp * economy.POISON_FRACTION)
        enemy.hp = max(0, enemy.hp - poison_damage)
        enemy.poison_turns -= 1
        report.poison_damage = poison_damage
        state.combat_log.append(f"{enemy.name} takes {poison_damage} poison damage!")
        if enemy.poison_turns <= 0:
            enemy.is_poisoned = False
            state.combat_log.append(f"{enemy.name} is no longer poisoned.")

    def _resolve_victory(
        self, state: GameState, enemy: Enemy, asked_multiplier: float, report: AttackReport
    ) -> None:
        log = state.combat_log
        stats = state.player_stats
        defeated_zone = state.zone
        menu = state.skills
        research = state.research.bonuses
        coin_bonus = (
            menu.bonus("coins")
            * research.coin_multiplier
            * state.multipliers.coins
            * (1 + state.garden_of_growth.total_growth_bonus)
        )
        gem_bonus = menu.bonus("gems") * research.gem_multiplier * state.multipliers.gems
        coins = economy.coin_reward(defeated_zone, asked_multiplier, coin_bonus)
        gems = economy.gem_reward(defeated_zone, asked_multiplier, gem_bonus)
        log.append(f"{enemy.name} defeated! You gain {coins} coins and {gems} gems!")

        state.coins += coins
        state.gems += gems
        state.zone += 1
        self._clear_combat(state)
        statistics = state.statistics
        statistics.total_victories += 1
        statistics.coins_earned += coins
        statistics.gems_earned += gems
        statistics.zones_reached = max(statistics.zones_reached, state.zone)
        report.victory = True
        report.coins_gained = coins
        report.gems_gained = gems

        if state.zone >= economy.PREMIUM_UNLOCK_ZONE:
            state.is_premium = True

        merchant = state.merchant
        if economy.awards_fragment(state.zone, merchant.last_fragment_zone):
            merchant.hugoland_fragments += 1
            merchant.total_fragments_earned += 1
            merchant.last_fragment_zone = state.zone
            log.append("You found a Hugoland Fragment!")
            report.fragment_found = True

        if economy.needs_anti_inflation_boost(enemy.max_hp, stats.attack, enemy.defense):
            stats.attack *= 2
            stats.defense *= 2
            stats.max_hp = int(stats.max_hp * economy.ANTI_INFLATION_HP_MULTIPLIER)
            stats.hp = stats.max_hp
            log.append("Anti-inflation boost! Your stats have been enhanced!")
            log.append("ATK and DEF doubled, HP increased by 50%!")
            report.anti_inflation_boost = True

        xp_bonus = menu.bonus("xp") * research.xp_multiplier
        experience = economy.experience_reward(defeated_zone, xp_bonus)
        levels = self._progression.grant_experience(state, experience)
        log.append(f"You gain {experience} experience!")
        if levels:
            log.append(f"Level up! You are now level {state.progression.level}!")
        report.experience_gained = experience
        logger.debug("Victory in zone %d: +%d coins, +%d gems", defeated_zone, coins, gems)

    # -----------------------
    # Helpers
    # -----------------------
    def _enter_combat(self, state: GameState) -> Enemy:
        enemy = self._factory.generate_enemy(state.zone)
        state.current_enemy = enemy
        state.in_combat = True
        state.combat_log = [f"You encounter a {enemy.name} in Zone {enemy.zone}!"]
        return enemy

    @staticmethod
    def _clear_combat(state: GameState) -> None:
        state.in_combat = False
        state.current_enemy = None

