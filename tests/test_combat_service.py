from __future__ import annotations

from hugoland.core.rng import RNG
from hugoland.data.repositories import AdventureSkillsRepository
from hugoland.domain.adventure_skills import AdventureSkill, activate_adventure_skill
from hugoland.domain.defs import AdventureSkillType
from hugoland.domain.entities import Enemy
from hugoland.domain.state import GameState
from hugoland.services.combat_service import CombatService
from hugoland.services.progression_service import ProgressionService
from tests.helpers.fakes import ScriptedRNG, StubContentFactory, make_enemy


def _make_service(rng: RNG | None = None, factory: StubContentFactory | None = None) -> CombatService:
    return CombatService(
        factory or StubContentFactory(),
        rng or RNG(1),
        AdventureSkillsRepository().all(),
        ProgressionService(),
    )


def _make_fight(enemy: Enemy, skill_type: AdventureSkillType | None = None) -> GameState:
    state = GameState()
    state.current_enemy = enemy
    state.in_combat = True
    if skill_type is not None:
        skill = AdventureSkill(id="skill_0", name=skill_type.value, description="", type=skill_type)
        activate_adventure_skill(state.adventure_skills, state.player_stats, skill)
    return state


def test_correct_answer_defeats_enemy_and_pays_out() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=15, defense=0))

    outcome = service.attack(state, True)

    report = outcome.value
    assert outcome.success is True
    assert report.damage_dealt == 20
    assert report.victory is True
    assert (state.coins, state.gems, state.zone) == (560, 55, 2)
    assert state.in_combat is False
    assert state.current_enemy is None
    assert "You deal 20 damage to the Slime!" in state.combat_log
    assert "Slime defeated! You gain 60 coins and 5 gems!" in state.combat_log
    assert state.knowledge_streak.current == 1
    assert state.statistics.total_victories == 1
    assert state.statistics.zones_reached == 2
    assert state.progression.experience == 15


def test_rewards_use_multiplier_from_before_the_answer() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=15))
    state.set_streak(5)

    report = service.attack(state, True).value

    assert (report.coins_gained, report.gems_gained) == (90, 7)
    assert state.knowledge_streak.current == 6
    assert state.knowledge_streak.multiplier == 1.6


def test_enemy_survives_partial_damage_and_player_regenerates() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=100))
    state.player_stats.hp = 50

    report = service.attack(state, True).value

    assert report.victory is False
    assert state.current_enemy is not None
    assert state.current_enemy.hp == 80
    assert state.player_stats.hp == 55
    assert state.in_combat is True


def test_wrong_answer_deals_damage_and_resets_streak() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=100, attack=30))
    state.set_streak(3)

    report = service.attack(state, False, category="history").value

    assert report.damage_taken == 20
    assert state.player_stats.hp == 80
    assert state.knowledge_streak.current == 0
    assert state.knowledge_streak.multiplier == 1.0
    assert state.knowledge_streak.best == 3
    assert "The Slime deals 20 damage to you!" in state.combat_log
    assert state.statistics.accuracy_by_category["history"].total == 1
    assert state.statistics.accuracy_by_category["history"].correct == 0
    assert state.statistics.average_accuracy == 0.0


def test_phoenix_revives_at_half_hp() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=100, attack=50), AdventureSkillType.PHOENIX)
    state.player_stats.hp = 1

    report = service.attack(state, False).value

    assert report.revived is True
    assert report.defeat is False
    assert state.player_stats.hp == 50
    assert state.adventure_skills.skill_effects.phoenix_used is True
    assert state.in_combat is True
    assert "Phoenix: Revived with 50% HP!" in state.combat_log


def test_defeat_ends_the_run() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=100, attack=50))
    state.player_stats.hp = 10

    report = service.attack(state, False).value

    assert report.defeat is True
    assert state.player_stats.hp == 0
    assert state.in_combat is False
    assert state.current_enemy is None
    assert state.statistics.total_deaths == 1
    assert state.combat_log[-1] == "You have been defeated!"


def test_divine_protection_blocks_one_fatal_hit() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=100, attack=50), AdventureSkillType.DIVINE_PROTECTION)
    state.player_stats.hp = 10

    first = service.attack(state, False).value
    second = service.attack(state, False).value

    assert first.avoided is True
    assert state.adventure_skills.skill_effects.divine_protection_used is True
    assert second.defeat is True


def test_poison_tick_can_win_the_fight() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=25, max_hp=100), AdventureSkillType.POISON_BLADE)

    report = service.attack(state, True).value

    assert report.damage_dealt == 20
    assert report.poison_damage == 10
    assert report.victory is True
    assert state.zone == 2
    assert state.coins == 560
    assert "Slime takes 10 poison damage!" in state.combat_log


def test_poison_wears_off_after_three_turns() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=1000, attack=11), AdventureSkillType.POISON_BLADE)

    service.attack(state, True)
    service.attack(state, False)
    service.attack(state, False)

    enemy = state.current_enemy
    assert enemy is not None
    assert enemy.hp == 1000 - 20 - 3 * 100
    assert enemy.is_poisoned is False
    assert enemy.poison_turns == 0


def test_poison_kill_after_wrong_answer_pays_without_streak_bonus() -> None:
    service = _make_service()
    enemy = make_enemy(hp=1, max_hp=100, attack=50)
    enemy.is_poisoned = True
    enemy.poison_turns = 2
    state = _make_fight(enemy)
    state.set_streak(5)

    report = service.attack(state, False).value

    assert report.victory is True
    assert (report.coins_gained, report.gems_gained) == (60, 5)
    assert (state.coins, state.gems, state.zone) == (560, 55, 2)
    assert state.knowledge_streak.current == 0


def test_arcane_shield_blocks_every_wrong_answer() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=100, attack=30), AdventureSkillType.ARCANE_SHIELD)

    reports = [service.attack(state, False).value for _ in range(4)]

    assert [report.damage_taken for report in reports] == [0, 0, 0, 0]
    assert all(report.avoided for report in reports)
    assert state.player_stats.hp == 100
    assert state.adventure_skills.skill_effects.arcane_shield_active is True


def test_healing_aura_adds_to_regeneration() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=100), AdventureSkillType.HEALING_AURA)
    state.player_stats.hp = 50

    service.attack(state, True)

    assert state.player_stats.hp == 65
    assert "Regenerated 5 HP!" in state.combat_log
    assert "Healing Aura: +10 HP!" in state.combat_log


def test_reaching_zone_fifty_unlocks_premium() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=15, zone=49))
    state.zone = 49

    report = service.attack(state, True).value

    assert report.victory is True
    assert state.zone == 50
    assert state.is_premium is True


def test_anti_inflation_boost_on_slow_victory() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=5, max_hp=140))

    report = service.attack(state, True).value

    stats = state.player_stats
    assert report.anti_inflation_boost is True
    assert (stats.attack, stats.defense, stats.max_hp, stats.hp) == (40, 20, 150, 150)
    assert "Anti-inflation boost! Your stats have been enhanced!" in state.combat_log


def test_fragment_found_every_fifth_zone() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=15, zone=4))
    state.zone = 4

    report = service.attack(state, True).value

    assert report.fragment_found is True
    assert state.merchant.hugoland_fragments == 1
    assert state.merchant.last_fragment_zone == 5
    assert "You found a Hugoland Fragment!" in state.combat_log


def test_shadow_step_then_damage() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=100, attack=30), AdventureSkillType.SHADOW_STEP)

    first = service.attack(state, False).value
    second = service.attack(state, False).value

    assert first.avoided is True
    assert first.damage_taken == 0
    assert second.damage_taken == 20
    assert state.knowledge_streak.current == 0


def test_dodge_is_rolled_on_every_miss() -> None:
    service = _make_service(rng=ScriptedRNG([0.1, 0.2, 0.9]))
    state = _make_fight(make_enemy(hp=100, attack=30), AdventureSkillType.DODGE)

    reports = [service.attack(state, False).value for _ in range(3)]

    assert [report.avoided for report in reports] == [True, True, False]
    assert state.adventure_skills.skill_effects.dodge_used is False


def test_berserker_doubles_damage_both_ways() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=500, attack=30), AdventureSkillType.BERSERKER)

    hit = service.attack(state, True).value
    miss = service.attack(state, False).value

    assert hit.damage_dealt == 80
    assert miss.damage_taken == 37


def test_vampiric_heals_from_damage_dealt() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=500), AdventureSkillType.VAMPIRIC)
    state.player_stats.hp = 50

    service.attack(state, True)

    assert state.player_stats.hp == 50 + 5 + 5


def test_attack_outside_combat_is_rejected() -> None:
    service = _make_service()
    state = GameState()

    outcome = service.attack(state, True)

    assert outcome.success is False
    assert outcome.reason == "not_in_combat"
    assert state.statistics.total_questions_answered == 0


def test_start_combat_offers_three_distinct_skills() -> None:
    service = _make_service()
    state = GameState()

    outcome = service.start_combat(state)

    offered = outcome.value
    assert outcome.success is True
    assert len(offered) == 3
    assert len({skill.type for skill in offered}) == 3
    assert state.adventure_skills.show_selection_modal is True
    assert state.in_combat is False
    assert service.start_combat(state).reason == "selecting"


def test_selecting_a_skill_enters_combat() -> None:
    service = _make_service()
    state = GameState()
    offered = service.start_combat(state).value

    outcome = service.select_adventure_skill(state, offered[0].id)

    assert outcome.success is True
    assert state.in_combat is True
    assert state.current_enemy is not None
    assert state.adventure_skills.selected_skill == offered[0]
    assert state.adventure_skills.show_selection_modal is False
    assert state.combat_log[0] == "You encounter a Slime in Zone 1!"
    assert state.combat_log[1] == f"{offered[0].name} is now active!"
    assert service.start_combat(state).reason == "in_combat"


def test_selecting_an_unoffered_skill_fails() -> None:
    service = _make_service()
    state = GameState()

    assert service.select_adventure_skill(state, "skill_0_1").reason == "not_selecting"
    service.start_combat(state)
    assert service.select_adventure_skill(state, "missing").reason == "not_found"


def test_skipping_skills_enters_combat_without_a_skill() -> None:
    service = _make_service()
    state = GameState()
    service.start_combat(state)

    outcome = service.skip_adventure_skills(state)

    assert outcome.success is True
    assert state.in_combat is True
    assert state.adventure_skills.selected_skill is None


def test_skip_card_is_single_use() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=100), AdventureSkillType.SKIP_CARD)

    assert service.use_skip_card(state).success is True
    assert service.use_skip_card(state).reason == "skill_unavailable"


def test_revive_at_checkpoint_costs_half_of_everything() -> None:
    service = _make_service()
    state = GameState(coins=100, gems=40, zone=13)
    state.player_stats.hp = 0

    outcome = service.revive_at_checkpoint(state)

    assert outcome.success is True
    assert (state.coins, state.gems, state.zone) == (50, 20, 11)
    assert state.player_stats.hp == state.player_stats.max_hp
    assert state.statistics.revivals == 1
    assert state.combat_log == ["You have been revived at checkpoint Zone 11! Lost 50 coins and 20 gems."]


def test_revive_is_refused_during_combat() -> None:
    service = _make_service()
    state = _make_fight(make_enemy())

    assert service.revive_at_checkpoint(state).reason == "in_combat"


def test_victory_levels_up_the_player() -> None:
    service = _make_service()
    state = _make_fight(make_enemy(hp=15))
    state.progression.experience = 90

    service.attack(state, True)

    assert state.progression.level == 2
    assert state.progression.experience == 5
    assert state.progression.skill_points == 1
    assert "Level up! You are now level 2!" in state.combat_log
