from __future__ import annotations

from datetime import timedelta

from hugoland.core.rng import RNG
from hugoland.data.repositories import MenuSkillsRepository
from hugoland.domain.state import GameState
from hugoland.services.garden_service import GardenService
from hugoland.services.settings_service import SettingsService
from hugoland.services.skills_service import SkillsService
from tests.helpers.fakes import T0


def test_plant_seed_costs_coins_and_waters_for_a_day() -> None:
    service = GardenService()
    state = GameState(coins=1500)

    assert service.plant_seed(state, T0).success is True

    garden = state.garden_of_growth
    assert state.coins == 500
    assert garden.is_planted is True
    assert garden.water_hours_remaining == 24
    assert service.plant_seed(state, T0).reason == "already_planted"


def test_garden_grows_only_while_watered() -> None:
    service = GardenService()
    state = GameState(coins=1500)
    service.plant_seed(state, T0)

    assert service.grow(state, T0 + timedelta(minutes=59)) is False
    assert service.grow(state, T0 + timedelta(hours=3)) is True
    assert service.grow(state, T0 + timedelta(hours=3)) is False

    garden = state.garden_of_growth
    assert garden.growth_cm == 1.5
    assert garden.water_hours_remaining == 21
    assert garden.total_growth_bonus == 0.015


def test_dry_hours_are_skipped_not_banked() -> None:
    service = GardenService()
    state = GameState(coins=1500)
    service.plant_seed(state, T0)
    state.garden_of_growth.water_hours_remaining = 2

    service.grow(state, T0 + timedelta(hours=5))
    state.garden_of_growth.water_hours_remaining = 10
    service.grow(state, T0 + timedelta(hours=5, minutes=30))

    garden = state.garden_of_growth
    assert garden.growth_cm == 1.0
    assert garden.last_growth_tick == T0 + timedelta(hours=5)


def test_buy_water_requires_a_planted_garden() -> None:
    service = GardenService()
    state = GameState(coins=5000)

    assert service.buy_water(state, 12, T0).reason == "not_planted"
    service.plant_seed(state, T0)
    assert service.buy_water(state, 0, T0).reason == "invalid_amount"
    assert service.buy_water(state, 12, T0).value == 36
    assert state.coins == 3000


def test_menu_skill_roll_and_expiry() -> None:
    service = SkillsService(RNG(2), MenuSkillsRepository().all())
    state = GameState()

    skill = service.roll(state, T0).value

    assert state.coins == 400
    assert 2 <= skill.duration_hours <= 8
    assert skill.expires_at == T0 + timedelta(hours=skill.duration_hours)
    assert service.expire(state, T0 + timedelta(hours=1)) is False
    assert service.expire(state, T0 + timedelta(hours=8)) is True
    assert state.skills.active_menu_skill is None


def test_menu_skill_roll_needs_coins() -> None:
    service = SkillsService(RNG(2), MenuSkillsRepository().all())
    state = GameState(coins=99)

    assert service.roll(state, T0).reason == "insufficient_coins"
    assert state.skills.active_menu_skill is None


def test_survival_mode_restores_lives() -> None:
    service = SettingsService()
    state = GameState()
    state.game_mode.survival_lives = 1

    assert service.set_game_mode(state, "survival").success is True
    assert state.game_mode.survival_lives == 3
    assert service.set_game_mode(state, "hardcore").reason == "unknown_mode"


def test_toggle_cheat_and_update_settings() -> None:
    service = SettingsService()
    state = GameState()

    assert service.toggle_cheat(state, "infinite_gems").value is True
    assert service.toggle_cheat(state, "infinite_gems").value is False
    assert service.toggle_cheat(state, "god_mode").reason == "unknown_cheat"
    assert service.update_settings(state, {"language": "fr", "dark_mode": False}).success is True
    assert (state.settings.language, state.settings.dark_mode) == ("fr", False)
    assert service.update_settings(state, {"volume": 3}).reason == "unknown_setting"


def test_teleport_is_blocked_in_combat() -> None:
    service = SettingsService()
    state = GameState()

    assert service.teleport(state, 0).value == 1
    assert service.teleport(state, 20).value == 20
    state.in_combat = True
    assert service.teleport(state, 3).reason == "in_combat"
