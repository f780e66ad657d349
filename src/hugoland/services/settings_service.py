"""Game mode, cheats, player settings and debug travel."""
from __future__ import annotations

from dataclasses import fields
from typing import Any, Mapping, get_args

from hugoland.core.types import CheatName, GameModeName
from hugoland.domain.state import GameState, Settings
from hugoland.services.outcomes import ActionOutcome, failed, ok

_GAME_MODES = frozenset(get_args(GameModeName))
_CHEATS = frozenset(get_args(CheatName))
_SETTING_NAMES = frozenset(field.name for field in fields(Settings))


class SettingsService:
    def set_game_mode(self, state: GameState, mode: str) -> ActionOutcome:
        if mode not in _GAME_MODES:
            return failed("unknown_mode", f"Unknown game mode '{mode}'.")
        game_mode = state.game_mode
        game_mode.current = mode  # type: ignore[assignment]
        if mode == "survival":
            game_mode.survival_lives = game_mode.max_survival_lives
        return ok(value=mode)

    def toggle_cheat(self, state: GameState, cheat: str) -> ActionOutcome:
        if cheat not in _CHEATS:
            return failed("unknown_cheat", f"Unknown cheat '{cheat}'.")
        enabled = not getattr(state.cheats, cheat)
        setattr(state.cheats, cheat, enabled)
        return ok(value=enabled)

    def update_settings(self, state: GameState, changes: Mapping[str, Any]) -> ActionOutcome:
        unknown = sorted(set(changes) - _SETTING_NAMES)
        if unknown:
            return failed("unknown_setting", f"Unknown settings: {', '.join(unknown)}.")
        for name, value in changes.items():
            setattr(state.settings, name, value)
        return ok()

    def teleport(self, state: GameState, zone: int) -> ActionOutcome:
        if state.in_combat:
            return failed("in_combat", "Cannot teleport during combat.")
        state.zone = max(1, zone)
        return ok(value=state.zone)
