"""Structural invariants that must hold after every transition."""
from __future__ import annotations

from typing import List

from hugoland.domain import economy
from hugoland.domain.state import GameState


def enforce_invariants(state: GameState) -> List[str]:
    """
    Clamp ``state`` back into its legal shape in place.

    Returns a description of each correction made; an empty list means the
    transition already produced a consistent state.
    """

    corrections: List[str] = []

    for attr in ("coins", "gems", "shiny_gems"):
        if getattr(state, attr) < 0:
            corrections.append(f"{attr} clamped to 0")
            setattr(state, attr, 0)

    if state.zone < 1:
        corrections.append("zone clamped to 1")
        state.zone = 1

    stats = state.player_stats
    if stats.max_hp < 1:
        corrections.append("max_hp clamped to 1")
        stats.max_hp = 1
    if stats.hp > stats.max_hp:
        corrections.append("hp clamped to max_hp")
        stats.hp = stats.max_hp
    elif stats.hp < 0:
        corrections.append("hp clamped to 0")
        stats.hp = 0
    for attr in ("attack", "defense"):
        if getattr(stats, attr) < 0:
            corrections.append(f"{attr} clamped to 0")
            setattr(stats, attr, 0)

    enemy = state.current_enemy
    if enemy is not None:
        if enemy.hp > enemy.max_hp:
            corrections.append("enemy hp clamped to max_hp")
            enemy.hp = enemy.max_hp
        elif enemy.hp < 0:
            corrections.append("enemy hp clamped to 0")
            enemy.hp = 0
    if state.in_combat and enemy is None:
        corrections.append("in_combat cleared without an enemy")
        state.in_combat = False
    elif not state.in_combat and enemy is not None:
        corrections.append("enemy cleared outside of combat")
        state.current_enemy = None

    streak = state.knowledge_streak
    expected = economy.streak_multiplier(streak.current)
    if streak.multiplier != expected:
        corrections.append("streak multiplier recomputed")
        streak.multiplier = expected
    if streak.best < streak.current:
        corrections.append("best streak raised to current")
        streak.best = streak.current

    inventory = state.inventory
    if inventory.current_weapon_id and inventory.current_weapon is None:
        corrections.append("dangling weapon slot cleared")
        inventory.current_weapon_id = None
    if inventory.current_armor_id and inventory.current_armor is None:
        corrections.append("dangling armor slot cleared")
        inventory.current_armor_id = None
    owned_relics = {relic.id for relic in inventory.relics}
    kept = [relic_id for relic_id in inventory.equipped_relic_ids if relic_id in owned_relics]
    if len(kept) != len(inventory.equipped_relic_ids):
        corrections.append("dangling relic slots cleared")
        inventory.equipped_relic_ids = kept

    return corrections
