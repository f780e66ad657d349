"""Deterministic enemy stat scaling helpers."""
from __future__ import annotations

from typing import Tuple

from hugoland.domain.defs import EnemyDef

# Zone is the only difficulty ruler. Stats grow geometrically so that the
# anti-inflation ratchet has something to catch up with:
# - HP grows fastest to keep the hit count climbing between boosts.
# - ATK grows a little slower so a fresh boost is not erased in one zone.
# - DEF stays low because damage is subtractive.
BASE_HP = 40
BASE_ATTACK = 15
BASE_DEFENSE = 3
HP_GROWTH = 1.15
ATTACK_GROWTH = 1.12
DEFENSE_GROWTH = 1.10


def scale_enemy_stats(enemy_def: EnemyDef, *, zone: int) -> Tuple[int, int, int]:
    """Return (max_hp, attack, defense) for an archetype met in ``zone``."""
    steps = max(0, zone - 1)
    max_hp = max(1, int(BASE_HP * (HP_GROWTH**steps) * enemy_def.hp_scale))
    attack = max(1, int(BASE_ATTACK * (ATTACK_GROWTH**steps) * enemy_def.attack_scale))
    defense = max(0, int(BASE_DEFENSE * (DEFENSE_GROWTH**steps) * enemy_def.defense_scale))
    return max_hp, attack, defense
