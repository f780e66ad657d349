"""Procedural content generation for equipment, relics and enemies."""
from __future__ import annotations

from typing import Protocol, Tuple

from hugoland.core.rng import RNG
from hugoland.core.types import Rarity
from hugoland.data.repositories import EnemiesRepository, RaritiesRepository, RelicsRepository
from hugoland.domain.defs import RarityDef
from hugoland.domain.enemy_scaling import scale_enemy_stats
from hugoland.domain.entities import Armor, Enemy, RelicItem, Weapon
from hugoland.services.errors import FactoryError

from .id_factory import make_instance_id

CHEST_STAT_BONUS = 1.2

# Chest price floor -> weights for common, rare, epic, legendary, mythical.
# Every row sums to 100.
CHEST_WEIGHT_TIERS: Tuple[Tuple[int, Tuple[int, int, int, int, int]], ...] = (
    (2500, (5, 25, 40, 23, 7)),
    (1000, (15, 35, 33, 14, 3)),
    (500, (30, 40, 22, 7, 1)),
    (100, (50, 35, 12, 3, 0)),
    (0, (70, 25, 4, 1, 0)),
)


class ContentFactory(Protocol):
    """Black-box content generator consumed by the engine services."""

    def generate_weapon(self, is_chest: bool, rarity: Rarity) -> Weapon: ...

    def generate_armor(self, is_chest: bool, rarity: Rarity) -> Armor: ...

    def generate_enemy(self, zone: int) -> Enemy: ...

    def generate_relic_item(self) -> RelicItem: ...

    def chest_rarity_weights(self, cost: int) -> Tuple[int, int, int, int, int]: ...


class DefaultContentFactory:
    """RNG-driven content generation backed by the JSON definition repositories."""

    def __init__(
        self,
        rng: RNG,
        *,
        rarities_repo: RaritiesRepository | None = None,
        enemies_repo: EnemiesRepository | None = None,
        relics_repo: RelicsRepository | None = None,
    ) -> None:
        self._rng = rng
        self._rarities_repo = rarities_repo or RaritiesRepository()
        self._enemies_repo = enemies_repo or EnemiesRepository()
        self._relics_repo = relics_repo or RelicsRepository()

    def generate_weapon(self, is_chest: bool, rarity: Rarity) -> Weapon:
        rarity_def = self._rarity(rarity)
        attack = self._roll_stat(rarity_def.attack_range, is_chest)
        return Weapon(
            id=make_instance_id("weapon", self._rng),
            name=self._rng.choice(rarity_def.weapon_names),
            rarity=rarity,
            base_attack=attack,
            upgrade_cost=rarity_def.upgrade_cost,
            sell_price=rarity_def.sell_price,
            is_chest=is_chest,
        )

    def generate_armor(self, is_chest: bool, rarity: Rarity) -> Armor:
        rarity_def = self._rarity(rarity)
        defense = self._roll_stat(rarity_def.defense_range, is_chest)
        return Armor(
            id=make_instance_id("armor", self._rng),
            name=self._rng.choice(rarity_def.armor_names),
            rarity=rarity,
            base_defense=defense,
            upgrade_cost=rarity_def.upgrade_cost,
            sell_price=rarity_def.sell_price,
            is_chest=is_chest,
        )

    def generate_enemy(self, zone: int) -> Enemy:
        candidates = self._enemies_repo.available_for_zone(zone)
        if not candidates:
            raise FactoryError(f"No enemy archetype is available for zone {zone}.")
        enemy_def = self._rng.choice(candidates)
        max_hp, attack, defense = scale_enemy_stats(enemy_def, zone=zone)
        return Enemy(
            name=enemy_def.name,
            hp=max_hp,
            max_hp=max_hp,
            attack=attack,
            defense=defense,
            zone=zone,
        )

    def generate_relic_item(self) -> RelicItem:
        relic_def = self._rng.choice(self._relics_repo.all())
        is_attack = relic_def.stat == "attack"
        return RelicItem(
            id=make_instance_id("relic", self._rng),
            name=relic_def.name,
            description=relic_def.description,
            stat=relic_def.stat,
            cost=relic_def.cost,
            upgrade_cost=relic_def.upgrade_cost,
            base_attack=relic_def.base_value if is_attack else None,
            base_defense=None if is_attack else relic_def.base_value,
        )

    def chest_rarity_weights(self, cost: int) -> Tuple[int, int, int, int, int]:
        for floor, weights in CHEST_WEIGHT_TIERS:
            if cost >= floor:
                return weights
        return CHEST_WEIGHT_TIERS[-1][1]

    def _rarity(self, rarity: Rarity) -> RarityDef:
        try:
            return self._rarities_repo.get(rarity)
        except KeyError as exc:
            raise FactoryError(f"Rarity '{rarity}' not found.") from exc

    def _roll_stat(self, stat_range: Tuple[int, int], is_chest: bool) -> int:
        low, high = stat_range
        value = self._rng.randint(low, high)
        if is_chest:
            value = int(value * CHEST_STAT_BONUS)
        return value
