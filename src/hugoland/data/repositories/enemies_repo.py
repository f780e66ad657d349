"""Enemies repository."""
from __future__ import annotations

from typing import Dict, List

from hugoland.data.errors import DataValidationError
from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import EnemyDef


class EnemiesRepository(RepositoryBase[EnemyDef]):
    """Loads enemy archetypes."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        enemies: Dict[str, EnemyDef] = {}
        for raw_id, payload in raw.items():
            context = f"enemy '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(
                data, {"name", "min_zone", "hp_scale", "attack_scale", "defense_scale"}, context
            )
            enemies[raw_id] = EnemyDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                min_zone=self._require_int(data["min_zone"], f"{context} min_zone"),
                hp_scale=self._require_number(data["hp_scale"], f"{context} hp_scale"),
                attack_scale=self._require_number(data["attack_scale"], f"{context} attack_scale"),
                defense_scale=self._require_number(data["defense_scale"], f"{context} defense_scale"),
            )
        if not any(enemy.min_zone <= 1 for enemy in enemies.values()):
            raise DataValidationError("At least one enemy must be available from zone 1.")
        return enemies

    def available_for_zone(self, zone: int) -> List[EnemyDef]:
        """Return archetypes unlocked at the given zone, sorted by id."""
        return [enemy for enemy in self.all() if enemy.min_zone <= zone]
