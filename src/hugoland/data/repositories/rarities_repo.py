"""Rarity tiers repository."""
from __future__ import annotations

from typing import Dict

from hugoland.core.types import RARITIES
from hugoland.data.errors import DataValidationError
from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import RarityDef


class RaritiesRepository(RepositoryBase[RarityDef]):
    """Loads per-rarity stat bands, prices and name pools."""

    def __init__(self, base_path=None) -> None:
        super().__init__("rarities.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, RarityDef]:
        missing = set(RARITIES) - raw.keys()
        if missing:
            raise DataValidationError(f"Rarity tiers missing: {sorted(missing)}")
        rarities: Dict[str, RarityDef] = {}
        for raw_id, payload in raw.items():
            rarity = self._require_literal(raw_id, set(RARITIES), "rarity id")
            context = f"rarity '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(
                data,
                {
                    "order",
                    "attack_range",
                    "defense_range",
                    "upgrade_cost",
                    "sell_price",
                    "weapon_names",
                    "armor_names",
                },
                context,
            )
            weapon_names = self._require_str_list(data["weapon_names"], f"{context} weapon_names")
            armor_names = self._require_str_list(data["armor_names"], f"{context} armor_names")
            if not weapon_names or not armor_names:
                raise DataValidationError(f"{context} name pools must not be empty.")
            rarities[raw_id] = RarityDef(
                id=rarity,  # type: ignore[arg-type]
                order=self._require_int(data["order"], f"{context} order"),
                attack_range=self._require_int_pair(data["attack_range"], f"{context} attack_range"),
                defense_range=self._require_int_pair(data["defense_range"], f"{context} defense_range"),
                upgrade_cost=self._require_int(data["upgrade_cost"], f"{context} upgrade_cost"),
                sell_price=self._require_int(data["sell_price"], f"{context} sell_price"),
                weapon_names=tuple(weapon_names),
                armor_names=tuple(armor_names),
            )
        return rarities
