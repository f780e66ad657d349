"""Relics repository."""
from __future__ import annotations

from typing import Dict

from hugoland.data.errors import DataValidationError
from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import RelicDef

VALID_RELIC_STATS = {"attack", "defense"}


class RelicsRepository(RepositoryBase[RelicDef]):
    """Loads relic templates sold by the Yojef Market."""

    def __init__(self, base_path=None) -> None:
        super().__init__("relics.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, RelicDef]:
        relics: Dict[str, RelicDef] = {}
        for raw_id, payload in raw.items():
            context = f"relic '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(
                data, {"name", "description", "stat", "base_value", "cost", "upgrade_cost"}, context
            )
            relics[raw_id] = RelicDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                description=self._require_str(data["description"], f"{context} description"),
                stat=self._require_literal(data["stat"], VALID_RELIC_STATS, f"{context} stat"),  # type: ignore[arg-type]
                base_value=self._require_int(data["base_value"], f"{context} base_value"),
                cost=self._require_int(data["cost"], f"{context} cost"),
                upgrade_cost=self._require_int(data["upgrade_cost"], f"{context} upgrade_cost"),
            )
        if not relics:
            raise DataValidationError("Relic catalog must not be empty.")
        return relics
