"""Menu skills repository."""
from __future__ import annotations

from typing import Dict

from hugoland.data.errors import DataValidationError
from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import MenuSkillDef


class MenuSkillsRepository(RepositoryBase[MenuSkillDef]):
    """Loads the rollable menu skill catalog."""

    def __init__(self, base_path=None) -> None:
        super().__init__("menu_skills.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, MenuSkillDef]:
        skills: Dict[str, MenuSkillDef] = {}
        for raw_id, payload in raw.items():
            context = f"menu skill '{raw_id}'"
            skill_data = self._require_mapping(payload, context)
            self._assert_required(skill_data, {"name", "description"}, context)
            bonuses = {
                key: self._require_number(skill_data.get(key, 1.0), f"{context} {key}")
                for key in ("coin_bonus", "gem_bonus", "xp_bonus")
            }
            for key, value in bonuses.items():
                if value <= 0:
                    raise DataValidationError(f"{context} {key} must be positive.")
            skills[raw_id] = MenuSkillDef(
                id=raw_id,
                name=self._require_str(skill_data["name"], f"{context} name"),
                description=self._require_str(skill_data["description"], f"{context} description"),
                **bonuses,
            )
        if not skills:
            raise DataValidationError("Menu skill catalog must not be empty.")
        return skills
