"""Adventure skills repository."""
from __future__ import annotations

from typing import Dict

from hugoland.data.errors import DataValidationError
from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import AdventureSkillDef, AdventureSkillType

VALID_SKILL_TYPES = {skill_type.value for skill_type in AdventureSkillType}


class AdventureSkillsRepository(RepositoryBase[AdventureSkillDef]):
    """Loads the adventure skill catalog keyed by skill type."""

    def __init__(self, base_path=None) -> None:
        super().__init__("adventure_skills.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, AdventureSkillDef]:
        skills: Dict[str, AdventureSkillDef] = {}
        for raw_id, payload in raw.items():
            skill_type = self._require_literal(raw_id, VALID_SKILL_TYPES, "adventure skill id")
            skill_data = self._require_mapping(payload, f"adventure skill '{raw_id}'")
            self._assert_required(skill_data, {"name", "description"}, f"adventure skill '{raw_id}'")
            skills[raw_id] = AdventureSkillDef(
                id=raw_id,
                name=self._require_str(skill_data["name"], f"adventure skill '{raw_id}' name"),
                description=self._require_str(
                    skill_data["description"], f"adventure skill '{raw_id}' description"
                ),
                type=AdventureSkillType(skill_type),
            )
        if len(skills) < 3:
            raise DataValidationError("Adventure skill catalog must offer at least three skills.")
        return skills
