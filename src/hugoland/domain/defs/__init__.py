"""Domain definition exports."""

from .adventure_skill_def import AdventureSkillDef, AdventureSkillType
from .enemy_def import EnemyDef
from .menu_skill_def import MenuSkillDef
from .rarity_def import RarityDef
from .relic_def import RelicDef

__all__ = [
    "AdventureSkillDef",
    "AdventureSkillType",
    "EnemyDef",
    "MenuSkillDef",
    "RarityDef",
    "RelicDef",
]
