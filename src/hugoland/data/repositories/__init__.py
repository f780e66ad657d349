"""Repository exports."""

from .adventure_skills_repo import AdventureSkillsRepository
from .enemies_repo import EnemiesRepository
from .menu_skills_repo import MenuSkillsRepository
from .rarities_repo import RaritiesRepository
from .relics_repo import RelicsRepository

__all__ = [
    "AdventureSkillsRepository",
    "EnemiesRepository",
    "MenuSkillsRepository",
    "RaritiesRepository",
    "RelicsRepository",
]
