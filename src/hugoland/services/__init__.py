"""Service layer exports."""

from .engine import GameEngine, TransitionResult
from .errors import FactoryError, HugolandError, SaveLoadError
from .save_service import SaveService
from .session import GameSession

__all__ = [
    "FactoryError",
    "GameEngine",
    "GameSession",
    "HugolandError",
    "SaveLoadError",
    "SaveService",
    "TransitionResult",
]
