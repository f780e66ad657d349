"""Service-layer exceptions."""


class HugolandError(Exception):
    """Base class for errors raised by the engine services."""


class FactoryError(HugolandError):
    """Raised when a runtime entity cannot be created."""


class SaveLoadError(HugolandError):
    """Raised when save or load operations fail."""
