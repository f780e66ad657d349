"""Authoritative game-state engine for the Hugoland trivia adventure."""

__version__ = "0.1.0"

__all__ = ["__version__"]
