"""Result objects returned by the state mutation services."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class ActionOutcome:
    """
    What happened when a service handled one action.

    A failed outcome carries a machine-readable ``reason`` and guarantees the
    service left the state untouched.
    """

    success: bool
    reason: str | None = None
    message: str = ""
    value: Any = None


def ok(message: str = "", value: Any = None) -> ActionOutcome:
    return ActionOutcome(success=True, message=message, value=value)


def failed(reason: str, message: str) -> ActionOutcome:
    return ActionOutcome(success=False, reason=reason, message=message)
