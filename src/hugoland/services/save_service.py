"""Serialization helpers for snapshot save/load."""
from __future__ import annotations

import copy
import dataclasses
import types
from datetime import datetime, timezone
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, Literal, Mapping, Union, get_args, get_origin, get_type_hints

from hugoland.domain.state import GameState
from hugoland.services.errors import SaveLoadError

SavePayload = Dict[str, Any]
_MISSING = object()


@lru_cache(maxsize=None)
def _field_types(cls: type) -> Dict[str, Any]:
    return get_type_hints(cls)


def _is_optional(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType) and type(None) in get_args(tp)


def _to_payload(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: _to_payload(getattr(value, field.name)) for field in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_to_payload(entry) for entry in value]
    if isinstance(value, dict):
        return {str(key): _to_payload(entry) for key, entry in value.items()}
    return value


class SaveService:
    """
    Converts ``GameState`` to and from a versioned JSON-ready payload.

    Loading merges the saved state over a fresh default state: fields missing
    from an older snapshot keep their defaults, unknown keys are ignored,
    dictionaries merge key by key and lists are replaced by the saved value.
    """

    SAVE_VERSION = 1

    def __init__(self, *, defaults_factory: Callable[[], GameState] = GameState) -> None:
        self._defaults_factory = defaults_factory

    def serialize(self, state: GameState) -> SavePayload:
        """Return a JSON-serializable payload for persistence."""
        return {
            "save_version": self.SAVE_VERSION,
            "metadata": self._build_metadata(state),
            "state": _to_payload(state),
        }

    def deserialize(self, payload: Mapping[str, Any]) -> GameState:
        """Rebuild a GameState from a persisted payload merged over fresh defaults."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        version = payload.get("save_version")
        if version != self.SAVE_VERSION:
            raise SaveLoadError(f"Unsupported save version: {version!r}.")
        state_payload = payload.get("state")
        if not isinstance(state_payload, Mapping):
            raise SaveLoadError("Save data is missing the state section.")
        return self._build(GameState, state_payload, self._defaults_factory(), "state")

    @staticmethod
    def _build_metadata(state: GameState) -> Dict[str, Any]:
        return {
            "zone": state.zone,
            "coins": state.coins,
            "gems": state.gems,
            "level": state.progression.level,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }

    # -----------------------
    # Typed reconstruction
    # -----------------------
    def _build(self, cls: type, data: Any, default: Any, context: str) -> Any:
        if not isinstance(data, Mapping):
            raise SaveLoadError(f"{context} must be an object.")
        hints = _field_types(cls)
        kwargs: Dict[str, Any] = {}
        for field in dataclasses.fields(cls):
            field_context = f"{context}.{field.name}"
            field_type = hints[field.name]
            default_value = getattr(default, field.name) if default is not None else _MISSING
            raw = data.get(field.name, _MISSING)
            if raw is _MISSING or (raw is None and not _is_optional(field_type)):
                if default_value is not _MISSING:
                    kwargs[field.name] = copy.deepcopy(default_value)
                elif (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING
                ):
                    raise SaveLoadError(f"{field_context} is required.")
                continue
            kwargs[field.name] = self._coerce(field_type, raw, default_value, field_context)
        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as exc:
            raise SaveLoadError(f"{context} could not be rebuilt: {exc}") from exc

    def _coerce(self, tp: Any, value: Any, default: Any, context: str) -> Any:
        if tp is Any:
            return copy.deepcopy(value)
        origin = get_origin(tp)
        args = get_args(tp)

        if origin in (Union, types.UnionType):
            if value is None:
                if type(None) in args:
                    return None
                raise SaveLoadError(f"{context} must not be null.")
            options = [arg for arg in args if arg is not type(None)]
            if len(options) != 1:
                raise SaveLoadError(f"{context} has an ambiguous type.")
            inner_default = default if default is not _MISSING else None
            return self._coerce(options[0], value, inner_default, context)

        if origin is Literal:
            if value not in args:
                raise SaveLoadError(f"{context} must be one of {', '.join(map(str, args))}.")
            return value

        if origin is list:
            if not isinstance(value, list):
                raise SaveLoadError(f"{context} must be a list.")
            return [self._coerce(args[0], entry, None, f"{context}[{index}]") for index, entry in enumerate(value)]

        if origin is tuple:
            if not isinstance(value, (list, tuple)):
                raise SaveLoadError(f"{context} must be a list.")
            item_types = [args[0]] * len(value) if len(args) == 2 and args[1] is Ellipsis else list(args)
            if len(item_types) != len(value):
                raise SaveLoadError(f"{context} has the wrong number of entries.")
            return tuple(
                self._coerce(item_type, entry, None, f"{context}[{index}]")
                for index, (item_type, entry) in enumerate(zip(item_types, value))
            )

        if origin is dict:
            if not isinstance(value, Mapping):
                raise SaveLoadError(f"{context} must be an object.")
            merged: Dict[str, Any] = copy.deepcopy(default) if isinstance(default, dict) else {}
            for key, entry in value.items():
                if not isinstance(key, str):
                    raise SaveLoadError(f"{context} keys must be strings.")
                merged[key] = self._coerce(args[1], entry, merged.get(key, _MISSING), f"{context}.{key}")
            return merged

        if dataclasses.is_dataclass(tp):
            nested_default = default if default is not _MISSING else None
            return self._build(tp, value, nested_default, context)

        if isinstance(tp, type) and issubclass(tp, Enum):
            try:
                return tp(value)
            except ValueError as exc:
                raise SaveLoadError(f"{context} has an unknown value {value!r}.") from exc

        if tp is datetime:
            return self._coerce_datetime(value, context)
        if tp is bool:
            if not isinstance(value, bool):
                raise SaveLoadError(f"{context} must be a boolean.")
            return value
        if tp is int:
            if isinstance(value, float) and value.is_integer():
                return int(value)
            if not isinstance(value, int) or isinstance(value, bool):
                raise SaveLoadError(f"{context} must be an integer.")
            return value
        if tp is float:
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise SaveLoadError(f"{context} must be a number.")
            return float(value)
        if tp is str:
            if not isinstance(value, str):
                raise SaveLoadError(f"{context} must be a string.")
            return value
        raise SaveLoadError(f"{context} has an unsupported type {tp!r}.")

    @staticmethod
    def _coerce_datetime(value: Any, context: str) -> datetime:
        if not isinstance(value, str):
            raise SaveLoadError(f"{context} must be an ISO-8601 string.")
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise SaveLoadError(f"{context} is not a valid timestamp.") from exc
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
