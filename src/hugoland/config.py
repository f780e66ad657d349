"""Engine configuration and logging setup for drivers."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

DEFAULT_STORAGE_KEY = "hugoland_game_state"
LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})
ENV_PREFIX = "HUGOLAND_"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Hugoland"
        return Path.home() / "Hugoland"
    return Path.home() / ".config" / "hugoland"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the per-user save directory."""
    return get_user_data_dir() / "saves"


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tunables read by the session driver."""

    poll_interval_seconds: float = 30.0
    market_refresh_minutes: int = 5
    save_dir: str | None = None
    storage_key: str = DEFAULT_STORAGE_KEY
    log_level: str = "INFO"
    seed: int | None = None

    @property
    def resolved_save_dir(self) -> Path:
        return Path(self.save_dir) if self.save_dir else get_save_dir()


def _coerce_field(name: str, value: Any, default: Any) -> Any:
    """Return ``value`` converted to the field's type, or ``default`` if it does not fit."""
    try:
        if name == "poll_interval_seconds":
            number = float(value)
            return number if number > 0 else default
        if name == "market_refresh_minutes":
            number = int(value)
            return number if number > 0 else default
        if name == "seed":
            return None if value in (None, "") else int(value)
        if name == "log_level":
            level = str(value).upper()
            return level if level in LOG_LEVELS else default
        return default if value is None else str(value)
    except (TypeError, ValueError):
        return default


def _apply(config: EngineConfig, raw: Mapping[str, Any]) -> EngineConfig:
    changes: Dict[str, Any] = {}
    for field in fields(EngineConfig):
        if field.name in raw:
            default = getattr(config, field.name)
            changes[field.name] = _coerce_field(field.name, raw[field.name], default)
    return replace(config, **changes)


def load_config(path: Path | None = None, environ: Mapping[str, str] | None = None) -> EngineConfig:
    """
    Load config from disk, then apply ``HUGOLAND_*`` environment overrides.

    A missing or unreadable file yields the defaults; each bad field falls
    back to its own default.
    """

    config = EngineConfig()
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        raw = {}
    if isinstance(raw, dict):
        config = _apply(config, raw)

    env = os.environ if environ is None else environ
    overrides = {
        field.name: env[ENV_PREFIX + field.name.upper()]
        for field in fields(EngineConfig)
        if ENV_PREFIX + field.name.upper() in env
    }
    return _apply(config, overrides)


def save_config(config: EngineConfig, path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(asdict(config), indent=2, sort_keys=True), encoding="utf-8")


def configure_logging(level: str = "INFO") -> None:
    """Install a basic stderr handler for drivers; the library itself never configures logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
