# app/config.py
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict
import json
import logging

from app.errors import ConfigError
from app.words import ALT_WORD_COUNT, DEFAULT_WORD_COUNT

log = logging.getLogger(__name__)

DEFAULT_TIME_LIMIT = 60
HISTORY_LIMIT = 10
HISTORY_KEY = "typingHistory"
STORAGE_KINDS = ("json", "sqlite", "memory")

_SETTINGS_FILE = Path("settings.json")


@dataclass(frozen=True)
class Settings:
    word_count: int = DEFAULT_WORD_COUNT
    alt_word_count: int = ALT_WORD_COUNT
    time_limit: int = DEFAULT_TIME_LIMIT
    history_limit: int = HISTORY_LIMIT
    history_key: str = HISTORY_KEY
    storage: str = "json"
    storage_path: str = "data/history.json"

    def validate(self) -> "Settings":
        for name in ("word_count", "alt_word_count", "time_limit", "history_limit"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        if self.storage not in STORAGE_KINDS:
            raise ConfigError(
                f"storage must be one of {', '.join(STORAGE_KINDS)}, got {self.storage!r}"
            )
        if not self.history_key:
            raise ConfigError("history_key must not be empty")
        return self


def settings_from_dict(d: Dict[str, Any]) -> Settings:
    """Build Settings from a dict, ignoring keys we don't know."""
    known = {f.name for f in fields(Settings)}
    unknown = set(d) - known
    if unknown:
        log.warning("Ignoring unknown settings: %s", ", ".join(sorted(unknown)))
    return replace(Settings(), **{k: v for k, v in d.items() if k in known}).validate()


def load_settings(path: Path | str | None = None) -> Settings:
    """
    Read settings.json (if present).
    Missing or unreadable file -> defaults; bad values -> ConfigError.
    """
    p = Path(path) if path else _SETTINGS_FILE
    if not p.exists():
        return Settings()
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError, RecursionError) as e:
        log.warning("Failed to read settings from %s: %s", p, e)
        return Settings()
    if not isinstance(data, dict):
        log.warning("Settings file %s is not a JSON object, using defaults", p)
        return Settings()
    return settings_from_dict(data)
