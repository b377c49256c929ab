# utils/storage.py
from __future__ import annotations
from typing import Dict, Optional, Protocol

from app.config import Settings


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Process-local store; nothing survives a restart."""

    def __init__(self, initial: Dict[str, str] | None = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


def open_store(settings: Settings) -> KeyValueStore:
    if settings.storage == "sqlite":
        from utils.db_helper import SqliteStore
        return SqliteStore(settings.storage_path)
    if settings.storage == "memory":
        return MemoryStore()
    from utils.file_handler import JsonFileStore
    return JsonFileStore(settings.storage_path)
