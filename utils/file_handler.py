import json
import os
import logging
from pathlib import Path
from typing import Dict, Optional

from app.errors import StorageError

log = logging.getLogger(__name__)

DEFAULT_HISTORY_FILE = Path("data/history.json")


class JsonFileStore:
    """
    Key-value store kept as one JSON object on disk.
    The file is re-read on every get so two windows see each other's writes.
    """

    def __init__(self, path=DEFAULT_HISTORY_FILE):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            log.warning("Unreadable store file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Store file %s is not a JSON object, ignoring it", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        # write a sibling file and swap it in; the live file is never half-written
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(
                json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
            )
            os.replace(tmp, self.path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {self.path}: {e}", e) from e

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)
