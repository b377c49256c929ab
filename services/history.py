# services/history.py
from __future__ import annotations
import json
import logging
from typing import List, Tuple

from app.config import HISTORY_KEY, HISTORY_LIMIT
from app.errors import StorageError
from app.state import HistorySeries, TrialResult
from utils.storage import KeyValueStore

log = logging.getLogger(__name__)


class HistoryStore:
    """
    Bounded, append-only log of finished trials.
    Persisted as a JSON list of records under a single key.
    """

    def __init__(self, store: KeyValueStore, key: str = HISTORY_KEY, limit: int = HISTORY_LIMIT):
        if limit <= 0:
            raise ValueError(f"history limit must be > 0, got {limit}")
        self.store = store
        self.key = key
        self.limit = limit
        self._results: List[TrialResult] = list(self.load())

    @property
    def results(self) -> Tuple[TrialResult, ...]:
        return tuple(self._results)

    def load(self) -> Tuple[TrialResult, ...]:
        """Persisted history; anything absent or unparsable reads as empty."""
        try:
            raw = self.store.get(self.key)
        except StorageError as e:
            log.warning("Could not read history: %s", e)
            return ()
        if not raw:
            return ()
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("history payload is not a list")
            results = [TrialResult.from_record(item) for item in data]
        except (ValueError, TypeError, KeyError, OverflowError, RecursionError) as e:
            log.warning("Discarding malformed history payload: %s", e)
            return ()
        return tuple(results[-self.limit:])

    def append(self, result: TrialResult) -> Tuple[TrialResult, ...]:
        self._results.append(result)
        del self._results[:-self.limit]
        self._save()
        log.info("Saved result: %d WPM, %d%% accuracy, %ds",
                 result.wpm, result.accuracy, result.elapsed_seconds)
        return self.results

    def clear(self) -> None:
        self._results.clear()
        try:
            self.store.delete(self.key)
        except StorageError as e:
            log.warning("Could not clear history: %s", e)

    def as_series(self) -> HistorySeries:
        return HistorySeries(
            wpm=tuple(r.wpm for r in self._results),
            accuracy=tuple(r.accuracy for r in self._results),
            labels=tuple(f"Test {i + 1}" for i in range(len(self._results))),
        )

    def _save(self) -> None:
        payload = json.dumps([r.to_record() for r in self._results])
        try:
            self.store.set(self.key, payload)
        except StorageError as e:
            # history is display data; keep the in-memory copy and carry on
            log.warning("Could not persist history: %s", e)
