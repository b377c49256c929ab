import json
from datetime import datetime

import pytest

from app.errors import StorageError
from app.state import TrialResult
from services.history import HistoryStore
from utils.file_handler import JsonFileStore
from utils.storage import MemoryStore


def _result(wpm, accuracy=90, secs=60):
    return TrialResult(wpm=wpm, accuracy=accuracy, elapsed_seconds=secs,
                       timestamp=datetime(2026, 1, 2, 3, 4, 5))


class BrokenStore(MemoryStore):
    def set(self, key, value):
        raise StorageError("disk full")


def test_empty_by_default(history):
    assert history.load() == ()
    assert history.results == ()
    series = history.as_series()
    assert series.wpm == () and series.accuracy == () and series.labels == ()


def test_bounded_to_ten_oldest_first(history):
    for wpm in range(11):
        history.append(_result(wpm))
    assert [r.wpm for r in history.results] == list(range(1, 11))


def test_persisted_across_instances(store, history):
    history.append(_result(42, accuracy=97, secs=31))
    reloaded = HistoryStore(store)
    assert reloaded.results == history.results


def test_payload_shape(store, history):
    history.append(_result(42, accuracy=97, secs=31))
    payload = json.loads(store.get("typingHistory"))
    assert payload == [{"wpm": 42, "accuracy": 97, "time": 31, "date": "2026-01-02T03:04:05"}]


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"wpm": 1}',
        '[{"wpm": 1}]',
        '[{"wpm": 1, "accuracy": 2, "time": 3, "date": "yesterday"}]',
        "[1, 2, 3]",
        '[{"wpm": Infinity, "accuracy": 1, "time": 1, "date": "2026-01-01T00:00:00"}]',
        '[{"wpm": 1, "accuracy": NaN, "time": 1, "date": "2026-01-01T00:00:00"}]',
        pytest.param("[" * 100000 + "]" * 100000, id="deeply-nested"),
        "",
    ],
)
def test_malformed_payload_reads_as_empty(raw):
    store = MemoryStore({"typingHistory": raw})
    history = HistoryStore(store)
    assert history.results == ()
    history.append(_result(10))
    assert len(history.results) == 1


def test_long_payload_truncated_on_load():
    records = [_result(i).to_record() for i in range(15)]
    store = MemoryStore({"typingHistory": json.dumps(records)})
    assert [r.wpm for r in HistoryStore(store).results] == list(range(5, 15))


def test_write_failure_keeps_memory_copy():
    history = HistoryStore(BrokenStore())
    history.append(_result(55))
    assert [r.wpm for r in history.results] == [55]


def test_series_projection(history):
    history.append(_result(40, accuracy=90))
    history.append(_result(55, accuracy=98))
    series = history.as_series()
    assert series.wpm == (40, 55)
    assert series.accuracy == (90, 98)
    assert series.labels == ("Test 1", "Test 2")


def test_clear(store, history):
    history.append(_result(40))
    history.clear()
    assert history.results == ()
    assert store.get("typingHistory") is None


def test_custom_key_and_limit(store):
    history = HistoryStore(store, key="other", limit=2)
    for wpm in (1, 2, 3):
        history.append(_result(wpm))
    assert [r.wpm for r in history.results] == [2, 3]
    assert store.get("typingHistory") is None
    with pytest.raises(ValueError):
        HistoryStore(store, limit=0)


def test_undecodable_history_file_reads_as_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_bytes(b'{"typingHistory": "\xff\xfe"}')
    history = HistoryStore(JsonFileStore(path))
    assert history.results == ()
    history.append(_result(12))
    assert [r.wpm for r in HistoryStore(JsonFileStore(path)).results] == [12]
