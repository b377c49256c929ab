import pytest

from app.config import Settings
from app.errors import StorageError
from utils.db_helper import SqliteStore
from utils.file_handler import JsonFileStore
from utils.storage import MemoryStore, open_store


@pytest.fixture(params=["json", "sqlite", "memory"])
def kv(request, tmp_path):
    if request.param == "json":
        return JsonFileStore(tmp_path / "nested" / "history.json")
    if request.param == "sqlite":
        return SqliteStore(str(tmp_path / "nested" / "history.db"))
    return MemoryStore()


def test_get_missing_key(kv):
    assert kv.get("typingHistory") is None


def test_set_get_overwrite_delete(kv):
    kv.set("k", "one")
    assert kv.get("k") == "one"
    kv.set("k", "two")
    assert kv.get("k") == "two"
    kv.delete("k")
    assert kv.get("k") is None
    kv.delete("k")


def test_json_store_survives_corrupt_file(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{oops", encoding="utf-8")
    store = JsonFileStore(path)
    assert store.get("k") is None
    store.set("k", "v")
    assert JsonFileStore(path).get("k") == "v"


def test_json_store_ignores_non_object_file(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonFileStore(path).get("k") is None


def test_sqlite_store_persists(tmp_path):
    path = str(tmp_path / "h.db")
    SqliteStore(path).set("k", "v")
    assert SqliteStore(path).get("k") == "v"


def test_open_store(tmp_path):
    assert isinstance(open_store(Settings(storage="memory")), MemoryStore)
    json_store = open_store(Settings(storage="json", storage_path=str(tmp_path / "a.json")))
    assert isinstance(json_store, JsonFileStore)
    db_store = open_store(Settings(storage="sqlite", storage_path=str(tmp_path / "a.db")))
    assert isinstance(db_store, SqliteStore)


def test_json_store_undecodable_file_reads_as_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_bytes(b'{"typingHistory": "\xff\xfe"}')
    assert JsonFileStore(path).get("typingHistory") is None


def test_json_store_deeply_nested_file_reads_as_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
    assert JsonFileStore(path).get("typingHistory") is None


def test_json_store_write_leaves_no_temp_file(tmp_path):
    path = tmp_path / "history.json"
    store = JsonFileStore(path)
    store.set("a", "1")
    store.set("b", "2")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["history.json"]
    assert store.get("a") == "1"


def test_json_store_failed_write_keeps_live_file(tmp_path, monkeypatch):
    path = tmp_path / "history.json"
    store = JsonFileStore(path)
    store.set("a", "1")
    before = path.read_text(encoding="utf-8")

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("utils.file_handler.os.replace", fail_replace)
    with pytest.raises(StorageError):
        store.set("b", "2")
    assert path.read_text(encoding="utf-8") == before
    assert sorted(p.name for p in tmp_path.iterdir()) == ["history.json"]
    monkeypatch.undo()
    assert store.get("a") == "1"
    assert store.get("b") is None
