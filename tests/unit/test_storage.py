import sqlite3

from config.settings import settings
from storage import InMemoryStore, SqliteStore, get_store, migrate, reset_stores


def test_in_memory_store_roundtrip():
    store = InMemoryStore("sessions")
    store.set("a", {"n": 1})

    assert store.get("a") == {"n": 1}
    assert store.keys() == ["a"]
    assert store.delete("a") is True
    assert store.delete("a") is False
    assert store.get("a") is None


def test_sqlite_store_namespaces_and_upsert(tmp_path):
    db_path = str(tmp_path / "kv.db")
    migrate(db_path)
    sessions = SqliteStore("sessions", db_path)
    chunks = SqliteStore("chunks", db_path)

    sessions.set("s1", {"domain": "web"})
    sessions.set("s1", {"domain": "ml"})
    chunks.set("s1", [{"id": "1", "text": "t"}])

    assert sessions.get("s1") == {"domain": "ml"}
    assert chunks.get("s1") == [{"id": "1", "text": "t"}]
    assert sessions.keys() == ["s1"]
    assert sessions.delete("s1") is True
    assert sessions.get("s1") is None

    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT namespace, key FROM kv_entries").fetchall()
    finally:
        conn.close()
    assert rows == [("chunks", "s1")]


def test_backend_follows_settings(monkeypatch, tmp_path):
    assert isinstance(get_store("sessions"), InMemoryStore)

    monkeypatch.setattr(settings, "STORE_BACKEND", "sqlite")
    monkeypatch.setattr(settings, "DB_PATH", str(tmp_path / "app.db"))
    reset_stores()

    store = get_store("sessions")
    assert isinstance(store, SqliteStore)
    assert get_store("sessions") is store
