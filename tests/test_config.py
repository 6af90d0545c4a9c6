from __future__ import annotations

from pathlib import Path

from gymlog.config import Settings, get_settings
from gymlog.store import InMemoryStore, SQLiteStore, open_store


def test_open_store_memory_backend() -> None:
    store = open_store(Settings(STORE_BACKEND="memory"))
    assert isinstance(store, InMemoryStore)


def test_open_store_sqlite_backend(tmp_path: Path) -> None:
    store = open_store(Settings(STORE_BACKEND="sqlite", DB_PATH=str(tmp_path / "data" / "gym.db")))
    assert isinstance(store, SQLiteStore)
    assert (tmp_path / "data" / "gym.db").exists()
    store.close()


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("RECENT_WORKOUTS_LIMIT", "3")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.STORE_BACKEND == "memory"
        assert settings.RECENT_WORKOUTS_LIMIT == 3
    finally:
        get_settings.cache_clear()
