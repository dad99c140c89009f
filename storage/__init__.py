"""Storage backends selected by ``settings.STORE_BACKEND``."""
from __future__ import annotations

from typing import Dict

from config.settings import settings

from .kv import InMemoryStore, KeyValueStore
from .migrate import migrate
from .sqlite import SqliteStore

SESSIONS = "sessions"
CHUNKS = "chunks"
REFERENCES = "references"
EVENTS = "events"
REPORTS = "reports"

_STORES: Dict[str, KeyValueStore] = {}


def get_store(namespace: str) -> KeyValueStore:
    """Return the shared store for ``namespace``, creating it on first use."""

    store = _STORES.get(namespace)
    if store is not None:
        return store
    backend = settings.STORE_BACKEND.strip().lower()
    if backend == "sqlite":
        migrate(settings.DB_PATH)
        store = SqliteStore(namespace, settings.DB_PATH)
    elif backend == "memory":
        store = InMemoryStore(namespace)
    else:
        raise ValueError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND}")
    _STORES[namespace] = store
    return store


def reset_stores() -> None:
    """Drop cached store instances so the next lookup re-reads settings."""

    _STORES.clear()


__all__ = [
    "CHUNKS",
    "EVENTS",
    "REFERENCES",
    "REPORTS",
    "SESSIONS",
    "InMemoryStore",
    "KeyValueStore",
    "SqliteStore",
    "get_store",
    "migrate",
    "reset_stores",
]
