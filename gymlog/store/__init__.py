from __future__ import annotations

import logging

from gymlog.config import Settings, get_settings
from .base import NotFoundError, RecordStore, StoreError
from .memory import InMemoryStore
from .sqlite import SQLiteStore

logger = logging.getLogger(__name__)


def open_store(settings: Settings | None = None) -> RecordStore:
    """Build the record store named by STORE_BACKEND. Call once at startup."""
    settings = settings or get_settings()
    if settings.STORE_BACKEND == "memory":
        logger.info("Using in-memory record store")
        return InMemoryStore()
    return SQLiteStore(settings.DB_PATH)


__all__ = [
    "RecordStore",
    "StoreError",
    "NotFoundError",
    "InMemoryStore",
    "SQLiteStore",
    "open_store",
]
