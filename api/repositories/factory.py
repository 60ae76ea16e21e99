"""Backend selection, done once per process when the app is created."""

from __future__ import annotations

import logging

from api.core.config import Settings
from api.core.errors import ConfigurationError, StorageError
from api.repositories.base import DocumentStore
from api.repositories.json_storage import JsonFileDocumentStore
from api.repositories.memory_storage import MemoryDocumentStore
from api.repositories.sql_repository import SQLDocumentStore

logger = logging.getLogger(__name__)

BACKENDS = {"auto", "memory", "json", "sql"}


def _connect_sql(url: str) -> SQLDocumentStore:
    store = SQLDocumentStore(url)
    store.ensure_schema()
    return store


def build_document_store(settings: Settings) -> DocumentStore:
    """
    Pick the persistence backend.

    ``auto`` uses the SQL document table when DATABASE_URL is set and reachable,
    otherwise it falls back to the volatile in-memory store.
    """
    backend = settings.storage_backend or "auto"
    if backend not in BACKENDS:
        raise ConfigurationError(f"Unknown STORAGE_BACKEND '{backend}' (expected one of {sorted(BACKENDS)})")

    if backend == "memory":
        store: DocumentStore = MemoryDocumentStore()
    elif backend == "json":
        try:
            store = JsonFileDocumentStore(settings.data_dir)
        except StorageError as exc:
            raise ConfigurationError(str(exc)) from exc
    elif backend == "sql":
        if not settings.database_url:
            raise ConfigurationError("STORAGE_BACKEND=sql requires DATABASE_URL")
        try:
            store = _connect_sql(settings.database_url)
        except StorageError as exc:
            raise ConfigurationError("Database configured but unreachable") from exc
    elif settings.database_url:
        try:
            store = _connect_sql(settings.database_url)
        except StorageError:
            logger.warning("Database unreachable, falling back to in-memory storage (data will not persist)")
            store = MemoryDocumentStore()
    else:
        logger.warning("DATABASE_URL not set, using in-memory storage (data will not persist)")
        store = MemoryDocumentStore()

    logger.info("Storage backend selected: %s", store.backend)
    return store
