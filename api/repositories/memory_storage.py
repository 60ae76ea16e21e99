"""Volatile in-process adapter used when no durable backend is configured."""

from __future__ import annotations

from copy import deepcopy
from typing import Optional

from api.repositories.base import DocumentStore


class MemoryDocumentStore(DocumentStore):
    """Same behaviour as the durable stores; state is lost on restart."""

    backend = "memory"

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict]] = {}

    def _bucket(self, collection: str) -> dict[str, dict]:
        return self._collections.setdefault(collection, {})

    def list_all(self, collection: str) -> list[dict]:
        return [deepcopy(r) for r in self._bucket(collection).values()]

    def find_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        record = self._bucket(collection).get(record_id)
        return deepcopy(record) if record is not None else None

    def insert(self, collection: str, record: dict) -> dict:
        self._bucket(collection)[record["id"]] = deepcopy(record)
        return record

    def replace(self, collection: str, record_id: str, record: dict) -> bool:
        bucket = self._bucket(collection)
        if record_id not in bucket:
            return False
        bucket[record_id] = deepcopy(record)
        return True

    def remove_by_id(self, collection: str, record_id: str) -> bool:
        return self._bucket(collection).pop(record_id, None) is not None
