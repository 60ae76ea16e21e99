"""
JSON-file persistence adapter.

Each collection lives in ``<data_dir>/<collection>.json`` as a JSON array. Every
write reads the whole file, applies the change and writes the whole file back;
there is no locking, concurrent writers race and the last one wins.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import json
import logging
import os
import tempfile

from api.core.errors import StorageError
from api.repositories.base import DocumentStore

logger = logging.getLogger(__name__)


class JsonFileDocumentStore(DocumentStore):
    backend = "json"

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create data directory {self.data_dir}") from exc

    def _path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def load(self, collection: str) -> list[dict]:
        path = self._path(collection)
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error("Failed to read %s: %s", path, exc)
            raise StorageError("Storage unavailable") from exc
        if not isinstance(data, list):
            raise StorageError(f"Corrupted collection file {path.name}")
        return data

    def save(self, collection: str, records: list[dict]) -> None:
        path = self._path(collection)
        payload = json.dumps(records, ensure_ascii=False, indent=2)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{collection}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except OSError as exc:
            logger.error("Failed to write %s: %s", path, exc)
            raise StorageError("Storage unavailable") from exc

    def list_all(self, collection: str) -> list[dict]:
        return self.load(collection)

    def find_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        for record in self.load(collection):
            if record.get("id") == record_id:
                return record
        return None

    def insert(self, collection: str, record: dict) -> dict:
        records = self.load(collection)
        records.append(record)
        self.save(collection, records)
        return record

    def replace(self, collection: str, record_id: str, record: dict) -> bool:
        records = self.load(collection)
        for idx, current in enumerate(records):
            if current.get("id") == record_id:
                records[idx] = record
                self.save(collection, records)
                return True
        return False

    def remove_by_id(self, collection: str, record_id: str) -> bool:
        records = self.load(collection)
        remaining = [r for r in records if r.get("id") != record_id]
        if len(remaining) == len(records):
            return False
        self.save(collection, remaining)
        return True
