"""Document store contract shared by every persistence backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class DocumentStore(ABC):
    """
    Minimal collection-of-records interface.

    Records are plain JSON-compatible dicts carrying an ``id`` key that is
    unique inside its collection. Implementations raise StorageError when the
    underlying medium fails.
    """

    backend = "abstract"

    @abstractmethod
    def list_all(self, collection: str) -> list[dict]:
        ...

    @abstractmethod
    def find_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        ...

    @abstractmethod
    def insert(self, collection: str, record: dict) -> dict:
        ...

    @abstractmethod
    def replace(self, collection: str, record_id: str, record: dict) -> bool:
        """Overwrite an existing record. Returns False when the id is unknown."""

    @abstractmethod
    def remove_by_id(self, collection: str, record_id: str) -> bool:
        """Delete a record. Returns False when the id is unknown."""
