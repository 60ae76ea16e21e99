"""Credential store holding the single administrator record."""
from __future__ import annotations

from typing import Optional

from api.repositories.base import DocumentStore

ADMINS = "admins"


class AdminRepository:
    """The admin record lives in the ``admins`` collection, keyed by username."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def get_admin(self) -> Optional[dict]:
        records = self.store.list_all(ADMINS)
        return records[0] if records else None

    def create_admin(self, username: str, password_hash: str) -> dict:
        record = {"id": username, "username": username, "passwordHash": password_hash}
        return self.store.insert(ADMINS, record)

    def update_password_hash(self, username: str, password_hash: str) -> bool:
        record = self.store.find_by_id(ADMINS, username)
        if not record:
            return False
        record["passwordHash"] = password_hash
        return self.store.replace(ADMINS, username, record)

    def reset_admin(self, username: str, password_hash: str) -> dict:
        """Replace whatever admin exists with a fresh record (used by the reseed script)."""
        for record in self.store.list_all(ADMINS):
            self.store.remove_by_id(ADMINS, record["id"])
        return self.create_admin(username, password_hash)
