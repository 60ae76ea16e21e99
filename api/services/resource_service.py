"""
Generic CRUD use cases shared by blog posts and projects.

Subclasses declare the collection, the required fields and how request fields
turn into a new record (build) or into changes on an existing one (merge).

Update merge rule: a field missing from the request keeps its stored value, a
field that is present replaces it, even when it is an empty string. Required
fields can never be blanked.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional
import logging

from api.core.errors import NotFound, ServerError, ValidationError
from api.core.utils import format_timestamp, new_id, next_timestamp, parse_timestamp, utc_now
from api.repositories.base import DocumentStore
from api.services.asset_service import AssetStorage, ImageUpload

logger = logging.getLogger(__name__)


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


class ResourceService:
    collection = ""
    label = "Resource"
    required_fields: tuple[str, ...] = ()
    editable_fields: tuple[str, ...] = ()
    list_fields: tuple[str, ...] = ()

    def __init__(self, store: DocumentStore, assets: AssetStorage) -> None:
        self.store = store
        self.assets = assets

    # -------------------------------------- hooks --------------------------------------
    def build(self, fields: dict) -> dict:
        raise NotImplementedError

    def merge(self, existing: dict, fields: dict) -> dict:
        raise NotImplementedError

    # -------------------------------------- helpers --------------------------------------
    def _clean(self, fields: Optional[Mapping[str, Any]]) -> dict:
        """Keep editable fields only; None counts as "not supplied"."""
        cleaned = {}
        for key, value in (fields or {}).items():
            if key not in self.editable_fields or value is None:
                continue
            if isinstance(value, (list, tuple)) and key in self.list_fields:
                cleaned[key] = list(value)
            elif isinstance(value, str):
                cleaned[key] = value
            else:
                cleaned[key] = str(value)
        return cleaned

    def _not_found(self) -> NotFound:
        return NotFound(f"{self.label} not found")

    # -------------------------------------- queries --------------------------------------
    def list(self) -> list[dict]:
        records = self.store.list_all(self.collection)
        return sorted(records, key=lambda r: parse_timestamp(r.get("createdAt")), reverse=True)

    def get(self, record_id: str) -> dict:
        record = self.store.find_by_id(self.collection, record_id)
        if record is None:
            raise self._not_found()
        return record

    # -------------------------------------- commands --------------------------------------
    def create(self, fields: Optional[Mapping[str, Any]], image: Optional[ImageUpload] = None) -> dict:
        data = self._clean(fields)
        missing = [name for name in self.required_fields if not _has_text(data.get(name))]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        if image is not None:
            self.assets.validate(image)

        now = format_timestamp(utc_now())
        record = {"id": new_id(), **self.build(data), "image": None, "createdAt": now, "updatedAt": now}
        if image is not None:
            record["image"] = self.assets.store(image)
        try:
            self.store.insert(self.collection, record)
        except ServerError:
            self.assets.release(record["image"])
            raise
        logger.info("%s %s created", self.label, record["id"])
        return record

    def update(self, record_id: str, fields: Optional[Mapping[str, Any]], image: Optional[ImageUpload] = None) -> dict:
        existing = self.get(record_id)
        data = self._clean(fields)
        blanked = [name for name in self.required_fields if name in data and not _has_text(data[name])]
        if blanked:
            raise ValidationError(f"Fields cannot be empty: {', '.join(blanked)}")
        if image is not None:
            self.assets.validate(image)

        updated = dict(existing)
        updated.update(self.merge(existing, data))
        updated["updatedAt"] = next_timestamp(existing.get("updatedAt"))
        previous_image = existing.get("image")
        new_image = None
        if image is not None:
            new_image = self.assets.store(image)
            updated["image"] = new_image
        try:
            replaced = self.store.replace(self.collection, record_id, updated)
        except ServerError:
            self.assets.release(new_image)
            raise
        if not replaced:
            self.assets.release(new_image)
            raise self._not_found()
        if new_image and previous_image:
            self.assets.release(previous_image)
        return updated

    def delete(self, record_id: str) -> dict:
        existing = self.get(record_id)
        if not self.store.remove_by_id(self.collection, record_id):
            raise self._not_found()
        self.assets.release(existing.get("image"))
        logger.info("%s %s deleted", self.label, record_id)
        return {"message": f"{self.label} deleted successfully"}
