"""Document store backed by a single SQLAlchemy table."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from api.core.errors import StorageError
from api.db.models import Document
from api.db.session import Base, get_engine, get_session
from api.repositories.base import DocumentStore

logger = logging.getLogger(__name__)


class SQLDocumentStore(DocumentStore):
    """CRUD helpers wrapping the SQLAlchemy session."""

    backend = "sql"

    def __init__(self, url: str | None = None) -> None:
        self.url = url

    def ensure_schema(self) -> None:
        """Create the documents table; fails fast when the database is unreachable."""
        try:
            Base.metadata.create_all(bind=get_engine(self.url))
        except SQLAlchemyError as exc:
            raise StorageError("Database unavailable") from exc
        except ImportError as exc:
            # dialect driver (psycopg, pymysql, ...) not installed
            logger.error("SQL driver missing for configured database: %s", exc)
            raise StorageError("Database driver not installed") from exc

    def _fail(self, action: str, exc: SQLAlchemyError) -> StorageError:
        logger.error("SQL %s failed: %s", action, exc)
        return StorageError("Storage unavailable")

    def list_all(self, collection: str) -> list[dict]:
        try:
            with get_session(self.url) as session:
                stmt = select(Document).where(Document.collection == collection).order_by(Document.created_at)
                return [dict(doc.data) for doc in session.execute(stmt).scalars().all()]
        except SQLAlchemyError as exc:
            raise self._fail("list", exc) from exc

    def find_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        try:
            with get_session(self.url) as session:
                doc = session.get(Document, (collection, record_id))
                return dict(doc.data) if doc else None
        except SQLAlchemyError as exc:
            raise self._fail("get", exc) from exc

    def insert(self, collection: str, record: dict) -> dict:
        try:
            with get_session(self.url) as session:
                session.add(Document(collection=collection, id=record["id"], data=dict(record)))
                session.commit()
            return record
        except SQLAlchemyError as exc:
            raise self._fail("insert", exc) from exc

    def replace(self, collection: str, record_id: str, record: dict) -> bool:
        try:
            with get_session(self.url) as session:
                doc = session.get(Document, (collection, record_id))
                if not doc:
                    return False
                doc.data = dict(record)
                session.commit()
                return True
        except SQLAlchemyError as exc:
            raise self._fail("replace", exc) from exc

    def remove_by_id(self, collection: str, record_id: str) -> bool:
        try:
            with get_session(self.url) as session:
                stmt = delete(Document).where(Document.collection == collection, Document.id == record_id)
                result = session.execute(stmt)
                session.commit()
                return bool(result.rowcount)
        except SQLAlchemyError as exc:
            raise self._fail("delete", exc) from exc
