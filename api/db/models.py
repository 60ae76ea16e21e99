"""SQLAlchemy models for the document-style SQL backend."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, JSON, func

from .session import Base


class Document(Base):
    """One record of a collection (blogs, projects, admins) stored as JSON."""

    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    id = Column(String(255), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
