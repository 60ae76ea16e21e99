"""
Persistence adapters.

Services depend on the DocumentStore interface (base.py); the concrete backend
(JSON files, SQL document table or in-memory) is chosen once by
build_document_store() when the app is created.
"""

from .base import DocumentStore
from .factory import build_document_store

__all__ = ["DocumentStore", "build_document_store"]
