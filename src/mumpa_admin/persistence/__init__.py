"""Persistence layer."""

from mumpa_admin.persistence.base import (
    DELETE_FIELD,
    Document,
    DocumentNotFoundError,
    DocumentStore,
)
from mumpa_admin.persistence.factory import create_store
from mumpa_admin.persistence.file_store import FileDocumentStore
from mumpa_admin.persistence.firestore_store import FirestoreDocumentStore
from mumpa_admin.persistence.redis_store import RedisDocumentStore

__all__ = [
    "DELETE_FIELD",
    "Document",
    "DocumentNotFoundError",
    "DocumentStore",
    "FileDocumentStore",
    "FirestoreDocumentStore",
    "RedisDocumentStore",
    "create_store",
]
