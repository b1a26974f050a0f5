"""Document store abstract interface - a Firestore-shaped subset."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class _DeleteField:
    """Sentinel: passing it as a value to update() removes the key."""

    def __repr__(self) -> str:
        return "DELETE_FIELD"


DELETE_FIELD: Any = _DeleteField()


class DocumentNotFoundError(KeyError):
    """update() on a document that does not exist."""


@dataclass
class Document:
    id: str
    data: dict[str, Any] = field(default_factory=dict)


def apply_update(current: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    """Merge top-level keys into a copy of current, honouring DELETE_FIELD."""
    merged = dict(current)
    for key, value in changes.items():
        if value is DELETE_FIELD:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


class DocumentStore(ABC):
    """Collections of JSON-like documents keyed by id."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Document data, or None if it does not exist."""
        ...

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: dict[str, Any], *, merge: bool = False) -> None:
        """Create or replace a document. merge=True upserts top-level keys."""
        ...

    @abstractmethod
    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Change fields of an existing document. Raises DocumentNotFoundError."""
        ...

    @abstractmethod
    def add(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document with a generated id and return the id."""
        ...

    @abstractmethod
    def stream(self, collection: str) -> list[Document]:
        """All documents in a collection."""
        ...

    def find(
        self,
        collection: str,
        field_name: str,
        value: Any,
        *,
        limit: int | None = None,
    ) -> list[Document]:
        """Documents whose field equals value."""
        matches = [d for d in self.stream(collection) if d.data.get(field_name) == value]
        return matches[:limit] if limit is not None else matches

    def set_many(
        self,
        collection: str,
        documents: dict[str, dict[str, Any]],
        *,
        merge: bool = True,
    ) -> None:
        """Write several documents. Backends with batches commit them together."""
        for doc_id, data in documents.items():
            self.set(collection, doc_id, data, merge=merge)
