"""Firestore-backed document store."""

import logging
from typing import Any

from mumpa_admin.config import Settings
from mumpa_admin.persistence.base import (
    DELETE_FIELD,
    Document,
    DocumentNotFoundError,
    DocumentStore,
)

logger = logging.getLogger(__name__)

# Firestore caps a write batch at 500 operations
BATCH_LIMIT = 500


class FirestoreDocumentStore(DocumentStore):
    """Thin adapter over google-cloud-firestore via firebase_admin."""

    def __init__(self, settings: Settings | None = None, *, client=None) -> None:
        self._settings = settings
        self._client = client

    def _get_client(self):
        """Lazy-init Firestore client."""
        if self._client is None:
            from firebase_admin import firestore

            from mumpa_admin.firebase import get_firebase_app

            self._client = firestore.client(get_firebase_app(self._settings))
        return self._client

    def _to_firestore(self, data: dict[str, Any]) -> dict[str, Any]:
        from firebase_admin import firestore

        return {k: (firestore.DELETE_FIELD if v is DELETE_FIELD else v) for k, v in data.items()}

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        snapshot = self._get_client().collection(collection).document(doc_id).get()
        return snapshot.to_dict() if snapshot.exists else None

    def set(self, collection: str, doc_id: str, data: dict[str, Any], *, merge: bool = False) -> None:
        ref = self._get_client().collection(collection).document(doc_id)
        ref.set(self._to_firestore(data) if merge else data, merge=merge)

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        from google.api_core.exceptions import NotFound

        ref = self._get_client().collection(collection).document(doc_id)
        try:
            ref.update(self._to_firestore(data))
        except NotFound as e:
            raise DocumentNotFoundError(f"{collection}/{doc_id}") from e

    def add(self, collection: str, data: dict[str, Any]) -> str:
        _, ref = self._get_client().collection(collection).add(data)
        return ref.id

    def stream(self, collection: str) -> list[Document]:
        return [
            Document(id=snap.id, data=snap.to_dict() or {})
            for snap in self._get_client().collection(collection).stream()
        ]

    def find(
        self,
        collection: str,
        field_name: str,
        value: Any,
        *,
        limit: int | None = None,
    ) -> list[Document]:
        query = self._get_client().collection(collection).where(field_name, "==", value)
        if limit is not None:
            query = query.limit(limit)
        return [Document(id=snap.id, data=snap.to_dict() or {}) for snap in query.stream()]

    def set_many(
        self,
        collection: str,
        documents: dict[str, dict[str, Any]],
        *,
        merge: bool = True,
    ) -> None:
        """Batched writes, committed every BATCH_LIMIT operations."""
        db = self._get_client()
        batch = db.batch()
        pending = 0
        for doc_id, data in documents.items():
            ref = db.collection(collection).document(doc_id)
            batch.set(ref, self._to_firestore(data) if merge else data, merge=merge)
            pending += 1
            if pending == BATCH_LIMIT:
                batch.commit()
                batch = db.batch()
                pending = 0
        if pending:
            batch.commit()
        logger.info("Committed %d documents to %s", len(documents), collection)
