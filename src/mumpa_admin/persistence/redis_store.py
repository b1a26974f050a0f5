"""Redis-backed document store for cloud deployment. Use when REDIS_URL is set."""

import json
import logging
import uuid
from typing import Any

from mumpa_admin.persistence.base import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    apply_update,
)
from mumpa_admin.persistence.file_store import json_default

logger = logging.getLogger(__name__)

KEY_PREFIX = "mumpa"


class RedisDocumentStore(DocumentStore):
    """Documents as JSON strings, with a set of ids per collection."""

    def __init__(self, redis_url: str, *, client=None) -> None:
        self._redis_url = redis_url
        self._client = client

    def _get_client(self):
        """Lazy-init Redis client."""
        if self._client is None:
            import redis
            self._client = redis.from_url(
                self._redis_url,
                decode_responses=True,
            )
        return self._client

    def _key(self, collection: str, doc_id: str) -> str:
        return f"{KEY_PREFIX}:{collection}:{doc_id}"

    def _index_key(self, collection: str) -> str:
        return f"{KEY_PREFIX}:index:{collection}"

    def _dumps(self, data: dict[str, Any]) -> str:
        return json.dumps(data, default=json_default)

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        raw = self._get_client().get(self._key(collection, doc_id))
        if not raw:
            return None
        return json.loads(raw)

    def set(self, collection: str, doc_id: str, data: dict[str, Any], *, merge: bool = False) -> None:
        current = self.get(collection, doc_id) if merge else None
        r = self._get_client()
        try:
            pipe = r.pipeline()
            pipe.set(self._key(collection, doc_id), self._dumps(apply_update(current or {}, data)))
            pipe.sadd(self._index_key(collection), doc_id)
            pipe.execute()
        except Exception as e:
            logger.error("Redis document save failed for %s/%s: %s", collection, doc_id, e)
            raise

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        current = self.get(collection, doc_id)
        if current is None:
            raise DocumentNotFoundError(f"{collection}/{doc_id}")
        self._get_client().set(self._key(collection, doc_id), self._dumps(apply_update(current, data)))

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        self.set(collection, doc_id, data)
        return doc_id

    def stream(self, collection: str) -> list[Document]:
        r = self._get_client()
        ids = sorted(r.smembers(self._index_key(collection)))
        if not ids:
            return []
        values = r.mget([self._key(collection, i) for i in ids])
        return [Document(id=i, data=json.loads(v)) for i, v in zip(ids, values) if v]

    def set_many(
        self,
        collection: str,
        documents: dict[str, dict[str, Any]],
        *,
        merge: bool = True,
    ) -> None:
        """Single pipeline for all documents."""
        r = self._get_client()
        pipe = r.pipeline()
        for doc_id, data in documents.items():
            current = self.get(collection, doc_id) if merge else None
            pipe.set(self._key(collection, doc_id), self._dumps(apply_update(current or {}, data)))
            pipe.sadd(self._index_key(collection), doc_id)
        pipe.execute()
