"""Document store on local JSON files, one file per document."""

import json
import logging
import uuid
from datetime import date, datetime
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote

from mumpa_admin.persistence.base import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    apply_update,
)

logger = logging.getLogger(__name__)


def json_default(value: Any) -> Any:
    """Datetimes are stored as ISO 8601 strings."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _encode(name: str) -> str:
    """Reversible file name for a collection or document id."""
    if not name or name in (".", ".."):
        raise ValueError(f"Invalid collection or document id: {name!r}")
    return quote(name, safe="")


class FileDocumentStore(DocumentStore):
    """File-based store. Layout: <data_dir>/<collection>/<doc_id>.json"""

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def _collection_dir(self, collection: str) -> Path:
        return self._data_dir / _encode(collection)

    def _path(self, collection: str, doc_id: str) -> Path:
        return self._collection_dir(collection) / f"{_encode(doc_id)}.json"

    def _read(self, path: Path) -> dict[str, Any] | None:
        try:
            with path.open(encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load document %s: %s", path, e)
            return None

    def _write(self, path: Path, data: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=json_default, ensure_ascii=False)
        except OSError as e:
            logger.error("Could not save document %s: %s", path, e)
            raise

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        path = self._path(collection, doc_id)
        if not path.exists():
            return None
        return self._read(path)

    def set(self, collection: str, doc_id: str, data: dict[str, Any], *, merge: bool = False) -> None:
        current = self.get(collection, doc_id) if merge else None
        self._write(self._path(collection, doc_id), apply_update(current or {}, data))

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        current = self.get(collection, doc_id)
        if current is None:
            raise DocumentNotFoundError(f"{collection}/{doc_id}")
        self._write(self._path(collection, doc_id), apply_update(current, data))

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        self.set(collection, doc_id, data)
        return doc_id

    def stream(self, collection: str) -> list[Document]:
        directory = self._collection_dir(collection)
        if not directory.exists():
            return []
        docs = []
        for path in sorted(directory.glob("*.json")):
            data = self._read(path)
            if data is not None:
                docs.append(Document(id=unquote(path.stem), data=data))
        return docs
