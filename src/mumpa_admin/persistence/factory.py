"""Store factory - creates Firestore, Redis or file stores based on config."""

import logging
from pathlib import Path

from mumpa_admin.config import Settings, get_settings
from mumpa_admin.persistence.base import DocumentStore
from mumpa_admin.persistence.file_store import FileDocumentStore
from mumpa_admin.persistence.firestore_store import FirestoreDocumentStore
from mumpa_admin.persistence.redis_store import RedisDocumentStore

logger = logging.getLogger(__name__)


def create_store(settings: Settings | None = None) -> DocumentStore:
    """
    Firestore when Firebase credentials are configured, else Redis when
    REDIS_URL is set, else JSON files under DATA_DIR.
    """
    settings = settings or get_settings()
    if settings.firebase_configured:
        logger.info("Using Firestore document store")
        return FirestoreDocumentStore(settings)
    if settings.redis_url:
        logger.info("Using Redis document store")
        return RedisDocumentStore(settings.redis_url)
    data_dir = Path(settings.data_dir)
    logger.info("Using file document store at %s", data_dir)
    return FileDocumentStore(data_dir)
