"""Firebase Admin app initialization, shared by Firestore and Auth clients."""

import logging

import firebase_admin
from firebase_admin import credentials

from mumpa_admin.config import Settings, get_settings

logger = logging.getLogger(__name__)


def get_firebase_app(settings: Settings | None = None) -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    settings = settings or get_settings()
    if settings.firebase_credentials_file is not None:
        cred = credentials.Certificate(str(settings.firebase_credentials_file))
    else:
        cred = credentials.Certificate(settings.firebase_service_account())
    logger.info("Initializing Firebase app for project %s", settings.firebase_project_id or "(from file)")
    return firebase_admin.initialize_app(cred, {"storageBucket": settings.firebase_storage_bucket})
