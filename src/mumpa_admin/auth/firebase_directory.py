"""Firebase Auth implementation of the user directory."""

import logging

from mumpa_admin.auth.base import AuthDirectory, UserNotFoundError
from mumpa_admin.config import Settings
from mumpa_admin.models import AuthUser

logger = logging.getLogger(__name__)


def _to_auth_user(record) -> AuthUser:
    return AuthUser(
        uid=record.uid,
        email=record.email,
        display_name=record.display_name,
        providers=[p.provider_id for p in (record.provider_data or [])],
    )


class FirebaseAuthDirectory(AuthDirectory):
    """Wraps firebase_admin.auth for the default app."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._app = None

    def _get_app(self):
        if self._app is None:
            from mumpa_admin.firebase import get_firebase_app

            self._app = get_firebase_app(self._settings)
        return self._app

    def list_users(self, max_results: int = 100) -> list[AuthUser]:
        from firebase_admin import auth

        page = auth.list_users(max_results=max_results, app=self._get_app())
        return [_to_auth_user(u) for u in page.users]

    def get_user_by_email(self, email: str) -> AuthUser:
        from firebase_admin import auth

        try:
            record = auth.get_user_by_email(email, app=self._get_app())
        except auth.UserNotFoundError as e:
            raise UserNotFoundError(f"No user with email {email}") from e
        return _to_auth_user(record)
