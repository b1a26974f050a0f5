"""Authentication provider access - user directory."""

from mumpa_admin.auth.base import AuthDirectory, UserNotFoundError
from mumpa_admin.auth.firebase_directory import FirebaseAuthDirectory

__all__ = ["AuthDirectory", "FirebaseAuthDirectory", "UserNotFoundError"]
