"""User directory abstract interface."""

from abc import ABC, abstractmethod

from mumpa_admin.models import AuthUser


class UserNotFoundError(LookupError):
    """No account matches the lookup."""


class AuthDirectory(ABC):
    """Read access to the authentication provider's accounts."""

    @abstractmethod
    def list_users(self, max_results: int = 100) -> list[AuthUser]:
        """First page of accounts, at most max_results."""
        ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> AuthUser:
        """Account for email. Raises UserNotFoundError."""
        ...
