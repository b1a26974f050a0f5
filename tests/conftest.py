"""Shared fixtures."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from mumpa_admin.auth import AuthDirectory, UserNotFoundError
from mumpa_admin.config import FIREBASE_ENV_FIELDS, get_settings, load_yaml_config
from mumpa_admin.models import AuthUser
from mumpa_admin.persistence import FileDocumentStore

REPO_ROOT = Path(__file__).parent.parent
JWT_SECRET = "test-secret"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """No Firebase / Redis from the environment; JSON files under tmp_path."""
    for name in FIREBASE_ENV_FIELDS:
        monkeypatch.delenv(name.upper(), raising=False)
    monkeypatch.delenv("FIREBASE_CREDENTIALS_FILE", raising=False)
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("JWT_SECRET", JWT_SECRET)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store(tmp_path) -> FileDocumentStore:
    return FileDocumentStore(tmp_path / "store")


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def vaccine_schedules() -> dict:
    return load_yaml_config(REPO_ROOT / "config" / "vaccine_schedules.yaml")


class FakeAuthDirectory(AuthDirectory):
    """In-memory accounts."""

    def __init__(self, users: list[AuthUser]) -> None:
        self.users = users

    def list_users(self, max_results: int = 100) -> list[AuthUser]:
        return self.users[:max_results]

    def get_user_by_email(self, email: str) -> AuthUser:
        for user in self.users:
            if user.email == email:
                return user
        raise UserNotFoundError(f"No user with email {email}")


@pytest.fixture
def directory() -> FakeAuthDirectory:
    return FakeAuthDirectory([
        AuthUser(uid="u1", email="ana@example.com", display_name="Ana", providers=["password"]),
        AuthUser(uid="u2", email="luis@example.com", display_name=None, providers=["google.com", "apple.com"]),
    ])
