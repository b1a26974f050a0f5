"""User administration - listing, admin promotion and profile audits."""

import logging
from datetime import datetime
from typing import Any

from mumpa_admin.auth import AuthDirectory
from mumpa_admin.models import UserFieldCounts, UserSummary
from mumpa_admin.persistence import DocumentStore
from mumpa_admin.timeutils import utc_now

logger = logging.getLogger(__name__)

COLLECTION = "users"


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def list_users(
    directory: AuthDirectory,
    store: DocumentStore,
    max_results: int = 100,
) -> list[UserSummary]:
    """Auth accounts joined with their users/<uid> profile document."""
    summaries = []
    for user in directory.list_users(max_results):
        profile = store.get(COLLECTION, user.uid)
        summary = UserSummary(
            uid=user.uid,
            email=user.email,
            display_name=user.display_name,
            providers=user.providers,
            has_profile=profile is not None,
        )
        if profile is not None:
            summary.role = profile.get("role")
            summary.is_admin = bool(profile.get("isAdmin", False))
            summary.is_active = profile.get("isActive") is not False
        summaries.append(summary)
    logger.info("Listed %d users", len(summaries))
    return summaries


def set_admin(
    directory: AuthDirectory,
    store: DocumentStore,
    email: str,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Promote the account with this email to admin. Existing profile fields are kept.
    Returns the stored profile. Raises UserNotFoundError.
    """
    user = directory.get_user_by_email(email)
    logger.info("Promoting %s (%s) to admin", email, user.uid)
    store.set(
        COLLECTION,
        user.uid,
        {
            "role": "admin",
            "isAdmin": True,
            "isActive": True,
            "email": user.email,
            "displayName": user.display_name or "Admin",
            "updatedAt": now or utc_now(),
        },
        merge=True,
    )
    return store.get(COLLECTION, user.uid) or {}


def count_user_fields(store: DocumentStore) -> UserFieldCounts:
    """How many profiles carry a non-blank displayName, name, both or neither."""
    counts = UserFieldCounts()
    for doc in store.stream(COLLECTION):
        has_display = _has_text(doc.data.get("displayName"))
        has_name = _has_text(doc.data.get("name"))
        counts.total += 1
        counts.with_display_name += has_display
        counts.with_name += has_name
        counts.with_both += has_display and has_name
        counts.with_neither += not has_display and not has_name
    return counts
