"""Children service - live age / gestation figures for API responses."""

import logging
from datetime import datetime
from typing import Any

from mumpa_admin.growth import project_age
from mumpa_admin.models import AgeRecord, BornRecord, ProjectedAge, UnbornRecord
from mumpa_admin.persistence import DocumentStore
from mumpa_admin.timeutils import to_utc_datetime, utc_now

logger = logging.getLogger(__name__)

COLLECTION = "children"


def record_from_document(data: dict[str, Any]) -> AgeRecord:
    """
    Build the age record from a children/ document.
    Raises pydantic.ValidationError for missing or negative values.
    """
    if data.get("isUnborn"):
        return UnbornRecord(gestation_weeks=data.get("gestationWeeks"), created_at=data.get("createdAt"))
    return BornRecord(age_in_months=data.get("ageInMonths"), created_at=data.get("createdAt"))


def projection_fields(record: AgeRecord, projected: ProjectedAge) -> dict[str, Any]:
    """Stored and projected fields in the shape the app expects."""
    if isinstance(record, BornRecord):
        return {
            "ageInMonths": record.age_in_months,
            "currentAgeInMonths": projected.current_age_in_months,
            "currentGestationWeeks": None,
            "registeredAgeInMonths": record.age_in_months,
            "registeredGestationWeeks": None,
            "daysSinceCreation": projected.elapsed_days,
        }
    return {
        "gestationWeeks": record.gestation_weeks,
        "currentAgeInMonths": None,
        "currentGestationWeeks": projected.current_gestation_weeks,
        "registeredAgeInMonths": None,
        "registeredGestationWeeks": record.gestation_weeks,
        "daysSinceCreation": projected.elapsed_days,
        "isOverdue": projected.is_overdue,
    }


class ChildrenService:
    """Reads children documents and decorates them with projected ages."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def format_child(
        self,
        doc_id: str,
        data: dict[str, Any],
        now: datetime | None = None,
    ) -> dict[str, Any]:
        record = record_from_document(data)
        projected = project_age(record, now)
        logger.debug(
            "Child %s: registered %s -> %s",
            doc_id,
            record.registered_value,
            projected.current_gestation_weeks if projected.kind == "unborn" else projected.current_age_in_months,
        )
        return {"id": doc_id, **data, **projection_fields(record, projected)}

    def list_children(self, parent_id: str, now: datetime | None = None) -> list[dict[str, Any]]:
        """Parent's children, newest registration first. Unreadable documents are skipped."""
        now = now or utc_now()
        docs = self._store.find(COLLECTION, "parentId", parent_id)
        children = []
        for doc in docs:
            try:
                children.append((to_utc_datetime(doc.data.get("createdAt")), self.format_child(doc.id, doc.data, now)))
            except ValueError as e:
                logger.warning("Skipping child %s with invalid age data: %s", doc.id, e)
        children.sort(key=lambda pair: pair[0], reverse=True)
        return [child for _, child in children]
