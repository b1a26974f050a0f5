"""One-shot field migrations across a collection."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from mumpa_admin.persistence import DELETE_FIELD, DocumentStore
from mumpa_admin.timeutils import utc_now

logger = logging.getLogger(__name__)


@dataclass
class MigrationReport:
    """Outcome counts of a migration run."""

    updated: int = 0
    skipped: int = 0
    errors: int = 0


def _apply(store: DocumentStore, collection: str, doc_id: str, changes: dict[str, Any], report: MigrationReport) -> None:
    try:
        store.update(collection, doc_id, changes)
        report.updated += 1
    except Exception as e:
        logger.error("Could not update %s/%s: %s", collection, doc_id, e)
        report.errors += 1


def backfill_missing_field(
    store: DocumentStore,
    collection: str,
    field_name: str,
    value: Any,
) -> MigrationReport:
    """Set field_name=value on every document that does not define it."""
    report = MigrationReport()
    for doc in store.stream(collection):
        if field_name in doc.data:
            report.skipped += 1
            continue
        _apply(store, collection, doc.id, {field_name: value}, report)
    logger.info("Backfill %s.%s: %s", collection, field_name, report)
    return report


def rename_field(
    store: DocumentStore,
    collection: str,
    old_name: str,
    new_name: str,
    *,
    overwrite: bool = False,
) -> MigrationReport:
    """Move old_name to new_name and delete old_name."""
    if old_name == new_name:
        raise ValueError("old and new field names are the same")
    report = MigrationReport()
    for doc in store.stream(collection):
        if old_name not in doc.data:
            report.skipped += 1
            continue
        if new_name in doc.data and not overwrite:
            logger.warning("%s/%s already has %s, leaving it", collection, doc.id, new_name)
            report.skipped += 1
            continue
        _apply(store, collection, doc.id, {new_name: doc.data[old_name], old_name: DELETE_FIELD}, report)
    logger.info("Rename %s.%s -> %s: %s", collection, old_name, new_name, report)
    return report


def append_suffix(
    store: DocumentStore,
    collection: str,
    field_name: str,
    suffix: str,
    now: datetime | None = None,
) -> MigrationReport:
    """Append suffix to a string field unless it already ends with it."""
    if not suffix:
        raise ValueError("suffix must not be empty")
    now = now or utc_now()
    report = MigrationReport()
    for doc in store.stream(collection):
        value = doc.data.get(field_name)
        if not isinstance(value, str) or not value or value.endswith(suffix):
            report.skipped += 1
            continue
        _apply(store, collection, doc.id, {field_name: value + suffix, "updatedAt": now}, report)
    logger.info("Suffix %s.%s: %s", collection, field_name, report)
    return report
