"""Seeds national vaccine schedules, one per country document."""

import logging
from datetime import datetime
from typing import Any

from mumpa_admin.config import get_vaccine_schedules
from mumpa_admin.models import VaccineScheduleDefinition
from mumpa_admin.persistence import Document, DocumentStore
from mumpa_admin.timeutils import utc_now

logger = logging.getLogger(__name__)

COUNTRIES = "countries"
SCHEDULES = "vaccine_schedules"
MAX_COUNTRY_HINTS = 50


def load_schedule_definition(
    country_key: str,
    schedules: dict[str, Any] | None = None,
) -> VaccineScheduleDefinition:
    """Schedule for country_key from config. Raises KeyError if undefined."""
    schedules = get_vaccine_schedules() if schedules is None else schedules
    key = country_key.strip().lower()
    if key not in schedules:
        raise KeyError(f"No vaccine schedule defined for '{country_key}'. Known: {', '.join(sorted(schedules))}")
    return VaccineScheduleDefinition.model_validate(schedules[key])


def _find_country(store: DocumentStore, names: list[str]) -> Document | None:
    for name in names:
        matches = store.find(COUNTRIES, "name", name, limit=1)
        if matches:
            return matches[0]
    return None


def seed_vaccine_schedule(
    store: DocumentStore,
    country_key: str,
    now: datetime | None = None,
    schedules: dict[str, Any] | None = None,
) -> tuple[str, bool]:
    """
    Create or refresh the schedule for a country.
    Returns (schedule_doc_id, created). Raises LookupError if the country
    document does not exist.
    """
    definition = load_schedule_definition(country_key, schedules)
    candidates = definition.country_names or [definition.display_name]
    country = _find_country(store, candidates)
    if country is None:
        known = sorted(d.data.get("name") for d in store.stream(COUNTRIES) if d.data.get("name"))
        raise LookupError(
            f"Country {'/'.join(candidates)} not found in {COUNTRIES}. "
            f"Examples: {', '.join(known[:MAX_COUNTRY_HINTS]) or 'none'}"
        )

    now = now or utc_now()
    payload = {
        "countryId": country.id,
        "countryName": country.data.get("name"),
        "name": f"Calendario {definition.display_name}",
        "isActive": True,
        "items": [item.to_document() for item in definition.items],
        "updatedAt": now,
        "createdAt": now,
    }

    existing = store.find(SCHEDULES, "countryId", country.id, limit=1)
    if existing:
        doc = existing[0]
        payload["createdAt"] = doc.data.get("createdAt") or now
        store.update(SCHEDULES, doc.id, payload)
        logger.info("Vaccine schedule %s updated (%s)", definition.display_name, doc.id)
        return doc.id, False

    doc_id = store.add(SCHEDULES, payload)
    logger.info("Vaccine schedule %s created (%s)", definition.display_name, doc_id)
    return doc_id, True
