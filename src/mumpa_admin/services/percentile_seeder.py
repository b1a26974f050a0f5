"""Seeds default growth percentile curves into the document store."""

import logging
from datetime import datetime

from mumpa_admin.growth.percentiles import DEFAULT_TOTAL_WEEKS, build_percentile_curve
from mumpa_admin.models import MeasurementType, Sex
from mumpa_admin.persistence import DocumentStore
from mumpa_admin.timeutils import utc_now

logger = logging.getLogger(__name__)

COLLECTION = "growth_percentiles"


def percentile_doc_id(measurement_type: MeasurementType, sex: Sex) -> str:
    return f"{measurement_type.value}_{sex.value}"


def seed_growth_percentiles(
    store: DocumentStore,
    now: datetime | None = None,
    total_weeks: int = DEFAULT_TOTAL_WEEKS,
) -> list[str]:
    """
    Upsert one document per (type, sex), e.g. weight_F, in a single batch.
    Re-running is idempotent apart from the timestamps.
    """
    now = now or utc_now()
    documents: dict[str, dict] = {}
    for measurement_type in MeasurementType:
        for sex in Sex:
            points = build_percentile_curve(measurement_type, sex, total_weeks)
            if not points:
                raise ValueError(f"No percentile curve for {measurement_type.value}/{sex.value}")
            documents[percentile_doc_id(measurement_type, sex)] = {
                "type": measurement_type.value,
                "sex": sex.value,
                "points": [p.to_document() for p in points],
                "createdAt": now,
                "updatedAt": now,
            }

    store.set_many(COLLECTION, documents, merge=True)
    logger.info("Seeded %d percentile curves (weight/height/head, M/F)", len(documents))
    return list(documents)
