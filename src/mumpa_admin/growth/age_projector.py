"""Projects a registered age or gestation to the present instant."""

import math
from datetime import datetime

from mumpa_admin.models import AgeRecord, BornRecord, ProjectedAge
from mumpa_admin.timeutils import to_utc_datetime, utc_now

SECONDS_PER_DAY = 86_400
DAYS_PER_MONTH = 30.44  # average month length
DAYS_PER_WEEK = 7
MIN_GESTATION_WEEKS = 4
MAX_GESTATION_WEEKS = 42


def elapsed_days(created_at: datetime, now: datetime) -> int:
    """Days since registration. Any partial day counts as a whole one."""
    delta = to_utc_datetime(now) - to_utc_datetime(created_at)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def project_age(record: AgeRecord, now: datetime | None = None) -> ProjectedAge:
    """
    Advance the record's registered value by the time elapsed since created_at.

    Born: whole 30.44-day months are added, result floored at 0.
    Unborn: whole weeks are added, result clamped to [4, 42]; is_overdue is
    taken from the unclamped sum.
    """
    days = elapsed_days(record.created_at, now or utc_now())

    if isinstance(record, BornRecord):
        months = math.floor(days / DAYS_PER_MONTH)
        return ProjectedAge(
            kind="born",
            registered_value=record.age_in_months,
            elapsed_days=days,
            elapsed_months=months,
            current_age_in_months=max(0, record.age_in_months + months),
        )

    weeks = math.floor(days / DAYS_PER_WEEK)
    raw = record.gestation_weeks + weeks
    return ProjectedAge(
        kind="unborn",
        registered_value=record.gestation_weeks,
        elapsed_days=days,
        elapsed_weeks=weeks,
        current_gestation_weeks=max(MIN_GESTATION_WEEKS, min(MAX_GESTATION_WEEKS, raw)),
        is_overdue=raw > MAX_GESTATION_WEEKS,
    )
