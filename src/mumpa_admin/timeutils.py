"""Timestamp normalization for documents read from Firestore, JSON files or HTTP bodies."""

from datetime import datetime, timezone
from typing import Any


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _from_epoch(seconds: float) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"Timestamp out of range: {seconds!r}") from e


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"Timestamp out of range: {dt!r}") from e


def to_utc_datetime(value: Any) -> datetime:
    """
    Convert a stored timestamp to a timezone-aware UTC datetime.
    - datetime (including Firestore DatetimeWithNanoseconds); naive -> assume UTC
    - ISO 8601 string, with or without offset / trailing Z
    - serialized Firestore Timestamp: {"_seconds": ..., "_nanoseconds": ...}
    - int/float epoch seconds
    Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return _as_utc(value)

    if isinstance(value, dict):
        seconds = value.get("_seconds", value.get("seconds"))
        nanos = value.get("_nanoseconds", value.get("nanoseconds", 0)) or 0
        if not _is_number(seconds) or not _is_number(nanos):
            raise ValueError(f"Timestamp mapping needs numeric seconds: {value!r}")
        return _from_epoch(seconds + nanos / 1e9)

    if _is_number(value):
        return _from_epoch(value)

    if isinstance(value, str) and value.strip():
        return _as_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))

    raise ValueError(f"Not a timestamp: {value!r}")
