"""Timestamp helpers. All domain timestamps are timezone-aware UTC."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: object) -> datetime:
    """Parse a datetime or an ISO-8601 string.

    Raises:
        ValueError: If the value is neither, or the string is malformed.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str) and value.strip():
        return as_utc(datetime.fromisoformat(value.strip()))
    raise ValueError(f"Not a timestamp: {value!r}")
