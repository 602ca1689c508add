"""Shared utilities for validation and normalization."""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, time, timedelta, tzinfo

from .exceptions import ValidationError

TIME_SLOTS: tuple[str, ...] = tuple(f"{hour:02d}:00" for hour in range(24))

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str) or not value:
        raise ValidationError("Timestamp must be a non-empty string.")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError("Timestamp is not a valid ISO 8601 value.") from exc
    if parsed.tzinfo is None:
        # The API emits naive UTC timestamps for some resources.
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_utc_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        raise ValidationError("Timestamp must include timezone information.")
    normalized = value.astimezone(UTC).replace(microsecond=0)
    return normalized.isoformat().replace("+00:00", "Z")


def ensure_utc_timestamp(value: str) -> str:
    return format_utc_timestamp(parse_timestamp(value))


def parse_slot(value: str) -> time:
    """Parse a zero-padded ``HH:mm`` label."""
    if not isinstance(value, str):
        raise ValidationError("Time must be a string in HH:mm format.")
    match = _TIME_RE.match(value.strip())
    if match is None:
        raise ValidationError(f"Time {value!r} is not in HH:mm format.")
    return time(int(match.group(1)), int(match.group(2)))


def ensure_slot(value: str) -> str:
    if value not in TIME_SLOTS:
        raise ValidationError(f"Unknown time slot {value!r}.")
    return value


def at_slot(day: date, slot: str, tz: tzinfo = UTC) -> datetime:
    """Return the aware instant of ``slot`` on ``day`` in ``tz``."""
    return datetime.combine(day, parse_slot(slot), tzinfo=tz)


def start_of_day(day: date, tz: tzinfo = UTC) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def local_date(value: datetime, tz: tzinfo = UTC) -> date:
    if value.tzinfo is None:
        raise ValidationError("Timestamp must include timezone information.")
    return value.astimezone(tz).date()


def day_bounds(day: date, tz: tzinfo = UTC) -> tuple[datetime, datetime]:
    """Return the first and last representable instant of ``day``."""
    start = start_of_day(day, tz)
    return start, start + timedelta(days=1) - timedelta(milliseconds=1)


def format_api_timestamp(value: datetime) -> str:
    """Format a query timestamp with millisecond precision."""
    if value.tzinfo is None:
        raise ValidationError("Timestamp must include timezone information.")
    normalized = value.astimezone(UTC)
    return normalized.isoformat(timespec="milliseconds").replace("+00:00", "Z")
