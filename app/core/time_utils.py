"""
Date/time helpers.
"""
from datetime import date, datetime, timezone
from typing import Optional

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def utc_now() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso_timestamp(value: Optional[datetime] = None) -> str:
    """ISO-8601 with millisecond precision and a ``Z`` suffix."""
    value = ensure_utc(value or utc_now())
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 instant. Raises ValueError if malformed."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def format_entry_date(day: date) -> str:
    """Render the per-day key, e.g. ``Mon Jan 06 2025``.

    Locale independent so keys written on any machine compare equal.
    """
    return f"{_WEEKDAYS[day.weekday()]} {_MONTHS[day.month - 1]} {day.day:02d} {day.year:04d}"


def parse_entry_date(value: str) -> date:
    """Inverse of :func:`format_entry_date`."""
    parts = value.split()
    if len(parts) != 4 or parts[1] not in _MONTHS:
        raise ValueError(f"Invalid entry date: {value!r}")
    return date(int(parts[3]), _MONTHS.index(parts[1]) + 1, int(parts[2]))


def today_key() -> str:
    return format_entry_date(utc_now().date())
