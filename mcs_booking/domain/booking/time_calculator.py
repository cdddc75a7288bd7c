"""
Time parsing, formatting and slot generation.

All instants leave this module as timezone-aware UTC datetimes truncated to
millisecond precision, which is what the JSON store and the API carry.
"""

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from .models import OperatingHours, TimeRange

UTC = timezone.utc


def get_zone(name: Optional[str]) -> Optional[tzinfo]:
    """Resolve an IANA zone name. None means the host's local zone."""
    if not name:
        return None
    return ZoneInfo(name)


def _to_utc(local: datetime) -> datetime:
    # Naive datetimes are interpreted in the host's local zone by astimezone()
    return local.astimezone(UTC)


def _truncate_ms(dt: datetime) -> datetime:
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


def utc_now() -> datetime:
    return _truncate_ms(datetime.now(UTC))


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD calendar date. Raises ValueError on bad input."""
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def parse_instant(value: str, zone: Optional[tzinfo] = None) -> datetime:
    """
    Parse an ISO-8601 instant into an aware UTC datetime.

    Accepts a trailing "Z". Values without an offset are read as local time
    in ``zone`` (host local zone when None).

    Raises:
        ValueError: If the value is not a valid ISO-8601 datetime
        OverflowError: If the instant falls outside the UTC datetime range
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None and zone is not None:
        parsed = parsed.replace(tzinfo=zone)

    return _truncate_ms(_to_utc(parsed))


def format_instant(dt: datetime) -> str:
    """Format as e.g. 2024-06-01T09:00:00.000Z"""
    utc = dt.astimezone(UTC)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


def generate_slots(
    day: date,
    hours: OperatingHours = OperatingHours(),
    zone: Optional[tzinfo] = None,
) -> list[TimeRange]:
    """
    Generate the bookable slots for one calendar day.

    Slots are contiguous, ``hours.slot_minutes`` long, start at
    ``open_hour:00`` local time and never extend past ``close_hour:00``.
    When the slot length does not divide the window evenly the trailing
    remainder is dropped.

    Example (defaults): 09:00-10:00, 10:00-11:00, ..., 17:00-18:00
    """
    midnight = datetime(day.year, day.month, day.day, tzinfo=zone)
    window_end = midnight + timedelta(hours=hours.close_hour)
    step = timedelta(minutes=hours.slot_minutes)

    slots: list[TimeRange] = []
    current = midnight + timedelta(hours=hours.open_hour)

    while current + step <= window_end:
        slots.append(TimeRange(start=_to_utc(current), end=_to_utc(current + step)))
        current += step

    return slots
