"""Date manipulation utilities"""

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import List
from zoneinfo import ZoneInfo


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def resolve_timezone(name: str) -> tzinfo:
    """Map a zone name to a tzinfo, using the fixed UTC zone when possible"""
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    return ZoneInfo(name)


def utc_now() -> datetime:
    return truncate_to_millis(datetime.now(timezone.utc))


def truncate_to_millis(instant: datetime) -> datetime:
    return instant.replace(microsecond=instant.microsecond - instant.microsecond % 1000)


def parse_instant(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Timestamps without an offset are taken as UTC. Raises ValueError when
    the string is not a valid instant.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return truncate_to_millis(parsed.astimezone(timezone.utc))


def format_instant(instant: datetime) -> str:
    """Canonical form: 2024-01-31T09:15:00.000Z"""
    utc = instant.astimezone(timezone.utc)
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}"
        f".{utc.microsecond // 1000:03d}Z"
    )


def calendar_day(instant: datetime, tz: tzinfo) -> date:
    """Calendar day containing the instant in the given zone"""
    return instant.astimezone(tz).date()
