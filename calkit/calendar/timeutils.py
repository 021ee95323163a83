"""Date/time parsing, rendering, and timezone arithmetic.

Events store naive wall-clock datetimes; the owning calendar's zone gives
them meaning. Anything that must respect DST (durations, shifting by a
duration, moving between zones) goes through the instant timeline here.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DATE_TIME_FORMAT = "%Y-%m-%dT%H:%M"
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

_DATE_TIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


class DateTimeFormatError(ValueError):
    """Text did not match the expected date, time, or date-time pattern."""

    def __init__(self, text: str, expected: str) -> None:
        self.text = text
        self.expected = expected
        super().__init__(f"Text '{text}' could not be parsed, expected {expected}")


def parse_datetime(text: str) -> datetime:
    """Parse ``YYYY-MM-DDThh:mm``."""
    if not _DATE_TIME_RE.match(text or ""):
        raise DateTimeFormatError(text, "YYYY-MM-DDThh:mm")
    try:
        return datetime.strptime(text, DATE_TIME_FORMAT)
    except ValueError:
        raise DateTimeFormatError(text, "YYYY-MM-DDThh:mm") from None


def parse_date(text: str) -> date:
    """Parse ``YYYY-MM-DD``."""
    if not _DATE_RE.match(text or ""):
        raise DateTimeFormatError(text, "YYYY-MM-DD")
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        raise DateTimeFormatError(text, "YYYY-MM-DD") from None


def parse_time(text: str) -> time:
    """Parse ``hh:mm``."""
    if not _TIME_RE.match(text or ""):
        raise DateTimeFormatError(text, "hh:mm")
    try:
        return datetime.strptime(text, TIME_FORMAT).time()
    except ValueError:
        raise DateTimeFormatError(text, "hh:mm") from None


def format_datetime(value: datetime) -> str:
    """Render as ``YYYY-MM-DDThh:mm``, adding seconds only when they are set."""
    if value.second or value.microsecond:
        return value.isoformat(timespec="seconds")
    return value.isoformat(timespec="minutes")


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time(0, 0))


def end_of_day(day: date) -> datetime:
    """Last second of ``day``; query and copy windows close here."""
    return datetime.combine(day, time(23, 59, 59))


def resolve_zone(name: str | None) -> ZoneInfo | None:
    """Return the zone for an IANA identifier, or None if it does not resolve."""
    if not name or not name.strip():
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        # OSError: tzdata directories such as "America" open as files
        return None


def _to_utc(local: datetime, zone: ZoneInfo) -> datetime:
    return local.replace(tzinfo=zone).astimezone(timezone.utc)


def convert_zone(local: datetime, source: ZoneInfo, target: ZoneInfo) -> datetime:
    """Same-instant conversion of a naive wall-clock time between zones."""
    return _to_utc(local, source).astimezone(target).replace(tzinfo=None)


def elapsed(start: datetime, end: datetime, zone: ZoneInfo) -> timedelta:
    """Real time between two wall-clock times in ``zone``."""
    return _to_utc(end, zone) - _to_utc(start, zone)


def shift(local: datetime, zone: ZoneInfo, delta: timedelta) -> datetime:
    """Move ``local`` forward by ``delta`` of real time, returning wall-clock time in ``zone``."""
    return (_to_utc(local, zone) + delta).astimezone(zone).replace(tzinfo=None)


__all__ = [
    "DATE_FORMAT",
    "DATE_TIME_FORMAT",
    "TIME_FORMAT",
    "DateTimeFormatError",
    "convert_zone",
    "elapsed",
    "end_of_day",
    "format_datetime",
    "parse_date",
    "parse_datetime",
    "parse_time",
    "resolve_zone",
    "shift",
    "start_of_day",
]
