"""
Calendar event models.

Usage:
    from calkit.calendar.models import SingleEvent, RecurringEvent, Weekday

    weekly = RecurringEvent(
        subject="Weekly Meeting",
        start_time=datetime(2025, 3, 10, 10, 0),
        end_time=datetime(2025, 3, 10, 11, 0),
        recurrence_pattern=[Weekday.MONDAY],
        occurrences=5,
    )
    instances = weekly.generate_occurrences()

Times are naive wall-clock datetimes. The calendar that owns an event
decides which zone they belong to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta
from enum import Enum, IntEnum
from typing import Optional

from calkit.calendar.errors import InvalidWeekdayError
from calkit.calendar.timeutils import format_datetime


class Weekday(IntEnum):
    """Days of the week, numbered like ``datetime.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def letter(self) -> str:
        return _WEEKDAY_LETTERS[self]

    @classmethod
    def from_letter(cls, letter: str) -> "Weekday":
        """Map a recurrence letter (M T W R F S U, any case) to a weekday."""
        for day, code in _WEEKDAY_LETTERS.items():
            if letter.upper() == code:
                return day
        raise InvalidWeekdayError(letter)

    @classmethod
    def parse_pattern(cls, pattern: Iterable[str]) -> list["Weekday"]:
        """Map every character of ``pattern``; duplicates are kept."""
        return [cls.from_letter(c) for c in pattern]


_WEEKDAY_LETTERS: dict[Weekday, str] = {
    Weekday.MONDAY: "M",
    Weekday.TUESDAY: "T",
    Weekday.WEDNESDAY: "W",
    Weekday.THURSDAY: "R",
    Weekday.FRIDAY: "F",
    Weekday.SATURDAY: "S",
    Weekday.SUNDAY: "U",
}


class EventField(str, Enum):
    """Editable event properties."""

    SUBJECT = "subject"
    DESCRIPTION = "description"
    LOCATION = "location"
    TIME = "time"
    PUBLIC = "public"

    @classmethod
    def parse(cls, value: str) -> Optional["EventField"]:
        try:
            return cls(value.lower())
        except ValueError:
            return None


class CalendarField(str, Enum):
    """Editable calendar properties."""

    NAME = "name"
    TIMEZONE = "timezone"

    @classmethod
    def parse(cls, value: str) -> Optional["CalendarField"]:
        try:
            return cls(value.lower())
        except ValueError:
            return None


def parse_flag(value: str) -> bool:
    """``true`` in any case is True, everything else is False."""
    return value.strip().lower() == "true"


def all_day_span(day: date) -> tuple[datetime, datetime]:
    """00:00 to 23:59 of ``day``."""
    return datetime.combine(day, time(0, 0)), datetime.combine(day, time(23, 59))


@dataclass
class Event(ABC):
    """Fields and interval logic shared by single and recurring events."""

    subject: str
    start_time: datetime
    end_time: datetime
    description: str = ""
    location: str = ""
    is_public: bool = False

    def __post_init__(self) -> None:
        if self.description is None:
            self.description = ""
        if self.location is None:
            self.location = ""

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    def conflicts_with(self, other: "Event") -> bool:
        """Closed intervals overlap; a shared endpoint counts."""
        return not (self.end_time < other.start_time or self.start_time > other.end_time)

    def occurs_on(self, instant: datetime) -> bool:
        return self.start_time <= instant <= self.end_time

    def overlaps(self, range_start: datetime, range_end: datetime) -> bool:
        return not (self.end_time < range_start or self.start_time > range_end)

    def move_to(self, new_start: datetime) -> None:
        """Move the start, keeping the duration to the minute."""
        minutes = int(self.duration / timedelta(minutes=1))
        self.start_time = new_start
        self.end_time = new_start + timedelta(minutes=minutes)

    def apply(self, prop: EventField, value: str) -> None:
        """Set a text-valued property. Time edits go through :meth:`move_to`."""
        if prop is EventField.SUBJECT:
            self.subject = value
        elif prop is EventField.DESCRIPTION:
            self.description = value
        elif prop is EventField.LOCATION:
            self.location = value
        elif prop is EventField.PUBLIC:
            self.is_public = parse_flag(value)
        else:
            raise ValueError(f"{prop.value} is not a text property")

    @abstractmethod
    def is_recurring(self) -> bool:
        ...

    def __str__(self) -> str:
        text = f"{self.subject} ({format_datetime(self.start_time)} - {format_datetime(self.end_time)})"
        if self.location:
            text += f" at {self.location}"
        if self.description:
            text += f", Info: {self.description}"
        text += " (public)" if self.is_public else " (private)"
        return text


@dataclass
class SingleEvent(Event):
    """A one-off event."""

    def falls_within_range(self, range_start: datetime, range_end: datetime) -> bool:
        return self.overlaps(range_start, range_end)

    def is_all_day(self) -> bool:
        return (
            self.start_time.hour == 0
            and self.start_time.minute == 0
            and self.end_time.hour == 23
            and self.end_time.minute == 59
        )

    def is_recurring(self) -> bool:
        return False


@dataclass
class RecurringEvent(Event):
    """
    A weekly pattern of events, or one materialised occurrence of it.

    Termination is either ``occurrences`` (a count, ``-1`` for none) or
    ``until_date`` (inclusive bound on an occurrence's start).
    """

    recurrence_pattern: list[Weekday] = field(default_factory=list)
    occurrences: int = -1
    until_date: Optional[datetime] = None

    def generate_occurrences(self) -> list["RecurringEvent"]:
        """Materialise every occurrence, walking one day at a time from ``start_time``.

        Each occurrence lasts the whole number of hours between the original
        start and end; a sub-hour remainder is dropped.
        """
        if self.occurrences < 0 and self.until_date is None:
            raise ValueError("Recurring event needs an occurrence count or an until date")
        if not self.recurrence_pattern:
            return []

        hours = int((self.end_time - self.start_time) / timedelta(hours=1))
        instances: list[RecurringEvent] = []
        current = self.start_time

        while True:
            if self.occurrences >= 0 and len(instances) >= self.occurrences:
                break
            if self.until_date is not None and current > self.until_date:
                break

            if current.weekday() in self.recurrence_pattern:
                instances.append(replace(
                    self,
                    start_time=current,
                    end_time=current + timedelta(hours=hours),
                    recurrence_pattern=list(self.recurrence_pattern),
                    occurrences=-1,
                ))

            current += timedelta(days=1)

        return instances

    def is_recurring(self) -> bool:
        return True


__all__ = [
    "CalendarField",
    "Event",
    "EventField",
    "RecurringEvent",
    "SingleEvent",
    "Weekday",
    "all_day_span",
    "parse_flag",
]
