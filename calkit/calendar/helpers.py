"""Helpers for front-ends that talk to the engine through command text.

A front-end prints ``print events on <date>`` and then needs to recover the
subject and times from each ``- <event>`` line to offer edit or copy actions.
It also needs to build a ``create event ... repeats`` command from a form.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from calkit.calendar.models import Weekday
from calkit.calendar.timeutils import DATE_TIME_FORMAT, format_datetime


def parse_event_lines(result: str) -> list[str]:
    """Return the event descriptions from a ``print events`` result."""
    lines = []
    for line in result.split("\n"):
        line = line.strip()
        if line.startswith("- "):
            lines.append(line[2:].strip())
    return lines


def _time_range(line: str) -> Optional[tuple[str, str]]:
    open_paren = line.find("(")
    if open_paren < 0:
        return None
    close_paren = line.find(")", open_paren)
    if close_paren < 0:
        return None
    start, sep, end = line[open_paren + 1:close_paren].partition(" - ")
    if not sep:
        return None
    return start.strip(), end.strip()


def extract_subject(line: str) -> Optional[str]:
    open_paren = line.find("(")
    if open_paren < 1:
        return None
    subject = line[:open_paren].strip()
    return subject or None


def extract_start_time(line: str) -> Optional[datetime]:
    times = _time_range(line)
    if times is None:
        return None
    try:
        return datetime.fromisoformat(times[0])
    except ValueError:
        return None


def extract_end_time(line: str) -> Optional[str]:
    times = _time_range(line)
    if times is None:
        return None
    return times[1] or None


def build_recurring_create_command(
    subject: str,
    start_time: datetime,
    end_time: datetime,
    days: Iterable[Weekday],
    description: str = "",
    location: str = "",
    is_public: bool = False,
    occurrences: Optional[int] = None,
    until_date: Optional[datetime] = None,
) -> str:
    """Build the ``create event ... repeats`` line for a recurring event form.

    ``until_date`` takes precedence over ``occurrences``.
    """
    pattern = "".join(day.letter for day in days)
    command = (
        f'create event "{subject}" from {start_time.strftime(DATE_TIME_FORMAT)} '
        f"to {end_time.strftime(DATE_TIME_FORMAT)} repeats {pattern}"
    )
    if until_date is not None:
        command += f" until {format_datetime(until_date)}"
    elif occurrences is not None:
        command += f" for {occurrences} times"
    if description:
        command += f' description "{description}"'
    if location:
        command += f' location "{location}"'
    if is_public:
        command += " public"
    return command


__all__ = [
    "build_recurring_create_command",
    "extract_end_time",
    "extract_start_time",
    "extract_subject",
    "parse_event_lines",
]
