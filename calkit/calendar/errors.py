"""Exceptions raised by the calendar layer.

Ordinary failures (duplicate names, missing events) come back as ``False``.
These are reserved for conditions that abort a command outright; the
interpreter renders them as ``"Error: " + message``.
"""


class CalendarError(Exception):
    """Base exception for calendar operations."""

    pass


class NoActiveCalendarError(CalendarError):
    def __init__(self) -> None:
        super().__init__("No active calendar selected.")


class TargetCalendarError(CalendarError):
    def __init__(self) -> None:
        super().__init__("No active calendar or target calendar found")


class EventConflictError(CalendarError):
    def __init__(self) -> None:
        super().__init__("Conflict detected")


class RecurringConflictError(CalendarError):
    """An occurrence of a new recurring event overlaps an existing event."""

    def __init__(self, subject: str) -> None:
        self.subject = subject
        super().__init__(f"Conflicted event: {subject}")


class InvalidWeekdayError(CalendarError, ValueError):
    def __init__(self, letter: str) -> None:
        self.letter = letter
        super().__init__(f"Inappropriate day: {letter}")


__all__ = [
    "CalendarError",
    "EventConflictError",
    "InvalidWeekdayError",
    "NoActiveCalendarError",
    "RecurringConflictError",
    "TargetCalendarError",
]
