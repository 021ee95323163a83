"""A named, zoned, ordered collection of events."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from calkit.calendar.models import Event


class Calendar:
    """Events in insertion order; nothing is reordered or deduplicated."""

    def __init__(self, name: str, timezone: ZoneInfo):
        self.name = name
        self.timezone = timezone
        self.events: list[Event] = []

    def rename(self, new_name: str) -> None:
        self.name = new_name

    def add_event(self, event: Event) -> None:
        """Append without checks; callers test for conflicts first."""
        self.events.append(event)

    def has_conflict(self, candidate: Event) -> bool:
        return any(existing.conflicts_with(candidate) for existing in self.events)

    def find_event(self, subject: str, start_time: datetime) -> Optional[Event]:
        for event in self.events:
            if event.subject == subject and event.start_time == start_time:
                return event
        return None

    def events_with_subject(self, subject: str) -> list[Event]:
        return [e for e in self.events if e.subject == subject]

    def __len__(self) -> int:
        return len(self.events)

    def __repr__(self) -> str:
        return f"Calendar(name={self.name!r}, timezone={self.timezone.key!r}, events={len(self.events)})"
