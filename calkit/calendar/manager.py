"""
Tool: Calendar Manager
Purpose: Registry of named calendars and every operation that acts on them

The manager owns all calendars, remembers which one is active, and performs
creation, editing, copying across calendars/timezones, and queries.

Usage:
    from calkit.calendar.manager import CalendarManager

    manager = CalendarManager()
    manager.create_calendar("Work", "America/New_York")
    manager.use_calendar("Work")
    manager.create_event("Standup", start, end, auto_decline=True)
    manager.query_events_by_date(start)

Failure contract:
    Ordinary failures (unknown calendar, duplicate name, missing event,
    conflict on copy) return False. Missing active/target calendars and
    conflicts on create raise CalendarError subclasses.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, time
from typing import Optional

from calkit.calendar.calendar import Calendar
from calkit.calendar.errors import (
    EventConflictError,
    NoActiveCalendarError,
    RecurringConflictError,
    TargetCalendarError,
)
from calkit.calendar.models import (
    CalendarField,
    Event,
    EventField,
    RecurringEvent,
    SingleEvent,
    Weekday,
)
from calkit.calendar.timeutils import (
    DateTimeFormatError,
    convert_zone,
    elapsed,
    end_of_day,
    parse_datetime,
    parse_time,
    resolve_zone,
    shift,
    start_of_day,
)

logger = logging.getLogger(__name__)

CSV_HEADER = "Subject,Start Date,Start Time,End Date,End Time,Description,Location,Private"
CSV_DATE_FORMAT = "%m/%d/%Y"
CSV_TIME_FORMAT = "%I:%M %p"


class CalendarManager:
    """Calendars keyed by name plus the name of the active one."""

    def __init__(self):
        self.calendars: dict[str, Calendar] = {}
        self.active_name: Optional[str] = None

    # ─────────────────────────────────────────────────────────────────────
    # Calendars
    # ─────────────────────────────────────────────────────────────────────

    @property
    def active_calendar(self) -> Optional[Calendar]:
        if self.active_name is None:
            return None
        return self.calendars.get(self.active_name)

    def _require_active(self) -> Calendar:
        calendar = self.active_calendar
        if calendar is None:
            raise NoActiveCalendarError()
        return calendar

    def get_calendar_names(self) -> list[str]:
        """Names in registration order."""
        return list(self.calendars)

    def create_calendar(self, name: str, timezone: str) -> bool:
        if not name or not name.strip():
            return False

        zone = resolve_zone(timezone)
        if zone is None:
            logger.info(f"Rejected calendar {name!r}: unknown timezone {timezone!r}")
            return False

        if name in self.calendars:
            logger.info(f"Rejected calendar {name!r}: name already registered")
            return False

        self.calendars[name] = Calendar(name, zone)
        logger.info(f"Created calendar {name!r} in {zone.key}")
        return True

    def edit_calendar(self, name: str, property_name: str, new_value: str) -> bool:
        calendar = self.calendars.get(name)
        if calendar is None:
            return False

        prop = CalendarField.parse(property_name)

        if prop is CalendarField.NAME:
            if not new_value or not new_value.strip() or new_value in self.calendars:
                return False
            # Rebuild so the renamed calendar keeps its registration position
            self.calendars = {
                (new_value if key == name else key): cal
                for key, cal in self.calendars.items()
            }
            calendar.rename(new_value)
            if self.active_name == name:
                self.active_name = new_value
            logger.info(f"Renamed calendar {name!r} to {new_value!r}")
            return True

        if prop is CalendarField.TIMEZONE:
            new_zone = resolve_zone(new_value)
            if new_zone is None:
                return False
            old_zone = calendar.timezone
            for event in calendar.events:
                event.start_time = convert_zone(event.start_time, old_zone, new_zone)
                event.end_time = convert_zone(event.end_time, old_zone, new_zone)
            calendar.timezone = new_zone
            logger.info(
                f"Moved calendar {name!r} from {old_zone.key} to {new_zone.key} "
                f"({len(calendar.events)} events re-based)"
            )
            return True

        return False

    def use_calendar(self, name: str) -> bool:
        if name not in self.calendars:
            return False
        self.active_name = name
        logger.debug(f"Active calendar is now {name!r}")
        return True

    # ─────────────────────────────────────────────────────────────────────
    # Event creation
    # ─────────────────────────────────────────────────────────────────────

    def create_event(
        self,
        subject: str,
        start_time: datetime,
        end_time: datetime,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = False,
        auto_decline: bool = True,
    ) -> bool:
        """Add a single event to the active calendar.

        ``start_time <= end_time`` is the caller's responsibility.
        """
        calendar = self._require_active()

        event = SingleEvent(subject, start_time, end_time, description, location, is_public)

        if auto_decline and calendar.has_conflict(event):
            logger.info(f"Declined {subject!r}: conflicts in {calendar.name!r}")
            raise EventConflictError()

        calendar.add_event(event)
        logger.info(f"Created event {subject!r} in {calendar.name!r}")
        return True

    def create_recurring_event(
        self,
        subject: str,
        start_time: datetime,
        end_time: datetime,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = False,
        auto_decline: bool = True,
        recurrence_days: Iterable[str] = (),
        occurrences: int = -1,
        until_date: Optional[datetime] = None,
    ) -> bool:
        """Materialise a weekly pattern and add every occurrence, or none.

        ``until_date`` wins over ``occurrences`` when both are given.
        """
        calendar = self._require_active()

        pattern = Weekday.parse_pattern(recurrence_days)

        recurring = RecurringEvent(
            subject=subject,
            start_time=start_time,
            end_time=end_time,
            description=description,
            location=location,
            is_public=is_public,
            recurrence_pattern=pattern,
            occurrences=-1 if until_date is not None else occurrences,
            until_date=until_date,
        )

        pending = recurring.generate_occurrences()

        if auto_decline:
            for instance in pending:
                if calendar.has_conflict(instance):
                    logger.info(f"Declined recurring {subject!r}: occurrence at {instance.start_time} conflicts")
                    raise RecurringConflictError(instance.subject)

        for instance in pending:
            calendar.add_event(instance)

        logger.info(f"Created {len(pending)} occurrences of {subject!r} in {calendar.name!r}")
        return True

    # ─────────────────────────────────────────────────────────────────────
    # Event editing
    # ─────────────────────────────────────────────────────────────────────

    def edit_event(self, subject: str, start_time: datetime, property_name: str, new_value: str) -> bool:
        """Edit the one event matching ``(subject, start_time)`` exactly.

        A ``time`` edit takes a full ``YYYY-MM-DDThh:mm`` and keeps the
        event's duration; a malformed value raises DateTimeFormatError.
        """
        calendar = self._require_active()

        event = calendar.find_event(subject, start_time)
        if event is None:
            return False

        prop = EventField.parse(property_name)
        if prop is None:
            return False

        if prop is EventField.TIME:
            event.move_to(parse_datetime(new_value))
        else:
            event.apply(prop, new_value)

        logger.info(f"Edited {prop.value} of {subject!r} at {start_time}")
        return True

    def edit_recurring_event_date(
        self,
        subject: str,
        start_from: datetime,
        property_name: str,
        new_value: str,
    ) -> bool:
        """Edit every event with ``subject`` starting at or after ``start_from``."""
        calendar = self._require_active()
        matched = [e for e in calendar.events_with_subject(subject) if e.start_time >= start_from]
        return self._edit_all(matched, property_name, new_value)

    def edit_recurring_event_value(self, subject: str, property_name: str, new_value: str) -> bool:
        """Edit every event with ``subject``."""
        calendar = self._require_active()
        return self._edit_all(calendar.events_with_subject(subject), property_name, new_value)

    def _edit_all(self, events: list[Event], property_name: str, new_value: str) -> bool:
        prop = EventField.parse(property_name)
        if prop is None or not events:
            return False

        if prop is EventField.TIME:
            new_time = _parse_time_of_day(new_value)
            if new_time is None:
                return False
            for event in events:
                event.move_to(datetime.combine(event.start_time.date(), new_time))
        else:
            for event in events:
                event.apply(prop, new_value)

        logger.info(f"Edited {prop.value} on {len(events)} events")
        return True

    # ─────────────────────────────────────────────────────────────────────
    # Copying
    # ─────────────────────────────────────────────────────────────────────

    def _copy_endpoints(self, target_name: str) -> tuple[Calendar, Calendar]:
        source = self.active_calendar
        target = self.calendars.get(target_name)
        if source is None or target is None:
            raise TargetCalendarError()
        return source, target

    def copy_single_event(
        self,
        event_name: str,
        original_start: datetime,
        target_calendar_name: str,
        new_start: datetime,
    ) -> bool:
        """Copy one event to ``new_start`` (target wall-clock) in another calendar.

        The duration is measured in the source zone, so a DST change inside
        the original event is kept.
        """
        source, target = self._copy_endpoints(target_calendar_name)

        original = source.find_event(event_name, original_start)
        if original is None:
            return False

        duration = elapsed(original.start_time, original.end_time, source.timezone)
        new_end = shift(new_start, target.timezone, duration)

        copied = SingleEvent(
            original.subject,
            new_start,
            new_end,
            original.description,
            original.location,
            original.is_public,
        )

        if target.has_conflict(copied):
            return False

        target.add_event(copied)
        logger.info(f"Copied {event_name!r} from {source.name!r} to {target.name!r} at {new_start}")
        return True

    def copy_events_on(self, day: date, target_calendar_name: str, new_day: date) -> bool:
        source, target = self._copy_endpoints(target_calendar_name)
        return self._copy_window(source, target, start_of_day(day), end_of_day(day), new_day)

    def copy_events_between(
        self,
        range_start: date,
        range_end: date,
        target_calendar_name: str,
        new_day: date,
    ) -> bool:
        source, target = self._copy_endpoints(target_calendar_name)
        return self._copy_window(source, target, start_of_day(range_start), end_of_day(range_end), new_day)

    def _copy_window(
        self,
        source: Calendar,
        target: Calendar,
        window_start: datetime,
        window_end: datetime,
        new_day: date,
    ) -> bool:
        """Copy every source event touching the window onto ``new_day``.

        Each copy keeps its start time-of-day as seen in the target zone and
        its real duration. Conflicting copies are skipped individually.
        """
        copied_count = 0

        # Snapshot: source and target may be the same calendar
        for event in list(source.events):
            if not event.overlaps(window_start, window_end):
                continue

            duration = elapsed(event.start_time, event.end_time, source.timezone)
            new_start = convert_zone(event.start_time, source.timezone, target.timezone).replace(
                year=new_day.year, month=new_day.month, day=new_day.day,
            )
            new_end = shift(new_start, target.timezone, duration)

            copied = SingleEvent(
                event.subject,
                new_start,
                new_end,
                event.description,
                event.location,
                event.is_public,
            )

            if target.has_conflict(copied):
                logger.debug(f"Skipped copy of {event.subject!r}: conflicts in {target.name!r}")
                continue

            target.add_event(copied)
            copied_count += 1

        logger.info(f"Copied {copied_count} events from {source.name!r} to {target.name!r} on {new_day}")
        return copied_count > 0

    # ─────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────

    def query_events_by_date(self, instant: datetime) -> list[str]:
        """Events touching the calendar day of ``instant``."""
        day = instant.date() if isinstance(instant, datetime) else instant
        return self.query_events_by_range(start_of_day(day), end_of_day(day))

    def query_events_by_range(self, range_start: datetime, range_end: datetime) -> list[str]:
        calendar = self._require_active()
        return [str(e) for e in calendar.events if e.overlaps(range_start, range_end)]

    def is_busy(self, instant: datetime) -> bool:
        calendar = self._require_active()
        return any(e.occurs_on(instant) for e in calendar.events)

    def is_recurring_event(self, subject: str) -> bool:
        calendar = self._require_active()
        return any(e.is_recurring() for e in calendar.events_with_subject(subject))

    def events_as_csv(self) -> list[str]:
        """Header plus one row per event of the active calendar."""
        calendar = self._require_active()

        rows = [CSV_HEADER]
        for event in calendar.events:
            rows.append(",".join([
                event.subject,
                event.start_time.strftime(CSV_DATE_FORMAT),
                event.start_time.strftime(CSV_TIME_FORMAT),
                event.end_time.strftime(CSV_DATE_FORMAT),
                event.end_time.strftime(CSV_TIME_FORMAT),
                event.description,
                event.location,
                "FALSE" if event.is_public else "TRUE",
            ]))
        return rows


def _parse_time_of_day(value: str) -> Optional[time]:
    """``hh:mm``, or the time part of ``YYYY-MM-DDThh:mm``."""
    text = value.strip()
    if "T" in text:
        text = text[text.index("T") + 1:]
    try:
        return parse_time(text)
    except DateTimeFormatError:
        return None


__all__ = ["CSV_HEADER", "CalendarManager"]
