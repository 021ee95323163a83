"""Tests for calkit/calendar/models.py

Covers interval logic (conflicts, occurrence checks), weekday letters,
editable-field parsing, and recurring-event materialisation.
"""

from datetime import date, datetime, timedelta

import pytest

from calkit.calendar.errors import InvalidWeekdayError
from calkit.calendar.models import (
    CalendarField,
    EventField,
    RecurringEvent,
    SingleEvent,
    Weekday,
    all_day_span,
    parse_flag,
)


def _event(start: datetime, hours: float = 1, subject: str = "Meeting") -> SingleEvent:
    return SingleEvent(subject, start, start + timedelta(hours=hours))


# =============================================================================
# Conflicts and occurrence checks
# =============================================================================


class TestConflicts:
    def test_overlapping_events_conflict(self, monday_10am):
        a = _event(monday_10am, hours=2)
        b = _event(monday_10am + timedelta(hours=1))
        assert a.conflicts_with(b)
        assert b.conflicts_with(a)

    def test_touching_endpoints_conflict(self, monday_10am):
        a = _event(monday_10am)
        b = _event(monday_10am + timedelta(hours=1))
        assert a.conflicts_with(b)
        assert b.conflicts_with(a)

    def test_separate_events_do_not_conflict(self, monday_10am):
        a = _event(monday_10am)
        b = _event(monday_10am + timedelta(hours=1, minutes=1))
        assert not a.conflicts_with(b)
        assert not b.conflicts_with(a)

    def test_contained_event_conflicts(self, monday_10am):
        outer = _event(monday_10am, hours=4)
        inner = _event(monday_10am + timedelta(hours=1))
        assert outer.conflicts_with(inner)
        assert inner.conflicts_with(outer)


class TestOccursOn:
    @pytest.mark.parametrize("offset_minutes,expected", [
        (-1, False),
        (0, True),
        (30, True),
        (60, True),
        (61, False),
    ])
    def test_single_event_bounds_are_inclusive(self, monday_10am, offset_minutes, expected):
        event = _event(monday_10am)
        assert event.occurs_on(monday_10am + timedelta(minutes=offset_minutes)) is expected

    def test_recurring_instance_checks_its_own_interval(self, monday_10am):
        instance = RecurringEvent(
            "Standup", monday_10am, monday_10am + timedelta(hours=1),
            recurrence_pattern=[Weekday.TUESDAY], occurrences=-1, until_date=monday_10am,
        )
        # Pattern says Tuesday, but the instance itself is on Monday
        assert instance.occurs_on(monday_10am + timedelta(minutes=15))

    def test_falls_within_range(self, monday_10am):
        event = _event(monday_10am)
        assert event.falls_within_range(monday_10am - timedelta(hours=2), monday_10am)
        assert event.falls_within_range(monday_10am + timedelta(hours=1), monday_10am + timedelta(hours=3))
        assert not event.falls_within_range(monday_10am + timedelta(hours=2), monday_10am + timedelta(hours=3))


class TestSingleEvent:
    def test_none_description_and_location_become_empty(self, monday_10am):
        event = SingleEvent("Lunch", monday_10am, monday_10am, None, None, False)
        assert event.description == ""
        assert event.location == ""

    def test_all_day_spans_midnight_to_2359(self):
        start, end = all_day_span(date(2025, 7, 4))
        assert (start, end) == (datetime(2025, 7, 4, 0, 0), datetime(2025, 7, 4, 23, 59))
        assert SingleEvent("Holiday", start, end).is_all_day()

    def test_timed_event_is_not_all_day(self, monday_10am):
        assert not _event(monday_10am).is_all_day()

    def test_is_not_recurring(self, monday_10am):
        assert _event(monday_10am).is_recurring() is False

    def test_str_includes_location_description_and_visibility(self, monday_10am):
        event = SingleEvent(
            "Review", monday_10am, monday_10am + timedelta(hours=1),
            description="Q1 numbers", location="Room 4", is_public=True,
        )
        assert str(event) == "Review (2025-03-10T10:00 - 2025-03-10T11:00) at Room 4, Info: Q1 numbers (public)"

    def test_str_minimal_private(self, monday_10am):
        assert str(_event(monday_10am)) == "Meeting (2025-03-10T10:00 - 2025-03-10T11:00) (private)"

    def test_move_to_keeps_duration(self, monday_10am):
        event = _event(monday_10am, hours=1.5)
        event.move_to(datetime(2025, 3, 12, 14, 0))
        assert event.start_time == datetime(2025, 3, 12, 14, 0)
        assert event.end_time == datetime(2025, 3, 12, 15, 30)


# =============================================================================
# Weekdays and editable fields
# =============================================================================


class TestWeekday:
    @pytest.mark.parametrize("letter,expected", [
        ("M", Weekday.MONDAY),
        ("T", Weekday.TUESDAY),
        ("W", Weekday.WEDNESDAY),
        ("R", Weekday.THURSDAY),
        ("F", Weekday.FRIDAY),
        ("S", Weekday.SATURDAY),
        ("U", Weekday.SUNDAY),
        ("r", Weekday.THURSDAY),
        ("u", Weekday.SUNDAY),
    ])
    def test_letters(self, letter, expected):
        assert Weekday.from_letter(letter) is expected

    def test_unknown_letter_names_the_character(self):
        with pytest.raises(InvalidWeekdayError) as exc:
            Weekday.from_letter("X")
        assert str(exc.value) == "Inappropriate day: X"
        assert exc.value.letter == "X"

    def test_pattern_keeps_duplicates(self):
        assert Weekday.parse_pattern("MWM") == [Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.MONDAY]

    def test_letter_round_trip(self):
        assert "".join(day.letter for day in Weekday) == "MTWRFSU"

    def test_values_match_datetime_weekday(self, monday_10am):
        assert monday_10am.weekday() == Weekday.MONDAY


class TestFieldParsing:
    @pytest.mark.parametrize("text,expected", [
        ("subject", EventField.SUBJECT),
        ("Description", EventField.DESCRIPTION),
        ("LOCATION", EventField.LOCATION),
        ("time", EventField.TIME),
        ("public", EventField.PUBLIC),
        ("color", None),
    ])
    def test_event_field(self, text, expected):
        assert EventField.parse(text) is expected

    @pytest.mark.parametrize("text,expected", [
        ("name", CalendarField.NAME),
        ("TimeZone", CalendarField.TIMEZONE),
        ("owner", None),
    ])
    def test_calendar_field(self, text, expected):
        assert CalendarField.parse(text) is expected

    @pytest.mark.parametrize("text,expected", [
        ("true", True),
        ("TRUE", True),
        ("false", False),
        ("yes", False),
        ("", False),
    ])
    def test_parse_flag(self, text, expected):
        assert parse_flag(text) is expected

    def test_apply_rejects_time(self, monday_10am):
        with pytest.raises(ValueError):
            _event(monday_10am).apply(EventField.TIME, "11:00")


# =============================================================================
# Recurrence generation
# =============================================================================


class TestGenerateOccurrences:
    def test_count_bound_on_mondays(self, monday_10am):
        weekly = RecurringEvent(
            "Weekly Meeting", monday_10am, monday_10am + timedelta(hours=1),
            recurrence_pattern=[Weekday.MONDAY], occurrences=5,
        )
        instances = weekly.generate_occurrences()

        assert len(instances) == 5
        assert instances[0].start_time == monday_10am
        assert [i.start_time for i in instances] == [monday_10am + timedelta(weeks=n) for n in range(5)]
        assert all(i.end_time - i.start_time == timedelta(hours=1) for i in instances)

    def test_instances_carry_the_pattern(self, monday_10am):
        weekly = RecurringEvent(
            "Sync", monday_10am, monday_10am + timedelta(hours=1),
            description="notes", location="Lab", is_public=True,
            recurrence_pattern=[Weekday.MONDAY, Weekday.FRIDAY], occurrences=3,
        )
        for instance in weekly.generate_occurrences():
            assert instance.is_recurring()
            assert instance.recurrence_pattern == [Weekday.MONDAY, Weekday.FRIDAY]
            assert instance.occurrences == -1
            assert (instance.description, instance.location, instance.is_public) == ("notes", "Lab", True)

    def test_until_bound_is_inclusive(self, monday_10am):
        weekly = RecurringEvent(
            "Gym", monday_10am, monday_10am + timedelta(hours=1),
            recurrence_pattern=[Weekday.MONDAY, Weekday.WEDNESDAY],
            until_date=datetime(2025, 3, 17, 10, 0),
        )
        starts = [i.start_time for i in weekly.generate_occurrences()]
        assert starts == [
            datetime(2025, 3, 10, 10, 0),
            datetime(2025, 3, 12, 10, 0),
            datetime(2025, 3, 17, 10, 0),
        ]

    def test_until_before_the_day_time_stops(self, monday_10am):
        weekly = RecurringEvent(
            "Gym", monday_10am, monday_10am + timedelta(hours=1),
            recurrence_pattern=[Weekday.MONDAY],
            until_date=datetime(2025, 3, 17, 9, 59),
        )
        assert len(weekly.generate_occurrences()) == 1

    def test_first_day_need_not_match(self, monday_10am):
        weekly = RecurringEvent(
            "Friday drinks", monday_10am, monday_10am + timedelta(hours=2),
            recurrence_pattern=[Weekday.FRIDAY], occurrences=2,
        )
        starts = [i.start_time for i in weekly.generate_occurrences()]
        assert starts == [datetime(2025, 3, 14, 10, 0), datetime(2025, 3, 21, 10, 0)]

    def test_sub_hour_remainder_is_truncated(self, monday_10am):
        weekly = RecurringEvent(
            "Long call", monday_10am, monday_10am + timedelta(hours=1, minutes=45),
            recurrence_pattern=[Weekday.MONDAY], occurrences=1,
        )
        (instance,) = weekly.generate_occurrences()
        assert instance.end_time - instance.start_time == timedelta(hours=1)

    def test_generation_is_deterministic(self, monday_10am):
        weekly = RecurringEvent(
            "Sync", monday_10am, monday_10am + timedelta(hours=1),
            recurrence_pattern=[Weekday.MONDAY, Weekday.THURSDAY], occurrences=6,
        )
        assert weekly.generate_occurrences() == weekly.generate_occurrences()

    def test_zero_occurrences(self, monday_10am):
        weekly = RecurringEvent(
            "Never", monday_10am, monday_10am + timedelta(hours=1),
            recurrence_pattern=[Weekday.MONDAY], occurrences=0,
        )
        assert weekly.generate_occurrences() == []

    def test_no_matching_day_before_until(self, monday_10am):
        weekly = RecurringEvent(
            "Weekend", monday_10am, monday_10am + timedelta(hours=1),
            recurrence_pattern=[Weekday.SATURDAY, Weekday.SUNDAY],
            until_date=datetime(2025, 3, 14, 23, 0),
        )
        assert weekly.generate_occurrences() == []

    def test_empty_pattern_yields_nothing(self, monday_10am):
        weekly = RecurringEvent(
            "Nothing", monday_10am, monday_10am + timedelta(hours=1),
            recurrence_pattern=[], occurrences=3,
        )
        assert weekly.generate_occurrences() == []

    def test_unbounded_walk_is_refused(self, monday_10am):
        weekly = RecurringEvent(
            "Forever", monday_10am, monday_10am + timedelta(hours=1),
            recurrence_pattern=[Weekday.MONDAY],
        )
        with pytest.raises(ValueError):
            weekly.generate_occurrences()
