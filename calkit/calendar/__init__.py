"""Calendar engine: events, calendars, and the manager that ties them together.

Components:
    models.py: SingleEvent, RecurringEvent, Weekday, editable-field enums
    calendar.py: Calendar (name, zone, ordered events)
    manager.py: CalendarManager (registry, active calendar, copy, queries)
    timeutils.py: Strict parsing and zone arithmetic
    export.py: CSV file output
    helpers.py: Reading printed event lines, building recurring commands
    errors.py: CalendarError hierarchy
"""

from calkit.calendar.calendar import Calendar
from calkit.calendar.errors import CalendarError
from calkit.calendar.manager import CalendarManager
from calkit.calendar.models import RecurringEvent, SingleEvent, Weekday

__all__ = [
    "Calendar",
    "CalendarError",
    "CalendarManager",
    "RecurringEvent",
    "SingleEvent",
    "Weekday",
]
