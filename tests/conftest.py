"""Shared test fixtures for calkit tests.

This module provides common fixtures used across all test modules:
- Fresh calendar managers, with and without an active calendar
- Interpreters wired to those managers
- Reference datetimes

Usage:
    def test_something(work_manager):
        # work_manager has an active "Work" calendar in America/New_York
        ...
"""

from datetime import datetime

import pytest

from calkit.calendar.manager import CalendarManager
from calkit.commands.interpreter import CommandInterpreter


# ─────────────────────────────────────────────────────────────────────────────
# Manager Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def manager() -> CalendarManager:
    """Manager with no calendars."""
    return CalendarManager()


@pytest.fixture
def work_manager() -> CalendarManager:
    """Manager with an active "Work" calendar in New York and an idle "Tokyo" calendar."""
    manager = CalendarManager()
    manager.create_calendar("Work", "America/New_York")
    manager.create_calendar("Tokyo", "Asia/Tokyo")
    manager.use_calendar("Work")
    return manager


# ─────────────────────────────────────────────────────────────────────────────
# Interpreter Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def interpreter() -> CommandInterpreter:
    """Interpreter over an empty manager."""
    return CommandInterpreter(CalendarManager())


@pytest.fixture
def work_interpreter(work_manager: CalendarManager) -> CommandInterpreter:
    """Interpreter whose active calendar is "Work" (America/New_York)."""
    return CommandInterpreter(work_manager)


# ─────────────────────────────────────────────────────────────────────────────
# Time Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def monday_10am() -> datetime:
    """2025-03-10 was a Monday (the day after US DST started)."""
    return datetime(2025, 3, 10, 10, 0)
