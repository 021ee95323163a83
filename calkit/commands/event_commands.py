"""Event command handlers: create single/all-day/recurring events and edit them.

Grammars:
    create event [--autoDecline] <subject> from <dt> to <dt> [repeats ...] [fields]
    create event [--autoDecline] <subject> on <date> [repeats ...] [fields]
        repeats <days> for <n> times | repeats <days> until <dt|date>
        fields: description <text> | location <text> | public
    edit event <property> <subject> from <dt> to <dt> with <value>
    edit events <property> <subject> from <dt> with <value>
    edit events <property> <subject> <value>
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from calkit.calendar.models import all_day_span
from calkit.calendar.timeutils import (
    DateTimeFormatError,
    end_of_day,
    parse_date,
    parse_datetime,
)
from calkit.commands.models import CommandContext, EventDetails, GrammarError, ParsedCommand

logger = logging.getLogger(__name__)


def parse_event_details(tokens: list[str], index: int) -> EventDetails:
    """Read trailing ``description``/``location``/``public`` fields from ``index`` on."""
    details = EventDetails()

    while index < len(tokens):
        keyword = tokens[index]
        if keyword == "description":
            index += 1
            if index >= len(tokens):
                raise GrammarError("Error: Missing description after 'description' keyword")
            details.description = tokens[index]
            index += 1
        elif keyword == "location":
            index += 1
            if index >= len(tokens):
                raise GrammarError("Error: Missing location after 'location' keyword")
            details.location = tokens[index]
            index += 1
        elif keyword == "public":
            details.is_public = True
            index += 1
        else:
            raise GrammarError(f"Error: Unexpected token '{keyword}' in create event command")

    return details


def handle_create_event(command: ParsedCommand, ctx: CommandContext) -> str:
    tokens = command.tokens
    auto_decline = ctx.auto_decline
    index = 2

    if index >= len(tokens):
        return "Error: Missing event name"

    if tokens[index] == "--autoDecline":
        auto_decline = True
        index += 1
        if index >= len(tokens) or tokens[index] in ("from", "on"):
            return "Error: Missing event name after --autoDecline"

    subject = tokens[index]
    index += 1

    if index >= len(tokens):
        return "Error: Missing 'from' or 'on' in create event command"

    all_day = False

    if tokens[index] == "on":
        index += 1
        if index >= len(tokens):
            return "Error: Missing date for all-day event"
        try:
            day = parse_date(tokens[index])
        except DateTimeFormatError:
            return "Error: Invalid date format for all-day event. Expected YYYY-MM-DD"
        start_time, end_time = all_day_span(day)
        all_day = True
        index += 1

    elif tokens[index] == "from":
        index += 1
        if index >= len(tokens):
            return "Error: Missing start date/time after 'from'"
        try:
            start_time = parse_datetime(tokens[index])
        except DateTimeFormatError:
            return "Error: Invalid start date/time format. Expected YYYY-MM-DDThh:mm"
        index += 1

        if index >= len(tokens) or tokens[index] != "to":
            return "Error: Expected 'to' after start date/time"
        index += 1

        if index >= len(tokens):
            return "Error: Missing end date/time after 'to'"
        try:
            end_time = parse_datetime(tokens[index])
        except DateTimeFormatError:
            return "Error: Invalid end date/time format. Expected YYYY-MM-DDThh:mm"
        index += 1

    else:
        return "Error: Missing 'on' or 'from'"

    if start_time > end_time:
        return "Error: Start date and time cannot be after end date"

    if index < len(tokens) and tokens[index] == "repeats":
        return _create_recurring_event(
            tokens, index + 1, subject, start_time, end_time, auto_decline, all_day, ctx,
        )

    try:
        details = parse_event_details(tokens, index)
    except GrammarError as e:
        return str(e)

    success = ctx.manager.create_event(
        subject,
        start_time,
        end_time,
        details.description,
        details.location,
        details.is_public,
        auto_decline,
    )
    return "Event created successfully" if success else "Failed to create event due to conflict"


def _create_recurring_event(
    tokens: list[str],
    index: int,
    subject: str,
    start_time: datetime,
    end_time: datetime,
    auto_decline: bool,
    all_day: bool,
    ctx: CommandContext,
) -> str:
    if index >= len(tokens):
        return "Error: Missing recurrence pattern"

    pattern = tokens[index]
    index += 1

    if index >= len(tokens):
        return "Error: Missing 'for' or 'until' after recurrence pattern"

    occurrences = -1
    until_date: Optional[datetime] = None

    if tokens[index] == "for":
        index += 1
        if index >= len(tokens):
            return "Error: Missing number of occurrences"
        try:
            occurrences = int(tokens[index])
        except ValueError:
            return "Error: Invalid number of occurrences"
        if occurrences < 0:
            return "Error: Invalid number of occurrences"
        index += 1

        if index >= len(tokens) or tokens[index] != "times":
            return "Error: Times missing after the Number of occurrences"

    elif tokens[index] == "until":
        index += 1
        if index >= len(tokens):
            return "Error: Missing until date"
        try:
            if all_day:
                until_date = end_of_day(parse_date(tokens[index]))
            else:
                until_date = parse_datetime(tokens[index])
        except DateTimeFormatError:
            return "Error: Invalid date/time format for until date"
        if until_date < end_time:
            return "Error: Until date cannot be before end date"

    else:
        return "Error: Missing 'for' or 'until' after recurrence pattern"

    index += 1

    try:
        details = parse_event_details(tokens, index)
    except GrammarError as e:
        return str(e)

    logger.debug(f"Recurring {subject!r}: pattern={pattern} occurrences={occurrences} until={until_date}")

    success = ctx.manager.create_recurring_event(
        subject,
        start_time,
        end_time,
        details.description,
        details.location,
        details.is_public,
        auto_decline,
        pattern,
        occurrences,
        until_date,
    )
    return "Recurring event created successfully" if success else "Failed to create recurring event due to conflict"


def handle_edit_event(command: ParsedCommand, ctx: CommandContext) -> str:
    """edit event <property> <subject> from <dt> to <dt> with <value>"""
    if (
        len(command) != 10
        or not command.keyword_at(4, "from")
        or not command.keyword_at(6, "to")
        or not command.keyword_at(8, "with")
    ):
        return "Error: Invalid edit event command."

    tokens = command.tokens
    prop, subject, new_value = tokens[2], tokens[3], tokens[9]

    try:
        start_time = parse_datetime(tokens[5])
        end_time = parse_datetime(tokens[7])

        if start_time > end_time:
            return "Error: Start date/time cannot be after end date/time."

        success = ctx.manager.edit_event(subject, start_time, prop, new_value)
    except DateTimeFormatError:
        return "Error: Invalid date/time format. Expected format: YYYY-MM-DDThh:mm"

    return "Event edited successfully" if success else "Failed to edit event (event not found or invalid property)"


def handle_edit_events(command: ParsedCommand, ctx: CommandContext) -> str:
    """edit events <property> <subject> [from <dt> with] <value>"""
    tokens = command.tokens
    index = 2

    if index >= len(tokens):
        return "Error: Invalid edit command"
    prop = tokens[index]
    index += 1

    if index >= len(tokens):
        return "Error: Missing event name"
    subject = tokens[index]
    index += 1

    if index >= len(tokens):
        return "Error: Missing NewValue or From"

    if command.keyword_at(index, "from"):
        index += 1
        if index >= len(tokens):
            return "Error: Missing start date/time after 'from'"
        try:
            start_from = parse_datetime(tokens[index])
        except DateTimeFormatError:
            return "Error: Invalid date/time format in edit event command"
        index += 1

        if not command.keyword_at(index, "with"):
            return "Error: Expected 'with' after date/time format"
        index += 1

        if index >= len(tokens):
            return "Error: Missing NewPropertyValue after 'with'"

        success = ctx.manager.edit_recurring_event_date(subject, start_from, prop, tokens[index])
    else:
        new_value = tokens[index]
        if index + 1 < len(tokens):
            return "Error: Unexpected input after new property value"
        success = ctx.manager.edit_recurring_event_value(subject, prop, new_value)

    return "Event edited successfully" if success else "Failed to edit event (event not found or invalid property)"
