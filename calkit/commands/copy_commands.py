"""Copy command handlers.

Grammars:
    copy event <subject> on <dt> --target <calendar> to <dt>
    copy events on <date> --target <calendar> to <date>
    copy events between <date> and <date> --target <calendar> to <date>
"""

from __future__ import annotations

from calkit.calendar.timeutils import DateTimeFormatError, parse_date, parse_datetime
from calkit.commands.models import CommandContext, ParsedCommand


def handle_copy_event(command: ParsedCommand, ctx: CommandContext) -> str:
    if (
        len(command) != 9
        or not command.keyword_at(3, "on")
        or not command.keyword_at(5, "--target")
        or not command.keyword_at(7, "to")
    ):
        return "Error: Invalid copy event calendar command"

    tokens = command.tokens
    try:
        original_start = parse_datetime(tokens[4])
        new_start = parse_datetime(tokens[8])
    except DateTimeFormatError:
        return "Error: Invalid date/time format. Expected format: YYYY-MM-DDThh:mm"

    success = ctx.manager.copy_single_event(tokens[2], original_start, tokens[6], new_start)
    return "Event copied successfully" if success else "Failed to copy event due to conflict or Non Existing event"


def handle_copy_events(command: ParsedCommand, ctx: CommandContext) -> str:
    if command.keyword_at(2, "on"):
        return _copy_events_on(command, ctx)
    if command.keyword_at(2, "between"):
        return _copy_events_between(command, ctx)
    return "Error: Invalid copy events command. Expected 'on' or 'between'."


def _copy_events_on(command: ParsedCommand, ctx: CommandContext) -> str:
    if len(command) != 8 or not command.keyword_at(4, "--target") or not command.keyword_at(6, "to"):
        return "Error: Invalid format for copy events on command"

    tokens = command.tokens
    try:
        day = parse_date(tokens[3])
        new_day = parse_date(tokens[7])
    except DateTimeFormatError:
        return "Error: Invalid date format. Expected format: YYYY-MM-DD"

    success = ctx.manager.copy_events_on(day, tokens[5], new_day)
    return "Events copied successfully" if success else "Failed to copy events due to conflict or No existing event"


def _copy_events_between(command: ParsedCommand, ctx: CommandContext) -> str:
    if (
        len(command) != 10
        or not command.keyword_at(4, "and")
        or not command.keyword_at(6, "--target")
        or not command.keyword_at(8, "to")
    ):
        return "Error: Invalid format for copy events between command."

    tokens = command.tokens
    try:
        range_start = parse_date(tokens[3])
        range_end = parse_date(tokens[5])
        new_day = parse_date(tokens[9])
    except DateTimeFormatError:
        return "Error: Invalid date format. Expected format: YYYY-MM-DD"

    success = ctx.manager.copy_events_between(range_start, range_end, tokens[7], new_day)
    return "Events copied successfully" if success else "Failed to copy events due to conflict or No Existing event"
