"""Read-only command handlers: print events, show status, export.

All of them act on the active calendar and fail with
"Error: No active calendar selected." when there is none.
"""

from __future__ import annotations

from calkit.calendar.export import export_to_csv
from calkit.calendar.timeutils import DateTimeFormatError, parse_date, parse_datetime, start_of_day
from calkit.commands.models import CommandContext, ParsedCommand


def _listing(title: str, events: list[str]) -> str:
    return "\n".join([f"{title}:"] + [f"- {event}" for event in events])


def handle_print_events(command: ParsedCommand, ctx: CommandContext) -> str:
    """print events on <date> | print events from <dt> to <dt>"""
    tokens = command.tokens

    if command.keyword_at(2, "on"):
        if len(tokens) < 4:
            return "Error: Missing date in print events command"
        try:
            day = parse_date(tokens[3])
        except DateTimeFormatError:
            return "Error: Invalid date format in print events command. Expected format: YYYY-MM-DD"

        events = ctx.manager.query_events_by_date(start_of_day(day))
        if not events:
            return f"No events on {tokens[3]}"
        return _listing(f"Events on {tokens[3]}", events)

    if command.keyword_at(2, "from"):
        if len(tokens) < 6 or not command.keyword_at(4, "to"):
            return (
                "Error: Invalid format for print events from/to command. "
                "Expected format: 'print events from <startDateTime> to <endDateTime>'"
            )
        try:
            range_start = parse_datetime(tokens[3])
            range_end = parse_datetime(tokens[5])
        except DateTimeFormatError:
            return "Error: Invalid date/time format in print events command. Expected format: YYYY-MM-DDThh:mm"

        events = ctx.manager.query_events_by_range(range_start, range_end)
        if not events:
            return f"No events from {tokens[3]} to {tokens[5]}"
        return _listing(f"Events from {tokens[3]} to {tokens[5]}", events)

    return "Error: Expected 'on' or 'from' after 'print events'"


def handle_show_status(command: ParsedCommand, ctx: CommandContext) -> str:
    """show status on <dt>"""
    if not command.keyword_at(2, "on"):
        return "Error: Expected 'on' after 'show status'"

    value = command.token(3)
    if value is None:
        return "Error: Missing date/time after 'on'"

    try:
        instant = parse_datetime(value)
    except DateTimeFormatError:
        return "Error: Invalid date/time format in show status command"

    return "Busy" if ctx.manager.is_busy(instant) else "Available"


def handle_export_cal(command: ParsedCommand, ctx: CommandContext) -> str:
    """export cal <file>"""
    filename = command.token(2)
    if filename is None:
        return "Error: Missing filename in export command"

    rows = ctx.manager.events_as_csv()
    return export_to_csv(rows, filename)
