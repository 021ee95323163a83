"""Calendar-level command handlers: create, edit, and use calendars."""

from __future__ import annotations

from calkit.commands.models import CommandContext, ParsedCommand


def handle_create_calendar(command: ParsedCommand, ctx: CommandContext) -> str:
    """create calendar --name <name> --timezone <zone>"""
    if len(command) != 6 or not command.keyword_at(2, "--name") or not command.keyword_at(4, "--timezone"):
        return "Error: Invalid create calendar command"

    name, timezone = command.tokens[3], command.tokens[5]

    if ctx.manager.create_calendar(name, timezone):
        return "Calendar created successfully"
    return "Failed to create calendar (duplicate name or invalid timezone)"


def handle_edit_calendar(command: ParsedCommand, ctx: CommandContext) -> str:
    """edit calendar --name <name> --property <name|timezone> <value>"""
    if len(command) != 7 or not command.keyword_at(2, "--name") or not command.keyword_at(4, "--property"):
        return "Error: Invalid edit calendar command"

    name, prop, value = command.tokens[3], command.tokens[5], command.tokens[6]

    if ctx.manager.edit_calendar(name, prop, value):
        return "Calendar edited successfully"
    return "Failed to edit calendar (invalid name, property, or value)"


def handle_use_calendar(command: ParsedCommand, ctx: CommandContext) -> str:
    """use calendar --name <name>"""
    if len(command) != 4 or not command.keyword_at(2, "--name"):
        return "Error: Invalid use calendar command"

    name = command.tokens[3]

    if ctx.manager.use_calendar(name):
        return f"Switched to calendar: {name}"
    return "Failed to switch to calendar (not found)"
