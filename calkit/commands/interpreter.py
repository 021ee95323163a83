"""Route command lines to grammar handlers.

The interpreter tokenizes a line, looks up the handler registered for its
``(action, target)`` pair, and turns whatever happens into one result string.
Nothing raised below this point escapes ``execute``.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from calkit.calendar.errors import CalendarError
from calkit.calendar.manager import CalendarManager
from calkit.commands.models import ActionType, CommandContext, ParsedCommand
from calkit.commands.tokenizer import tokenize
from calkit.config import CalkitConfig

logger = logging.getLogger(__name__)

# Handler type: function(parsed_command, context) -> result text
HandlerFn = Callable[[ParsedCommand, CommandContext], str]

EXIT_RESULT = "exit"


class CommandInterpreter:
    """Executes text commands against a CalendarManager."""

    def __init__(self, manager: Optional[CalendarManager] = None, config: Optional[CalkitConfig] = None):
        self.manager = manager if manager is not None else CalendarManager()
        self.config = config if config is not None else CalkitConfig()
        self._handlers: dict[tuple[ActionType, str], HandlerFn] = {}
        register_default_handlers(self)

    def register(self, action: ActionType, target: str, handler: HandlerFn) -> None:
        """Register a handler for ``<action> <target> ...`` lines."""
        self._handlers[(action, target.lower())] = handler

    def execute(self, command_text: Optional[str]) -> str:
        """Run one command line and return its result text."""
        if command_text is None or not command_text.strip():
            return "Error: Empty command"

        command = ParsedCommand(tokens=tokenize(command_text), raw=command_text)
        context = CommandContext(
            manager=self.manager,
            auto_decline=self.config.events.auto_decline,
        )

        try:
            return self._dispatch(command, context)
        except CalendarError as e:
            logger.info(f"Command rejected: {command.raw!r}: {e}")
            return f"Error: {e}"
        except Exception as e:
            logger.exception(f"Command failed: {command.raw!r}: {e}")
            return f"Error: {e}"

    def _dispatch(self, command: ParsedCommand, context: CommandContext) -> str:
        action = ActionType.parse(command.action)
        if action is None:
            return "Error: Unrecognized command"

        if action is ActionType.EXIT:
            return EXIT_RESULT

        handler = self._handlers.get((action, command.target))
        if handler is None:
            return f"Error: Invalid {action.value} command"

        return handler(command, context)

    # Read accessors for front-ends

    def get_calendar_names(self) -> list[str]:
        return self.manager.get_calendar_names()

    def events_as_csv(self) -> list[str]:
        return self.manager.events_as_csv()


def register_default_handlers(interpreter: CommandInterpreter) -> None:
    """Register every built-in grammar."""
    from calkit.commands.calendar_commands import (
        handle_create_calendar,
        handle_edit_calendar,
        handle_use_calendar,
    )
    from calkit.commands.copy_commands import handle_copy_event, handle_copy_events
    from calkit.commands.event_commands import (
        handle_create_event,
        handle_edit_event,
        handle_edit_events,
    )
    from calkit.commands.query_commands import (
        handle_export_cal,
        handle_print_events,
        handle_show_status,
    )

    # Calendars
    interpreter.register(ActionType.CREATE, "calendar", handle_create_calendar)
    interpreter.register(ActionType.EDIT, "calendar", handle_edit_calendar)
    interpreter.register(ActionType.USE, "calendar", handle_use_calendar)

    # Events
    interpreter.register(ActionType.CREATE, "event", handle_create_event)
    interpreter.register(ActionType.EDIT, "event", handle_edit_event)
    interpreter.register(ActionType.EDIT, "events", handle_edit_events)

    # Copying
    interpreter.register(ActionType.COPY, "event", handle_copy_event)
    interpreter.register(ActionType.COPY, "events", handle_copy_events)

    # Queries and export
    interpreter.register(ActionType.PRINT, "events", handle_print_events)
    interpreter.register(ActionType.SHOW, "status", handle_show_status)
    interpreter.register(ActionType.EXPORT, "cal", handle_export_cal)
