"""calkit - Personal calendar engine

Philosophy:
    A calendar is a named, zoned list of events. Everything a front-end
    needs goes through one text command and comes back as one line of text.

Components:
    calendar/: Event model, calendars, and the calendar manager
    commands/: Tokenizer, grammar handlers, and the command interpreter
    config.py: YAML-backed settings (args/calkit.yaml)
    logging_config.py: structlog setup
    cli.py: Interactive and headless text shells

Usage:
    from calkit.calendar.manager import CalendarManager
    from calkit.commands.interpreter import CommandInterpreter

    interpreter = CommandInterpreter(CalendarManager())
    interpreter.execute("create calendar --name Work --timezone America/New_York")
    interpreter.execute("use calendar --name Work")
    interpreter.execute('create event "Standup" from 2025-03-10T10:00 to 2025-03-10T10:15')
"""

from pathlib import Path

__version__ = "0.3.0"

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"
CONFIG_PATH = ARGS_DIR / "calkit.yaml"

__all__ = [
    "__version__",
    "PROJECT_ROOT",
    "ARGS_DIR",
    "CONFIG_PATH",
]
