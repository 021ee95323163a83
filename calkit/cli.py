#!/usr/bin/env python3
"""
calkit Command Line Interface

Main entry point for the `calkit` command.

Usage:
    calkit --mode interactive            # Type commands at a "> " prompt
    calkit --mode headless commands.txt  # Run a command file, stop at the first error
    calkit --version                     # Show version
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from calkit import __version__
from calkit.commands.interpreter import EXIT_RESULT, CommandInterpreter
from calkit.config import CalkitConfig, load_config
from calkit.logging_config import setup_logging

logger = logging.getLogger(__name__)

USAGE = "Usage: calkit --mode [interactive|headless filename]"


def build_interpreter(config: CalkitConfig) -> CommandInterpreter:
    """Create an interpreter, optionally with a ready-to-use default calendar."""
    interpreter = CommandInterpreter(config=config)

    default = config.default_calendar
    if default.enabled:
        manager = interpreter.manager
        if manager.create_calendar(default.name, default.timezone):
            manager.use_calendar(default.name)
            logger.info(f"Default calendar {default.name!r} ready in {default.timezone}")
        else:
            logger.warning(f"Could not create default calendar {default.name!r} in {default.timezone}")

    return interpreter


def run_interactive(
    interpreter: CommandInterpreter,
    prompt: str = "> ",
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Read commands until ``exit`` or end of input, printing each result."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    print("Calendar Application", file=stdout)
    print("Type 'exit' to quit", file=stdout)

    while True:
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            break

        result = interpreter.execute(line.rstrip("\n"))
        print(result, file=stdout)

        if result == EXIT_RESULT:
            break

    return 0


def run_headless(
    interpreter: CommandInterpreter,
    filename: str | Path,
    stop_on_error: bool = True,
    stdout: Optional[TextIO] = None,
) -> int:
    """Run every non-blank line of ``filename``.

    Returns 1 if a command failed (or the file could not be read), else 0.
    """
    stdout = stdout or sys.stdout
    failed = False

    try:
        with open(filename, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue

                result = interpreter.execute(line.rstrip("\n"))

                if result.startswith("Error:"):
                    print(f"Error on line {line_number}: {result}", file=stdout)
                    failed = True
                    if stop_on_error:
                        return 1
                    continue

                if result == EXIT_RESULT:
                    print(f"Exiting after processing {line_number} lines", file=stdout)
                    return 1 if failed else 0

                print(result, file=stdout)
    except OSError as e:
        print(f"Error reading file: {e}", file=stdout)
        return 1

    print("Finished processing file", file=stdout)
    return 1 if failed else 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="calkit",
        description="Personal calendar engine with a text command language",
    )
    parser.add_argument(
        "--mode", type=str.lower, help="interactive or headless"
    )
    parser.add_argument(
        "filename", nargs="?", help="Command file for headless mode"
    )
    parser.add_argument(
        "--config", default=None, help="Path to a calkit.yaml settings file"
    )
    parser.add_argument(
        "--version", action="store_true", help="Show version"
    )

    args = parser.parse_args(argv)

    if args.version:
        print(f"calkit {__version__}")
        return 0

    if not args.mode:
        print(USAGE)
        return 2

    config = load_config(Path(args.config) if args.config else None)
    setup_logging(config.logging)

    if args.mode == "interactive":
        return run_interactive(build_interpreter(config), prompt=config.shell.prompt)

    if args.mode == "headless":
        if not args.filename:
            print("Error: Missing filename for headless mode")
            print("Usage: calkit --mode headless filename")
            return 2
        return run_headless(
            build_interpreter(config),
            args.filename,
            stop_on_error=config.shell.stop_on_error,
        )

    print("Error: Mode must be either 'interactive' or 'headless'")
    print(USAGE)
    return 2


if __name__ == "__main__":
    sys.exit(main())
