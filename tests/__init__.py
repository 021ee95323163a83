"""calkit Test Suite

Test organization:
- unit/calendar/: Event model, calendar, manager, time helpers, export, helpers
- unit/commands/: Tokenizer and command interpreter grammars
- unit/cli/: Shell modes and configuration loading

Running tests:
    # All tests
    pytest

    # Specific area
    pytest tests/unit/commands/
"""
