"""Tests for calkit/commands/tokenizer.py"""

import pytest

from calkit.commands.tokenizer import tokenize


@pytest.mark.parametrize("line,expected", [
    ("use calendar --name Work", ["use", "calendar", "--name", "Work"]),
    ('create event "Team Sync" on 2025-03-10', ["create", "event", "Team Sync", "on", "2025-03-10"]),
    ('edit events location "Team Sync" ""', ["edit", "events", "location", "Team Sync", ""]),
    ("  print   events\ton 2025-03-10  ", ["print", "events", "on", "2025-03-10"]),
    ('description "a  b"', ["description", "a  b"]),
    ("", []),
])
def test_tokenize(line, expected):
    assert tokenize(line) == expected


def test_unterminated_quote_is_kept_as_text():
    assert tokenize('create event "Open') == ["create", "event", '"Open']
