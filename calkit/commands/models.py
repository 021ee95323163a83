"""Command interpreter data models.

Defines actions and the parsed form of a command line:
    command text → tokens → ParsedCommand → handler → result text
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from calkit.calendar.manager import CalendarManager


class ActionType(str, Enum):
    """Top-level command actions (first token)."""

    CREATE = "create"
    EDIT = "edit"
    USE = "use"
    COPY = "copy"
    PRINT = "print"
    EXPORT = "export"
    SHOW = "show"
    EXIT = "exit"

    @classmethod
    def parse(cls, value: str) -> Optional["ActionType"]:
        try:
            return cls(value.lower())
        except ValueError:
            return None


class GrammarError(ValueError):
    """A command did not match its grammar. The message is the full result text."""

    pass


@dataclass
class ParsedCommand:
    """A tokenized command line."""

    tokens: list[str]
    raw: str = ""

    @property
    def action(self) -> str:
        return self.tokens[0].lower() if self.tokens else ""

    @property
    def target(self) -> str:
        """Second token, lower-cased, selecting the sub-grammar."""
        return self.tokens[1].lower() if len(self.tokens) > 1 else ""

    def token(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return None

    def keyword_at(self, index: int, keyword: str) -> bool:
        """Case-insensitive keyword check that tolerates short commands."""
        value = self.token(index)
        return value is not None and value.lower() == keyword.lower()

    def __len__(self) -> int:
        return len(self.tokens)


@dataclass
class EventDetails:
    """Optional trailing fields of ``create event``."""

    description: Optional[str] = None
    location: Optional[str] = None
    is_public: bool = False


@dataclass
class CommandContext:
    """What a handler may act on."""

    manager: "CalendarManager"
    auto_decline: bool = True
