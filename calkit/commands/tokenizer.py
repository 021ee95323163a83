"""Split a command line into tokens.

Whitespace separates tokens, except inside double quotes: a quoted run
becomes one token with the quotes removed (an empty pair gives "").
"""

from __future__ import annotations

import re

_TOKEN_RE = re.compile(r'"([^"]*)"|(\S+)')


def tokenize(command: str) -> list[str]:
    tokens: list[str] = []
    for match in _TOKEN_RE.finditer(command):
        quoted, bare = match.groups()
        tokens.append(quoted if quoted is not None else bare)
    return tokens


__all__ = ["tokenize"]
