"""Command language: tokenizing, grammar handlers, interpretation."""

from calkit.commands.interpreter import CommandInterpreter
from calkit.commands.tokenizer import tokenize

__all__ = [
    "CommandInterpreter",
    "tokenize",
]
