"""Shared test helpers for the markup-grammar test suite."""

from __future__ import annotations

from markup_grammar.lexer import Lexer
from markup_grammar.tokens import Token


def lex(source: str) -> list[Token]:
    """Lex source into top-level token trees."""
    return Lexer(source, "<test>").lex()


def values(tokens: list[Token]) -> list[str]:
    return [t.value for t in tokens]
