"""Parser combinators over token slices.

A parser is a callable ``(tokens, start) -> (value, next_index)`` that raises
a ``ParseError`` subclass on failure. Alternation takes the first alternative
that succeeds and otherwise reports the last alternative's error; repetition
is greedy; every failure carries the token index it happened at.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from markup_grammar.errors import (
    Conversion,
    Custom,
    Expect,
    Incomplete,
    Mismatch,
    ParseError,
)
from markup_grammar.tokens import Token

Tokens = Sequence[Token]
ParseFn = Callable[[Tokens, int], tuple[Any, int]]


class Parser:
    """A composable parse function with builder methods."""

    def __init__(self, fn: ParseFn) -> None:
        self._fn = fn

    def __call__(self, tokens: Tokens, start: int) -> tuple[Any, int]:
        return self._fn(tokens, start)

    def parse(self, tokens: Tokens) -> Any:
        """Run from the first token and return only the value."""
        value, _ = self(tokens, 0)
        return value

    def map(self, f: Callable[[Any], Any]) -> Parser:
        def run(tokens: Tokens, start: int) -> tuple[Any, int]:
            value, pos = self(tokens, start)
            return f(value), pos
        return Parser(run)

    def discard(self) -> Parser:
        return self.map(lambda _: None)

    def collect(self) -> Parser:
        """Replace the value with the slice of tokens that was consumed."""
        def run(tokens: Tokens, start: int) -> tuple[Any, int]:
            _, pos = self(tokens, start)
            return list(tokens[start:pos]), pos
        return Parser(run)

    def opt(self) -> Parser:
        def run(tokens: Tokens, start: int) -> tuple[Any, int]:
            try:
                return self(tokens, start)
            except ParseError:
                return None, start
        return Parser(run)

    def repeat(self, min_count: int = 0, max_count: int | None = None) -> Parser:
        return repeat(self, min_count, max_count)

    def convert(self, f: Callable[[Any], Any]) -> Parser:
        """Map with a function that signals failure by raising ValueError."""
        def run(tokens: Tokens, start: int) -> tuple[Any, int]:
            value, pos = self(tokens, start)
            try:
                return f(value), pos
            except ValueError as e:
                raise Conversion(f"conversion error: {e}", start) from e
        return Parser(run)

    def expect(self, name: str) -> Parser:
        def run(tokens: Tokens, start: int) -> tuple[Any, int]:
            try:
                return self(tokens, start)
            except ParseError as e:
                raise Expect(f"expected {name}", start, e) from e
        return Parser(run)

    def name(self, name: str) -> Parser:
        def run(tokens: Tokens, start: int) -> tuple[Any, int]:
            try:
                return self(tokens, start)
            except ParseError as e:
                raise Custom(f"failed to parse {name}", start, e) from e
        return Parser(run)


def comb(fn: ParseFn) -> Parser:
    """Wrap a raw parse function."""
    return Parser(fn)


def sequence(*parsers: Parser) -> Parser:
    """Run parsers one after another; the value is a tuple of their values."""
    def run(tokens: Tokens, start: int) -> tuple[Any, int]:
        values = []
        pos = start
        for p in parsers:
            value, pos = p(tokens, pos)
            values.append(value)
        return tuple(values), pos
    return Parser(run)


def left(a: Parser, b: Parser) -> Parser:
    return sequence(a, b).map(lambda pair: pair[0])


def right(a: Parser, b: Parser) -> Parser:
    return sequence(a, b).map(lambda pair: pair[1])


def either(*parsers: Parser) -> Parser:
    """Try each alternative from the same index; the first success wins."""
    if not parsers:
        raise ValueError("either() needs at least one alternative")

    def run(tokens: Tokens, start: int) -> tuple[Any, int]:
        error: ParseError | None = None
        for p in parsers:
            try:
                return p(tokens, start)
            except ParseError as e:
                error = e
        raise error
    return Parser(run)


def repeat(parser: Parser, min_count: int = 0, max_count: int | None = None) -> Parser:
    """Greedy repetition collecting values into a list.

    Stops at the first failure, at ``max_count`` items, or after an item that
    consumed nothing.
    """
    def run(tokens: Tokens, start: int) -> tuple[Any, int]:
        items: list[Any] = []
        pos = start
        while max_count is None or len(items) < max_count:
            try:
                item, next_pos = parser(tokens, pos)
            except ParseError:
                break
            items.append(item)
            if next_pos == pos:
                break
            pos = next_pos
        if len(items) < min_count:
            raise Mismatch(
                f"expected repeat at least {min_count} times, found {len(items)} times",
                start,
            )
        return items, pos
    return Parser(run)


def end() -> Parser:
    def run(tokens: Tokens, start: int) -> tuple[Any, int]:
        if start < len(tokens):
            raise Mismatch(f"expected end of input, found {tokens[start]}", start)
        return None, start
    return Parser(run)


def any_token() -> Parser:
    def run(tokens: Tokens, start: int) -> tuple[Any, int]:
        if start >= len(tokens):
            raise Incomplete()
        return tokens[start], start + 1
    return Parser(run)
