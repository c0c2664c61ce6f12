"""Composite rules for the markup DSL."""

from __future__ import annotations

import logging
from typing import Any

from markup_grammar import tokens as tk
from markup_grammar.combinators import Parser, Tokens, either, end, left, right, sequence
from markup_grammar.diagnostics import translate
from markup_grammar.errors import CompileError, ParseError
from markup_grammar.primitives import group, ident, ident_match, literal, punct
from markup_grammar.source import join_spans
from markup_grammar.tokens import Delimiter, Token, TokenKind

logger = logging.getLogger(__name__)

_TYPE_PUNCT = (":", "<", ">", "&", "'")


def type_spec() -> Parser:
    """A run of identifiers and type punctuation, kept verbatim."""
    valid = either(ident(), *(punct(ch) for ch in _TYPE_PUNCT))
    return valid.repeat(1).collect()


def dotted_ident() -> Parser:
    """``a.b.c`` or ``a::b`` as one token; a lone identifier comes back as is."""
    dotted = sequence(punct("."), ident()).discard()
    pathed = sequence(punct(":").repeat(2, 2), ident()).discard()
    path = sequence(ident(), either(dotted, pathed).repeat())

    def wrap(matched: list[Token]) -> Token:
        if len(matched) == 1:
            return matched[0]
        return tk.group(Delimiter.BRACE, matched)
    return path.collect().map(wrap)


def html_ident() -> Parser:
    """Read identifiers joined by dashes into one identifier using underscores."""
    path = sequence(ident(), right(punct("-"), ident()).repeat())

    def merge(matched: list[Token]) -> Token:
        name = "".join(t.value if t.kind == TokenKind.IDENT else "_" for t in matched)
        return tk.ident(name, join_spans(t.span for t in matched))
    return path.collect().map(merge)


def closing_tag(name: str) -> Parser:
    tag = sequence(punct("<"), punct("/"), ident_match(name), punct(">"))
    return tag.discard().expect(f"closing tag </{name}>")


def attribute() -> Parser:
    """``name-with-dashes = value``; returns (name, value) tokens."""
    value = either(literal(), group(), dotted_ident())
    return sequence(left(html_ident(), punct("=")), value)


def run_rule(rule: Parser, tokens: Tokens) -> Any:
    """Parse the whole token slice with rule, or raise CompileError."""
    try:
        value, _ = left(rule, end())(tokens, 0)
    except ParseError as e:
        logger.debug("parse failed: %r", e)
        raise CompileError([translate(tokens, e)]) from e
    return value
