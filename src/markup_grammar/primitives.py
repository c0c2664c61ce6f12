"""Single-token matchers."""

from __future__ import annotations

import copy
from typing import Any

from markup_grammar.combinators import Parser, Tokens, comb
from markup_grammar.errors import Mismatch
from markup_grammar.tokens import Token, TokenKind


def _token_at(tokens: Tokens, start: int) -> Token | None:
    if 0 <= start < len(tokens):
        return tokens[start]
    return None


def unit(value: Any) -> Parser:
    """Succeed without consuming, yielding a fresh copy of value."""
    return comb(lambda tokens, start: (copy.deepcopy(value), start))


def punct(ch: str) -> Parser:
    def run(tokens: Tokens, start: int) -> tuple[Token, int]:
        tok = _token_at(tokens, start)
        if tok is not None and tok.kind == TokenKind.PUNCT and tok.value == ch:
            return tok, start + 1
        raise Mismatch(f"expected {ch!r}", start)
    return comb(run)


def _kind(kind: TokenKind) -> Parser:
    def run(tokens: Tokens, start: int) -> tuple[Token, int]:
        tok = _token_at(tokens, start)
        if tok is not None and tok.kind == kind:
            return tok, start + 1
        raise Mismatch(f"expected {kind.value}", start)
    return comb(run)


def ident() -> Parser:
    return _kind(TokenKind.IDENT)


def literal() -> Parser:
    return _kind(TokenKind.LITERAL)


def group() -> Parser:
    return _kind(TokenKind.GROUP)


def ident_match(name: str) -> Parser:
    """Match an identifier with exactly this text, as in a closing tag."""
    def run(tokens: Tokens, start: int) -> tuple[None, int]:
        tok = _token_at(tokens, start)
        if tok is None or tok.kind != TokenKind.IDENT:
            raise Mismatch("expected identifier", start)
        if tok.value != name:
            raise Mismatch(f"expected '</{name}>', found '</{tok.value}>'", start)
        return None, start + 1
    return comb(run)
