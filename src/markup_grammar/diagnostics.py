"""Turn parse errors into span-anchored diagnostics."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from markup_grammar.errors import (
    Conversion,
    Custom,
    Diagnostic,
    Expect,
    Incomplete,
    Mismatch,
    ParseError,
    Severity,
)
from markup_grammar.source import Span
from markup_grammar.tokens import Token

logger = logging.getLogger(__name__)


def _span_at(tokens: Sequence[Token], position: int) -> list[Span]:
    # One past the end means "at end of input": point at the last token.
    if position == len(tokens):
        return [tokens[-1].span] if tokens else []
    if not 0 <= position < len(tokens):
        raise IndexError(f"error position {position} outside {len(tokens)} tokens")
    return [tokens[position].span]


def translate(tokens: Sequence[Token], error: ParseError) -> Diagnostic:
    """Map a parse error and its cause chain onto the tokens it refers to."""
    if isinstance(error, Incomplete):
        return Diagnostic(Severity.ERROR, "unexpected end of input.")
    if isinstance(error, (Mismatch, Conversion)):
        return Diagnostic(Severity.ERROR, error.message, _span_at(tokens, error.position))
    if isinstance(error, (Expect, Custom)):
        diag = Diagnostic(Severity.ERROR, error.message, _span_at(tokens, error.position))
        if error.inner is not None:
            child = translate(tokens, error.inner)
            logger.debug("attaching cause %r to %r", child.message, diag.message)
            diag.span_error(child.spans, child.message)
        return diag
    raise TypeError(f"unknown parse error type {type(error).__name__}")
