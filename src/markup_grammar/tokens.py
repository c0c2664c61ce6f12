"""Token kinds and token trees as handed over by the macro host."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from markup_grammar.source import Span, join_spans


class TokenKind(Enum):
    IDENT = "identifier"
    PUNCT = "punctuation"
    LITERAL = "literal"
    GROUP = "group"


class Delimiter(Enum):
    PARENTHESIS = ("(", ")")
    BRACE = ("{", "}")
    BRACKET = ("[", "]")
    NONE = ("", "")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]


OPENERS: dict[str, Delimiter] = {
    "(": Delimiter.PARENTHESIS,
    "{": Delimiter.BRACE,
    "[": Delimiter.BRACKET,
}


@dataclass(frozen=True)
class Token:
    """One token tree node.

    ``value`` holds the identifier text, the punctuation character or the
    literal's source text. Groups keep their delimiter and inner tokens;
    their ``value`` is empty.
    """

    kind: TokenKind
    value: str
    span: Span
    joint: bool = False
    delimiter: Delimiter | None = None
    children: tuple[Token, ...] = ()

    def __str__(self) -> str:
        if self.kind == TokenKind.GROUP:
            return f"{self.delimiter.open}{to_source(self.children)}{self.delimiter.close}"
        return self.value


def ident(name: str, span: Span) -> Token:
    return Token(TokenKind.IDENT, name, span)


def punct(ch: str, span: Span, joint: bool = False) -> Token:
    return Token(TokenKind.PUNCT, ch, span, joint=joint)


def literal(text: str, span: Span) -> Token:
    return Token(TokenKind.LITERAL, text, span)


def group(delimiter: Delimiter, children: Iterable[Token], span: Span | None = None) -> Token:
    """Build a group token; the span defaults to the join of its children."""
    children = tuple(children)
    if span is None:
        span = join_spans(t.span for t in children)
        if span is None:
            raise ValueError("an empty group needs an explicit span")
    return Token(TokenKind.GROUP, "", span, delimiter=delimiter, children=children)


def flatten(tokens: Iterable[Token]) -> Iterator[Token]:
    """Yield leaf tokens, expanding groups into their delimiters and contents."""
    for tok in tokens:
        if tok.kind != TokenKind.GROUP:
            yield tok
            continue
        if tok.delimiter.open:
            yield punct(tok.delimiter.open, tok.span)
        yield from flatten(tok.children)
        if tok.delimiter.close:
            yield punct(tok.delimiter.close, tok.span)


def to_source(tokens: Iterable[Token]) -> str:
    """Render tokens back to text, keeping joint punctuation together."""
    out: list[str] = []
    for tok in tokens:
        out.append(str(tok))
        if not (tok.kind == TokenKind.PUNCT and tok.joint):
            out.append(" ")
    return "".join(out).rstrip()
