"""Lexer producing token trees from DSL source text.

Mirrors what a macro host hands to the grammar: identifiers, single
punctuation characters (marked joint when another symbol follows directly),
literals, and delimited groups nested by ``()``, ``[]`` and ``{}``.
"""

from __future__ import annotations

from markup_grammar.errors import CompileError, Diagnostic, Severity
from markup_grammar.source import Span
from markup_grammar.tokens import OPENERS, Delimiter, Token, group, ident, literal, punct

SYMBOLS = frozenset("!#$%&*+,-./:;<=>?@^|~'")
_CLOSERS = frozenset(d.close for d in OPENERS.values())


class Lexer:
    """Tokenizes DSL source into a list of token trees."""

    def __init__(self, source: str, filename: str = "<stdin>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.col = 1
        self.diagnostics: list[Diagnostic] = []

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the top-level tokens."""
        tokens = self._lex_tokens(None)
        if self.diagnostics:
            raise CompileError(self.diagnostics)
        return tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _is_ident_char(self) -> bool:
        ch = self._peek()
        return (ch.isascii() and ch.isalnum()) or ch == '_'

    def _span_from(self, start_line: int, start_col: int) -> Span:
        end_col = self.col - 1 if self.col > 1 else 1
        return Span(self.filename, start_line, start_col, self.line, end_col)

    def _error(self, message: str, line: int, col: int) -> None:
        span = Span(self.filename, line, col, line, col)
        self.diagnostics.append(
            Diagnostic(severity=Severity.ERROR, message=message, spans=[span], code="E100")
        )

    def _skip_trivia(self) -> None:
        """Skip whitespace and // comments."""
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch in ' \t\r\n':
                self._advance()
            elif ch == '/' and self._peek(1) == '/':
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
            else:
                return

    # ── Token trees ───────────────────────────────────────────────

    def _lex_tokens(self, closer: str | None) -> list[Token]:
        """Lex until closer (consumed by the caller) or end of input."""
        tokens: list[Token] = []
        while True:
            self._skip_trivia()
            if self.pos >= len(self.source):
                return tokens
            ch = self.source[self.pos]
            if ch == closer:
                return tokens
            line, col = self.line, self.col
            if ch in OPENERS:
                tokens.append(self._lex_group(OPENERS[ch]))
            elif ch in _CLOSERS:
                self._error(f"unexpected closing delimiter {ch!r}", line, col)
                self._advance()
            elif ch == '"':
                tokens.append(self._lex_string())
            elif ch == "'":
                tokens.append(self._lex_quote())
            elif ch.isascii() and ch.isdigit():
                tokens.append(self._lex_number())
            elif (ch.isascii() and ch.isalpha()) or ch == '_':
                tokens.append(self._lex_identifier())
            elif ch in SYMBOLS:
                self._advance()
                joint = self._peek() in SYMBOLS
                tokens.append(punct(ch, self._span_from(line, col), joint=joint))
            else:
                self._error(f"unexpected character {ch!r}", line, col)
                self._advance()

    def _lex_group(self, delimiter: Delimiter) -> Token:
        line, col = self.line, self.col
        self._advance()
        children = self._lex_tokens(delimiter.close)
        if self.pos >= len(self.source):
            self._error(f"unclosed delimiter {delimiter.open!r}", line, col)
        else:
            self._advance()
        return group(delimiter, children, self._span_from(line, col))

    # ── Leaves ────────────────────────────────────────────────────

    def _lex_identifier(self) -> Token:
        line, col = self.line, self.col
        start = self.pos
        while self._is_ident_char():
            self._advance()
        return ident(self.source[start:self.pos], self._span_from(line, col))

    def _lex_number(self) -> Token:
        line, col = self.line, self.col
        start = self.pos
        while self._peek().isdigit() or self._peek() == '_':
            self._advance()
        if self._peek() == '.' and self._peek(1).isdigit():
            self._advance()
            while self._peek().isdigit() or self._peek() == '_':
                self._advance()
        # Type suffix such as 10u8 or 1.5f32
        while self._is_ident_char():
            self._advance()
        return literal(self.source[start:self.pos], self._span_from(line, col))

    def _lex_string(self) -> Token:
        line, col = self.line, self.col
        start = self.pos
        self._advance()
        while self.pos < len(self.source) and self._peek() != '"':
            if self._peek() == '\\':
                self._advance()
                if self.pos >= len(self.source):
                    break
            self._advance()
        if self.pos >= len(self.source):
            self._error("unterminated string literal", line, col)
        else:
            self._advance()
        return literal(self.source[start:self.pos], self._span_from(line, col))

    def _lex_quote(self) -> Token:
        """A char literal like 'x' or '\\n', otherwise a lifetime quote."""
        line, col = self.line, self.col
        start = self.pos
        width = 3 if self._peek(1) == '\\' else 2
        if self._peek(1) not in ('\0', "'") and self._peek(width) == "'":
            for _ in range(width + 1):
                self._advance()
            return literal(self.source[start:self.pos], self._span_from(line, col))
        self._advance()
        return punct("'", self._span_from(line, col), joint=True)
