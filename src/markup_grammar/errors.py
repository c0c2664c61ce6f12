"""Parse errors, diagnostics and Rust-style diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from markup_grammar.source import SourceFile, Span


# ── Parse errors ──────────────────────────────────────────────────


class ParseError(Exception):
    """A failed parse at a token index, optionally caused by an inner error."""

    def __init__(self, message: str, position: int, inner: ParseError | None = None) -> None:
        self.message = message
        self.position = position
        self.inner = inner
        super().__init__(message)

    def __repr__(self) -> str:
        inner = f", inner={self.inner!r}" if self.inner is not None else ""
        return f"{type(self).__name__}({self.message!r}, {self.position}{inner})"


class Incomplete(ParseError):
    """Input ran out."""

    def __init__(self) -> None:
        super().__init__("incomplete input", 0)

    def __repr__(self) -> str:
        return "Incomplete()"


class Mismatch(ParseError):
    """A token failed a primitive's predicate."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message, position)


class Conversion(ParseError):
    """A matched value could not be converted."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message, position)


class Expect(ParseError):
    """A rule failed and reports its own message over the cause."""

    def __init__(self, message: str, position: int, inner: ParseError) -> None:
        super().__init__(message, position, inner)


class Custom(ParseError):
    """A named rule failed; the cause is optional."""


# ── Diagnostics ───────────────────────────────────────────────────


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass
class Diagnostic:
    """A span-anchored message with nested child annotations."""

    severity: Severity
    message: str
    spans: list[Span] = field(default_factory=list)
    children: list[Diagnostic] = field(default_factory=list)
    code: str = "E200"

    def span_error(self, spans: list[Span], message: str) -> Diagnostic:
        """Attach an error-level child annotation and return self."""
        self.children.append(Diagnostic(Severity.ERROR, message, list(spans), code=self.code))
        return self


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True, source: SourceFile | None = None) -> None:
        self.color = color
        self.source = source
        self._file_cache: dict[str, list[str]] = {}

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def _get_source_line(self, filename: str, line_num: int) -> str | None:
        """Return the 1-indexed line from the given source or from disk."""
        if self.source is not None and str(self.source.path) == filename:
            if 1 <= line_num <= len(self.source.lines):
                return self.source.line_at(line_num)
            return None
        if filename not in self._file_cache:
            try:
                path = Path(filename)
                if path.is_file():
                    self._file_cache[filename] = path.read_text().splitlines()
                else:
                    self._file_cache[filename] = []
            except (OSError, UnicodeDecodeError):
                self._file_cache[filename] = []
        lines = self._file_cache[filename]
        if 1 <= line_num <= len(lines):
            return lines[line_num - 1]
        return None

    def _render_span(self, span: Span, color: str) -> list[str]:
        lines = [f"  {self._c(_BLUE)}-->{self._c(_RESET)} {span}"]
        gutter = f"{span.start_line:>4}"
        lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

        source_line = self._get_source_line(span.file, span.start_line)
        if source_line is not None:
            lines.append(f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} {source_line}")

        if span.start_line == span.end_line:
            caret_len = max(1, span.end_col - span.start_col + 1)
            padding = " " * (span.start_col - 1)
            lines.append(
                f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                f"{padding}{self._c(color)}{'^' * caret_len}{self._c(_RESET)}"
            )
        elif source_line is None:
            lines.append(f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)}")
        return lines

    def render(self, diag: Diagnostic) -> str:
        color = _COLORS[diag.severity]

        # Header: error[E200]: message
        lines = [
            f"{self._c(color)}{diag.severity.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        ]
        for span in diag.spans:
            lines.extend(self._render_span(span, color))

        for child in diag.children:
            child_color = _COLORS[child.severity]
            lines.append(
                f"  {self._c(_BLUE)}={self._c(_RESET)} "
                f"{self._c(child_color)}{child.severity.value}{self._c(_RESET)}: {child.message}"
            )
            for span in child.spans:
                lines.extend(self._render_span(span, child_color))

        return "\n".join(lines)


class CompileError(Exception):
    """Batch error carrying one or more diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")
