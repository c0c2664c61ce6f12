"""Source file representation and span tracking for diagnostics."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Span:
    """A range within a source file."""

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.file}:{self.start_line}:{self.start_col}"

    def join(self, other: Span) -> Span:
        """Span from the start of self to the end of other."""
        if self.file != other.file:
            raise ValueError(f"cannot join spans from {self.file!r} and {other.file!r}")
        return Span(
            self.file,
            self.start_line, self.start_col,
            other.end_line, other.end_col,
        )


def join_spans(spans: Iterable[Span]) -> Span | None:
    """Fold spans left to right into one covering span."""
    acc: Span | None = None
    for span in spans:
        acc = span if acc is None else acc.join(span)
    return acc


class SourceFile:
    """A loaded source file with line access for diagnostics."""

    def __init__(self, path: Path, content: str | None = None) -> None:
        self.path = path
        self.content = path.read_text() if content is None else content
        self.lines = self.content.splitlines()

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""
