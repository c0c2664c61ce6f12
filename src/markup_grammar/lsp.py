"""Conversion of diagnostics to Language Server Protocol types."""

from __future__ import annotations

from lsprotocol import types as lsp

from markup_grammar.errors import Diagnostic, Severity
from markup_grammar.source import Span

_SEVERITY_MAP = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.NOTE: lsp.DiagnosticSeverity.Information,
}

_DOCUMENT_START = lsp.Range(start=lsp.Position(0, 0), end=lsp.Position(0, 0))


def span_to_range(span: Span) -> lsp.Range:
    """Convert a 1-indexed Span to a 0-indexed LSP Range."""
    return lsp.Range(
        start=lsp.Position(line=span.start_line - 1, character=span.start_col - 1),
        end=lsp.Position(line=span.end_line - 1, character=span.end_col),
    )


def _range_of(diag: Diagnostic) -> lsp.Range:
    if diag.spans:
        return span_to_range(diag.spans[0])
    return _DOCUMENT_START


def to_lsp(diag: Diagnostic, uri: str) -> lsp.Diagnostic:
    """Convert a Diagnostic; child annotations become related information."""
    related = [
        lsp.DiagnosticRelatedInformation(
            location=lsp.Location(uri=uri, range=_range_of(child)),
            message=child.message,
        )
        for child in diag.children
    ]
    return lsp.Diagnostic(
        range=_range_of(diag),
        severity=_SEVERITY_MAP.get(diag.severity, lsp.DiagnosticSeverity.Error),
        source="markup-grammar",
        code=diag.code,
        message=diag.message,
        related_information=related or None,
    )
