"""Tests for LSP diagnostic conversion."""

from __future__ import annotations

from lsprotocol import types as lsp

from markup_grammar.errors import Diagnostic, Severity
from markup_grammar.lsp import _SEVERITY_MAP, span_to_range, to_lsp
from markup_grammar.source import Span


class TestSpanConversion:
    def test_span_to_range_basic(self):
        r = span_to_range(Span("page.html", 1, 1, 1, 5))
        assert (r.start.line, r.start.character) == (0, 0)
        assert (r.end.line, r.end.character) == (0, 5)

    def test_span_to_range_multiline(self):
        r = span_to_range(Span("page.html", 5, 3, 7, 10))
        assert (r.start.line, r.start.character) == (4, 2)
        assert (r.end.line, r.end.character) == (6, 10)


class TestSeverityMap:
    def test_error_maps(self):
        assert _SEVERITY_MAP[Severity.ERROR] == lsp.DiagnosticSeverity.Error

    def test_note_maps(self):
        assert _SEVERITY_MAP[Severity.NOTE] == lsp.DiagnosticSeverity.Information


class TestToLsp:
    def test_children_become_related_information(self):
        diag = Diagnostic(Severity.ERROR, "outer", [Span("page.html", 2, 1, 2, 1)])
        diag.span_error([Span("page.html", 2, 3, 2, 6)], "inner")
        result = to_lsp(diag, "file:///page.html")
        assert result.message == "outer"
        assert result.code == "E200"
        assert result.range.start.line == 1
        (related,) = result.related_information
        assert related.message == "inner"
        assert related.location.uri == "file:///page.html"
        assert related.location.range.start.character == 2

    def test_without_span_or_children(self):
        result = to_lsp(Diagnostic(Severity.ERROR, "unexpected end of input."), "file:///x")
        assert result.range.start.line == 0
        assert result.range.end.character == 0
        assert result.related_information is None
        assert result.severity == lsp.DiagnosticSeverity.Error
