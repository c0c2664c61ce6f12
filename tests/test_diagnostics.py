"""Tests for parse error translation and diagnostic rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from markup_grammar.diagnostics import translate
from markup_grammar.errors import (
    CompileError,
    Conversion,
    Custom,
    Diagnostic,
    DiagnosticRenderer,
    Expect,
    Incomplete,
    Mismatch,
    Severity,
)
from markup_grammar.grammar import closing_tag
from markup_grammar.source import SourceFile, Span

from tests.helpers import lex


class TestTranslate:
    def test_incomplete(self):
        diag = translate(lex("a"), Incomplete())
        assert diag.message == "unexpected end of input."
        assert diag.spans == []
        assert diag.children == []

    def test_mismatch(self):
        tokens = lex("a b")
        diag = translate(tokens, Mismatch("expected '<'", 1))
        assert diag.severity == Severity.ERROR
        assert diag.message == "expected '<'"
        assert diag.spans == [tokens[1].span]
        assert diag.children == []

    def test_conversion(self):
        tokens = lex("1")
        diag = translate(tokens, Conversion("bad number", 0))
        assert diag.spans == [tokens[0].span]
        assert diag.message == "bad number"

    def test_expect_has_one_child(self):
        tokens = lex("< / span >")
        error = Expect("outer", 0, Mismatch("inner", 2))
        diag = translate(tokens, error)
        assert diag.message == "outer"
        assert diag.spans == [tokens[0].span]
        (child,) = diag.children
        assert child.message == "inner"
        assert child.spans == [tokens[2].span]

    def test_custom_with_inner(self):
        tokens = lex("a b")
        diag = translate(tokens, Custom("failed to parse attr", 0, Mismatch("expected '='", 1)))
        assert len(diag.children) == 1
        assert diag.children[0].spans == [tokens[1].span]

    def test_custom_without_inner(self):
        diag = translate(lex("a"), Custom("bad", 0))
        assert diag.children == []

    def test_nested_incomplete_child_has_no_span(self):
        diag = translate(lex("a"), Expect("outer", 0, Incomplete()))
        assert diag.children[0].spans == []
        assert diag.children[0].message == "unexpected end of input."

    def test_position_at_end_points_at_last_token(self):
        tokens = lex("a b")
        diag = translate(tokens, Mismatch("expected '>'", 2))
        assert diag.spans == [tokens[1].span]

    def test_position_out_of_range(self):
        with pytest.raises(IndexError):
            translate(lex("a"), Mismatch("x", 5))

    def test_from_grammar_failure(self):
        tokens = lex("</span>")
        try:
            closing_tag("div")(tokens, 0)
        except Expect as e:
            diag = translate(tokens, e)
        assert diag.message == "expected closing tag </div>"
        assert diag.children[0].message == "expected '</div>', found '</span>'"


class TestRenderer:
    def test_render_with_child(self):
        source = SourceFile(Path("page.html"), "</span>")
        primary = Span("page.html", 1, 1, 1, 1)
        cause = Span("page.html", 1, 3, 1, 6)
        diag = Diagnostic(Severity.ERROR, "expected closing tag </div>", [primary])
        diag.span_error([cause], "expected '</div>', found '</span>'")

        output = DiagnosticRenderer(color=False, source=source).render(diag)

        assert "error[E200]: expected closing tag </div>" in output
        assert "page.html:1:1" in output
        assert "page.html:1:3" in output
        assert "= error: expected '</div>', found '</span>'" in output
        assert "</span>" in output
        assert "  ^^^^" in output

    def test_given_source_line_out_of_range(self):
        source = SourceFile(Path("page.html"), "only line")
        diag = Diagnostic(Severity.ERROR, "late", [Span("page.html", 3, 1, 3, 1)])
        output = DiagnosticRenderer(color=False, source=source).render(diag)
        assert "only line" not in output
        assert "page.html:3:1" in output

    def test_render_without_span(self):
        diag = Diagnostic(Severity.ERROR, "unexpected end of input.")
        output = DiagnosticRenderer(color=False).render(diag)
        assert output == "error[E200]: unexpected end of input."

    def test_render_reads_file(self, tmp_path):
        f = tmp_path / "attrs.html"
        f.write_text("class x\n")
        diag = Diagnostic(Severity.WARNING, "odd", [Span(str(f), 1, 7, 1, 7)], code="W001")
        output = DiagnosticRenderer(color=False).render(diag)
        assert "warning[W001]: odd" in output
        assert "class x" in output

    def test_color(self):
        diag = Diagnostic(Severity.ERROR, "boom")
        assert "\033[" in DiagnosticRenderer(color=True).render(diag)

    def test_compile_error(self):
        err = CompileError([
            Diagnostic(Severity.ERROR, "first error"),
            Diagnostic(Severity.ERROR, "second error"),
        ])
        assert len(err.diagnostics) == 2
        assert "2 error(s)" in str(err)
