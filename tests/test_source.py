"""Tests for spans and source files."""

from __future__ import annotations

from pathlib import Path

import pytest

from markup_grammar.source import SourceFile, Span, join_spans


class TestSpanJoin:
    def test_join_takes_start_and_end(self):
        a = Span("f.html", 1, 3, 1, 5)
        b = Span("f.html", 2, 1, 2, 8)
        assert a.join(b) == Span("f.html", 1, 3, 2, 8)

    def test_join_is_associative(self):
        a = Span("f", 1, 1, 1, 1)
        b = Span("f", 1, 3, 1, 4)
        c = Span("f", 1, 6, 1, 9)
        assert a.join(b).join(c) == a.join(b.join(c))

    def test_join_different_files(self):
        with pytest.raises(ValueError, match="cannot join"):
            Span("a", 1, 1, 1, 1).join(Span("b", 1, 1, 1, 1))

    def test_join_spans_empty(self):
        assert join_spans([]) is None

    def test_join_spans_single(self):
        span = Span("f", 4, 2, 4, 2)
        assert join_spans([span]) == span

    def test_join_spans_fold(self):
        spans = [Span("f", 1, 1, 1, 1), Span("f", 1, 2, 1, 2), Span("f", 1, 3, 1, 3)]
        assert join_spans(spans) == Span("f", 1, 1, 1, 3)

    def test_span_str(self):
        assert str(Span("file.html", 10, 5, 10, 20)) == "file.html:10:5"


class TestSourceFile:
    def test_line_at(self, tmp_path):
        f = tmp_path / "test.html"
        f.write_text("line one\nline two\n")
        sf = SourceFile(f)
        assert sf.line_at(1) == "line one"
        assert sf.line_at(2) == "line two"
        assert sf.line_at(0) == ""
        assert sf.line_at(99) == ""

    def test_given_content_skips_disk(self):
        sf = SourceFile(Path("missing.html"), "first\nsecond")
        assert sf.line_at(2) == "second"
