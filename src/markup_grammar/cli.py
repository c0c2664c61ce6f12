"""markup-grammar developer CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from markup_grammar import __version__
from markup_grammar.errors import CompileError, DiagnosticRenderer
from markup_grammar.grammar import attribute, dotted_ident, html_ident, run_rule, type_spec
from markup_grammar.lexer import Lexer
from markup_grammar.source import SourceFile
from markup_grammar.tokens import Token, TokenKind, to_source

logger = logging.getLogger(__name__)

RULES = {
    "type": type_spec,
    "dotted": dotted_ident,
    "html": html_ident,
    "attribute": attribute,
}


def _load_source(file: str) -> SourceFile:
    try:
        return SourceFile(Path(file))
    except UnicodeDecodeError as e:
        raise click.ClickException(f"{file} is not valid UTF-8: {e.reason}") from e


def _render_errors(e: CompileError, source: SourceFile, color: bool) -> None:
    renderer = DiagnosticRenderer(color=color, source=source)
    for diag in e.diagnostics:
        click.echo(renderer.render(diag), err=True)


def _format_value(value: object) -> str:
    if isinstance(value, Token):
        return to_source([value])
    if isinstance(value, tuple):
        return " = ".join(_format_value(v) for v in value)
    return to_source(value)


@click.group()
@click.version_option(__version__, prog_name="markup-grammar")
@click.option("--verbose", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool) -> None:
    """Parse markup DSL fragments and report span-anchored errors."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--rule", type=click.Choice(sorted(RULES)), default="type", show_default=True,
              help="Grammar rule to apply to the whole file.")
@click.option("--no-color", is_flag=True, help="Render diagnostics without ANSI colors.")
def check(file: str, rule: str, no_color: bool) -> None:
    """Parse FILE with a single grammar rule."""
    source = _load_source(file)
    logger.debug("checking %s with rule %s", file, rule)
    try:
        tokens = Lexer(source.content, file).lex()
        value = run_rule(RULES[rule](), tokens)
    except CompileError as e:
        _render_errors(e, source, not no_color)
        raise SystemExit(1)
    click.echo(_format_value(value))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def tokens(file: str) -> None:
    """Dump the token trees of FILE."""
    source = _load_source(file)
    try:
        trees = Lexer(source.content, file).lex()
    except CompileError as e:
        _render_errors(e, source, True)
        raise SystemExit(1)
    _dump_tokens(trees, 0)


def _dump_tokens(trees: list[Token], depth: int) -> None:
    indent = "  " * depth
    for tok in trees:
        if tok.kind == TokenKind.GROUP:
            click.echo(f"{indent}group {tok.delimiter.name.lower()} @ {tok.span}")
            _dump_tokens(list(tok.children), depth + 1)
        else:
            joint = " (joint)" if tok.joint else ""
            click.echo(f"{indent}{tok.kind.value} {tok.value!r}{joint} @ {tok.span}")
