"""solfmt command line interface."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from solfmt import __version__
from solfmt.ast_nodes import Node, load_ast
from solfmt.config import END_OF_LINE, EXPLICIT_TYPES, FormatOptions, find_config, load_config
from solfmt.errors import AstLoadError, DiagnosticRenderer, FormatError
from solfmt.formatter import SolidityFormatter, strip_bom
from solfmt.source import SourceText

logger = logging.getLogger(__name__)

AST_SUFFIX = ".ast.json"


def ast_path_for(source_path: Path) -> Path:
    """The parser output expected next to a source file."""
    return source_path.with_name(source_path.name + AST_SUFFIX)


def _read_json(path: Path) -> dict:
    try:
        return json.loads(path.read_bytes().decode("utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise AstLoadError(f"cannot read AST from {path}: {e}") from e


def _report(error: FormatError, source: SourceText | None) -> None:
    renderer = DiagnosticRenderer(color=True)
    click.echo(renderer.render(error.to_diagnostic(), source), err=True)


def _resolve_options(path: Path, config: str | None, **overrides: object) -> FormatOptions:
    if config is not None:
        options = load_config(Path(config))
    else:
        try:
            options = load_config(find_config(path))
        except FileNotFoundError:
            logger.debug("no config file found from %s, using defaults", path)
            options = FormatOptions()
    return options.merged(**overrides)


def _format_text(
    formatter: SolidityFormatter, source: str, ast_data: dict, name: str
) -> str | None:
    """Format one source; report errors and return None on failure."""
    text, _ = strip_bom(source)
    try:
        unit = load_ast(ast_data, text)
        return formatter.format(unit, source)
    except FormatError as e:
        _report(e, SourceText(text, name))
        return None


@click.group()
@click.version_option(__version__, prog_name="solfmt")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool) -> None:
    """A formatter for Solidity source code."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@main.command(name="format")
@click.argument("path", default=".", type=click.Path(exists=True))
@click.option("--ast", "ast_file", type=click.Path(exists=True), help="Parser JSON for PATH.")
@click.option("--check", is_flag=True, help="Check formatting without modifying files.")
@click.option("--stdin", "use_stdin", is_flag=True, help="Read from stdin, write to stdout.")
@click.option("--print-width", type=int, default=None, help="Maximum line width.")
@click.option("--tab-width", type=int, default=None, help="Spaces per indentation level.")
@click.option("--use-tabs", is_flag=True, help="Indent with tabs.")
@click.option("--single-quote", is_flag=True, help="Prefer single quotes in strings.")
@click.option("--bracket-spacing", is_flag=True, help="Spaces inside braces.")
@click.option("--explicit-types", type=click.Choice(EXPLICIT_TYPES), default=None)
@click.option("--end-of-line", type=click.Choice(END_OF_LINE), default=None)
@click.option("--config", type=click.Path(exists=True, dir_okay=False), default=None)
def format_cmd(
    path: str,
    ast_file: str | None,
    check: bool,
    use_stdin: bool,
    print_width: int | None,
    tab_width: int | None,
    use_tabs: bool,
    single_quote: bool,
    bracket_spacing: bool,
    explicit_types: str | None,
    end_of_line: str | None,
    config: str | None,
) -> None:
    """Format Solidity source files from their parser output."""
    try:
        options = _resolve_options(
            Path(path),
            config,
            print_width=print_width,
            tab_width=tab_width,
            use_tabs=use_tabs or None,
            single_quote=single_quote or None,
            bracket_spacing=bracket_spacing or None,
            explicit_types=explicit_types,
            end_of_line=end_of_line,
        )
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)
    formatter = SolidityFormatter(options)

    if use_stdin:
        if ast_file is None:
            click.echo("error: --stdin needs --ast", err=True)
            raise SystemExit(1)
        source = sys.stdin.buffer.read().decode("utf-8")
        try:
            ast_data = _read_json(Path(ast_file))
        except AstLoadError as e:
            _report(e, None)
            raise SystemExit(1)
        formatted = _format_text(formatter, source, ast_data, "<stdin>")
        if formatted is None:
            raise SystemExit(1)
        if check:
            if formatted != source:
                raise SystemExit(1)
        else:
            click.echo(formatted, nl=False)
        return

    target = Path(path)
    if target.is_dir():
        if ast_file is not None:
            click.echo("error: --ast needs a single source file", err=True)
            raise SystemExit(1)
        pairs = [(sol, ast_path_for(sol)) for sol in sorted(target.rglob("*.sol"))]
    else:
        pairs = [(target, Path(ast_file) if ast_file else ast_path_for(target))]

    if not pairs:
        click.echo("no .sol files found", err=True)
        return

    needs_formatting = False
    had_errors = False
    for sol_file, ast_json in pairs:
        filename = str(sol_file)
        if not ast_json.exists():
            click.echo(f"error: no parser output for {filename} (expected {ast_json})", err=True)
            had_errors = True
            continue
        logger.debug("formatting %s with %s", filename, ast_json)
        source = sol_file.read_bytes().decode("utf-8")
        try:
            ast_data = _read_json(ast_json)
        except AstLoadError as e:
            _report(e, None)
            had_errors = True
            continue

        formatted = _format_text(formatter, source, ast_data, filename)
        if formatted is None:
            had_errors = True
            continue
        if formatted != source:
            if check:
                click.echo(f"would reformat {filename}")
                needs_formatting = True
            else:
                sol_file.write_bytes(formatted.encode("utf-8"))
                click.echo(f"formatted {filename}")
        else:
            logger.debug("%s already formatted", filename)

    if had_errors or (check and needs_formatting):
        raise SystemExit(1)


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--source", type=click.Path(exists=True), help="Source text the AST came from.")
def view(file: str, source: str | None) -> None:
    """View a parser AST as a readable tree."""
    ast_json = Path(file)
    if source is None and ast_json.name.endswith(AST_SUFFIX):
        sibling = ast_json.with_name(ast_json.name[: -len(AST_SUFFIX)])
        if sibling.exists():
            source = str(sibling)
    text = None
    if source is not None:
        text, _ = strip_bom(Path(source).read_bytes().decode("utf-8"))

    try:
        unit = load_ast(_read_json(ast_json), text)
    except AstLoadError as e:
        _report(e, None)
        raise SystemExit(1)

    _dump_ast(unit, 0)


def _dump_ast(node: object, depth: int) -> None:
    """Print a readable AST dump."""
    indent = "  " * depth

    if isinstance(node, Node):
        span = f" [{node.span}]" if node.span is not None else ""
        click.echo(f"{indent}{node.type}{span}")
        for comment in node.comments:
            click.echo(f"{indent}  # {comment.placement}: {comment.value.strip()!r}")
        for field_name, value in node.fields.items():
            if isinstance(value, tuple) and any(isinstance(v, Node) for v in value):
                click.echo(f"{indent}  {field_name}:")
                for item in value:
                    _dump_ast(item, depth + 2)
            elif isinstance(value, tuple) and not value:
                click.echo(f"{indent}  {field_name}: []")
            elif isinstance(value, Node):
                click.echo(f"{indent}  {field_name}:")
                _dump_ast(value, depth + 2)
            elif value is not None:
                click.echo(f"{indent}  {field_name}: {value!r}")
    else:
        click.echo(f"{indent}{node!r}")
