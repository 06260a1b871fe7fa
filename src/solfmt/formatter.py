"""Formatting facade: source text plus parser AST in, formatted text out.

Wraps the node dispatcher and the layout engine, and handles the
whole-file concerns: byte order mark and line endings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from solfmt.ast_nodes import Node, load_ast
from solfmt.config import FormatOptions
from solfmt.doc import print_doc_to_string
from solfmt.errors import AstLoadError
from solfmt.printer import AstPath, Printer

logger = logging.getLogger(__name__)

BOM = "\ufeff"

_LINE_ENDINGS = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


def guess_end_of_line(text: str) -> str:
    """The style of the first line ending in ``text``, ``lf`` if it has none."""
    for i, ch in enumerate(text):
        if ch == "\r":
            return "crlf" if text[i + 1 : i + 2] == "\n" else "cr"
        if ch == "\n":
            return "lf"
    return "lf"


def strip_bom(source: str) -> tuple[str, bool]:
    if source.startswith(BOM):
        return source[1:], True
    return source, False


class SolidityFormatter:
    """Format a loaded Solidity source unit to canonical source text."""

    def __init__(self, options: FormatOptions | None = None) -> None:
        self.options = options or FormatOptions()

    # ── Public API ─────────────────────────────────────────────

    def format(self, unit: Node, source: str) -> str:
        """Format ``unit``; ``source`` is the text it was parsed from.

        Node ranges are offsets into the text after any byte order mark,
        as the parser sees it.
        """
        text, has_bom = strip_bom(source)
        if unit.type != "SourceUnit":
            logger.debug("formatting a detached %s node", unit.type)

        doc = Printer(text, self.options).print(AstPath.root(unit))
        output = print_doc_to_string(
            doc,
            width=self.options.print_width,
            tab_width=self.options.tab_width,
            use_tabs=self.options.use_tabs,
        )

        style = self.options.end_of_line
        if style == "auto":
            style = guess_end_of_line(text)
        if style != "lf":
            output = output.replace("\n", _LINE_ENDINGS[style])
        return BOM + output if has_bom else output


def format_source(
    source: str,
    ast_json: Mapping[str, Any],
    options: FormatOptions | None = None,
) -> str:
    """Load parser JSON for ``source`` and format it."""
    text, _ = strip_bom(source)
    if not isinstance(ast_json, Mapping):
        raise AstLoadError(f"AST root must be an object, got {type(ast_json).__name__}")
    unit = load_ast(ast_json, text)
    return SolidityFormatter(options).format(unit, source)
