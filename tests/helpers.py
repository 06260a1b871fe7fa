"""Shared test helpers: parser-shaped JSON builders and format shortcuts."""

from __future__ import annotations

from solfmt.ast_nodes import load_ast
from solfmt.config import FormatOptions
from solfmt.formatter import SolidityFormatter, format_source


def node(node_type: str, **fields) -> dict:
    """A parser JSON node; pass ``range=[start, end]`` for located nodes."""
    return {"type": node_type, **fields}


def unit(*children: dict, **fields) -> dict:
    return node("SourceUnit", children=list(children), **fields)


def ident(name: str) -> dict:
    return node("Identifier", name=name)


def number(value: str) -> dict:
    return node("NumberLiteral", number=value, subdenomination=None)


def elementary(name: str) -> dict:
    return node("ElementaryTypeName", name=name, stateMutability=None)


def variable(type_name: str, name: str, **fields) -> dict:
    fields.setdefault("storageLocation", None)
    return node("VariableDeclaration", typeName=elementary(type_name), name=name, **fields)


def state_variable(type_name: str, name: str, **fields) -> dict:
    return node(
        "StateVariableDeclaration",
        variables=[variable(type_name, name, isStateVar=True, visibility="default")],
        initialValue=None,
        **fields,
    )


def function(name: str, *, body: list | None = None, **fields) -> dict:
    """A public function; ``bodyless=True`` gives a declaration without a body."""
    bodyless = fields.pop("bodyless", False)
    defaults = dict(
        name=name,
        parameters=[],
        returnParameters=None,
        modifiers=[],
        visibility="public",
        stateMutability=None,
        override=None,
        isVirtual=False,
        isConstructor=False,
        isReceiveEther=False,
        isFallback=False,
        body=None if bodyless else node("Block", statements=body or []),
    )
    defaults.update(fields)
    return node("FunctionDefinition", **defaults)


def contract(name: str, *members: dict, **fields) -> dict:
    return node(
        "ContractDefinition",
        name=name,
        kind=fields.pop("kind", "contract"),
        baseContracts=fields.pop("baseContracts", []),
        subNodes=list(members),
        **fields,
    )


def span_of(source: str, snippet: str, start: int = 0) -> list[int]:
    """The end-inclusive range of ``snippet`` in ``source``."""
    index = source.index(snippet, start)
    return [index, index + len(snippet) - 1]


def line_comment(source: str, snippet: str, **flags) -> dict:
    return {"type": "LineComment", "value": snippet, "range": span_of(source, snippet), **flags}


def fmt(ast: dict, source: str = "", **options) -> str:
    """Format a whole source unit."""
    return format_source(source, ast, FormatOptions(**options))


def fmt_node(ast: dict, source: str = "", **options) -> str:
    """Format a single node, without the source unit's final newline."""
    return SolidityFormatter(FormatOptions(**options)).format(load_ast(ast, source), source)
