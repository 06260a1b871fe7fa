"""AST node definitions for Solidity parser output.

The parser is external: its JSON (``@solidity-parser/parser`` with
``range: true``) is loaded into immutable :class:`Node` values. Each node
keeps its ``type`` tag, its named child slots, an end-inclusive source span
and the comments attached to it.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from solfmt.errors import AstLoadError
from solfmt.source import Span

LINE_COMMENT = "LineComment"
BLOCK_COMMENT = "BlockComment"

LEADING = "leading"
TRAILING = "trailing"
DANGLING = "dangling"

# ── Grammar node types ───────────────────────────────────────────

NODE_TYPES: frozenset[str] = frozenset({
    # Source unit and directives
    "SourceUnit",
    "PragmaDirective",
    "ImportDirective",
    # Contracts and top-level declarations
    "ContractDefinition",
    "InheritanceSpecifier",
    "StateVariableDeclaration",
    "FileLevelConstant",
    "VariableDeclaration",
    "UsingForDeclaration",
    "StructDefinition",
    "EnumDefinition",
    "EnumValue",
    "EventDefinition",
    "CustomErrorDefinition",
    "TypeDefinition",
    "FunctionDefinition",
    "ModifierDefinition",
    "ModifierInvocation",
    # Type names
    "ElementaryTypeName",
    "UserDefinedTypeName",
    "Mapping",
    "ArrayTypeName",
    "FunctionTypeName",
    # Statements
    "Block",
    "UncheckedStatement",
    "ExpressionStatement",
    "VariableDeclarationStatement",
    "IfStatement",
    "WhileStatement",
    "DoWhileStatement",
    "ForStatement",
    "ReturnStatement",
    "EmitStatement",
    "RevertStatement",
    "ThrowStatement",
    "BreakStatement",
    "ContinueStatement",
    "TryStatement",
    "CatchClause",
    # Inline assembly
    "InlineAssemblyStatement",
    "AssemblyBlock",
    "AssemblyCall",
    "AssemblyLocalDefinition",
    "AssemblyAssignment",
    "AssemblyStackAssignment",
    "LabelDefinition",
    "AssemblySwitch",
    "AssemblyCase",
    "AssemblyFunctionDefinition",
    "AssemblyFor",
    "AssemblyIf",
    "AssemblyMemberAccess",
    "Break",
    "Continue",
    "DecimalNumber",
    "HexNumber",
    # Expressions
    "BinaryOperation",
    "UnaryOperation",
    "Conditional",
    "FunctionCall",
    "MemberAccess",
    "IndexAccess",
    "IndexRangeAccess",
    "TupleExpression",
    "NewExpression",
    "NameValueExpression",
    "NameValueList",
    "Identifier",
    "NumberLiteral",
    "BooleanLiteral",
    "StringLiteral",
    "HexLiteral",
})


@dataclass(frozen=True)
class Comment:
    kind: str  # LINE_COMMENT or BLOCK_COMMENT
    value: str
    span: Span
    placement: str = DANGLING

    @property
    def is_block(self) -> bool:
        return self.kind == BLOCK_COMMENT


@dataclass(frozen=True, eq=False)
class Node:
    """A read-only syntax node.

    ``fields`` holds every slot of the parser output except ``type``,
    ``range``, ``loc`` and ``comments``. Child nodes are :class:`Node`
    values and child sequences are tuples.
    """

    type: str
    span: Span | None
    fields: Mapping[str, Any]
    comments: tuple[Comment, ...] = ()

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def children(self) -> Iterator[Node]:
        """Yield direct child nodes in slot order."""
        for value in self.fields.values():
            if isinstance(value, Node):
                yield value
            elif isinstance(value, tuple):
                for item in value:
                    if isinstance(item, Node):
                        yield item

    def walk(self) -> Iterator[Node]:
        """Yield this node and all of its descendants, depth first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.children())))

    def __repr__(self) -> str:
        return f"Node({self.type!r}, span={self.span})"


# ── JSON loading ─────────────────────────────────────────────────

_SKIPPED_KEYS = frozenset({"type", "range", "loc", "comments"})


def _load_span(data: Mapping[str, Any]) -> Span | None:
    rng = data.get("range")
    if rng is None:
        return None
    if (
        not isinstance(rng, (list, tuple))
        or len(rng) != 2
        or not all(isinstance(x, int) for x in rng)
    ):
        raise AstLoadError(f"malformed range on {data.get('type')!r} node: {rng!r}")
    return Span(rng[0], rng[1])


def _load_comment(data: Mapping[str, Any]) -> Comment:
    span = _load_span(data)
    if span is None:
        raise AstLoadError("comment without a range")
    if data.get("leading"):
        placement = LEADING
    elif data.get("trailing"):
        placement = TRAILING
    else:
        placement = data.get("placement", DANGLING)
    kind = data.get("type", LINE_COMMENT)
    value = data.get("value", "")
    if kind == LINE_COMMENT and value.startswith("//"):
        value = value[2:]
    elif kind == BLOCK_COMMENT and value.startswith("/*") and value.endswith("*/"):
        value = value[2:-2]
    return Comment(kind=kind, value=value, span=span, placement=placement)


def _load_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        if "type" in value:
            return _load_node(value)
        return MappingProxyType({k: _load_value(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_load_value(v) for v in value)
    return value


def _load_node(data: Mapping[str, Any]) -> Node:
    node_type = data.get("type")
    if not isinstance(node_type, str):
        raise AstLoadError(f"node without a string 'type': {node_type!r}")
    fields = {
        key: _load_value(value)
        for key, value in data.items()
        if key not in _SKIPPED_KEYS
    }
    return Node(
        type=node_type,
        span=_load_span(data),
        fields=MappingProxyType(fields),
        comments=tuple(_load_comment(c) for c in data.get("comments") or ()),
    )


def load_ast(data: Mapping[str, Any], source: str | None = None) -> Node:
    """Build an immutable node tree from parser JSON.

    A flat ``comments`` list on the root (the parser's ``comments: true``
    output, without leading/trailing flags) is attached to nodes first;
    that needs the source text.
    """
    if not isinstance(data, Mapping):
        raise AstLoadError(f"AST root must be an object, got {type(data).__name__}")

    from solfmt.comments import attach_comments, needs_attachment

    if needs_attachment(data):
        if source is None:
            raise AstLoadError("unattached comments need the source text")
        data = attach_comments(data, source)
    return _load_node(data)
