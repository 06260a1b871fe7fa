"""Generic node dispatcher.

:class:`Printer` walks the syntax tree through :class:`AstPath` cursors,
looks up the printing rule for each node type, passes ignored regions
through verbatim and surrounds every printed node with its attached
comments.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from solfmt.ast_nodes import DANGLING, LEADING, TRAILING, Comment, Node
from solfmt.comments import print_leading_comment, print_trailing_comment
from solfmt.config import FormatOptions
from solfmt.doc import Doc
from solfmt.errors import AstLoadError, UnknownNodeType
from solfmt.rules import DANGLING_OWNERS, RULES
from solfmt.source import Span

IGNORE_MARKER = "prettier-ignore"


def is_ignore_marker(comment: Comment) -> bool:
    return "\n" not in comment.value and comment.value.strip() == IGNORE_MARKER


def has_ignore_comment(node: Node) -> bool:
    return any(c.placement == LEADING and is_ignore_marker(c) for c in node.comments)


@dataclass(frozen=True)
class AstPath:
    """Immutable cursor into the tree: ``(slot, value)`` steps from the root.

    Slots are field names or sequence indexes; the first step's slot is
    ``None``.
    """

    steps: tuple[tuple[Any, Any], ...]

    @classmethod
    def root(cls, node: Node) -> AstPath:
        return cls(((None, node),))

    @property
    def value(self) -> Any:
        return self.steps[-1][1]

    @property
    def node(self) -> Node | None:
        value = self.value
        return value if isinstance(value, Node) else None

    def descend(self, *slots: str | int) -> AstPath:
        steps = list(self.steps)
        value = self.value
        for slot in slots:
            if isinstance(slot, int):
                value = value[slot] if value is not None else None
            else:
                value = value.get(slot) if isinstance(value, Node) else None
            steps.append((slot, value))
        return AstPath(tuple(steps))

    def _ancestors(self) -> Iterator[tuple[Any, Any]]:
        return reversed(self.steps[:-1])

    @property
    def parent(self) -> Node | None:
        """The nearest enclosing node."""
        for _, value in self._ancestors():
            if isinstance(value, Node):
                return value
        return None

    @property
    def parent_slot(self) -> str | None:
        """The field of :attr:`parent` that leads to the current value."""
        slot = self.steps[-1][0]
        for step_slot, value in self._ancestors():
            if isinstance(value, Node):
                return slot if isinstance(slot, str) else None
            slot = step_slot
        return None


@dataclass(frozen=True)
class PrintContext:
    """What a rule sees: its node, where it is, and how to print children."""

    node: Node
    path: AstPath
    options: FormatOptions
    printer: Printer

    @property
    def text(self) -> str:
        return self.printer.text

    def print(self, *slots: str | int) -> Doc:
        return self.printer.print(self.path.descend(*slots))

    def print_each(self, *slots: str | int) -> list[Doc]:
        seq = self.path.descend(*slots)
        return [self.printer.print(seq.descend(i)) for i in range(len(seq.value or ()))]

    def dangling_comments(self) -> list[Comment]:
        return self.printer.unprinted(self.node, DANGLING)


class Printer:
    """Print one syntax tree; create a new printer for every format call."""

    def __init__(self, text: str, options: FormatOptions) -> None:
        self.text = text
        self.options = options
        # Comments inside verbatim regions, keyed by span
        self._consumed: set[Span] = set()

    def print(self, path: AstPath) -> Doc:
        node = path.value
        if node is None:
            return ""
        if not isinstance(node, Node):
            raise TypeError(f"cannot print {type(node).__name__} at slot {path.steps[-1][0]!r}")
        return self._print_comments(node, self._print_node(path, node))

    def _print_node(self, path: AstPath, node: Node) -> Doc:
        rule = RULES.get(node.type)
        if rule is None:
            raise UnknownNodeType(node.type, node.span)
        if has_ignore_comment(node):
            return self._print_ignored(node)
        return rule(PrintContext(node, path, self.options, self))

    # ── Ignored regions ────────────────────────────────────────

    def _print_ignored(self, node: Node) -> Doc:
        if node.span is None:
            raise AstLoadError(f"ignored {node.type} node has no range", None)
        self._consume(node)
        return node.span.slice(self.text).replace("\r\n", "\n")

    def _consume(self, node: Node) -> None:
        for inner in node.walk():
            for comment in inner.comments:
                if node.span.contains(comment.span):
                    self._consumed.add(comment.span)

    # ── Comments ───────────────────────────────────────────────

    def unprinted(self, node: Node, placement: str) -> list[Comment]:
        return [
            c for c in node.comments
            if c.placement == placement and c.span not in self._consumed
        ]

    def _print_comments(self, node: Node, doc: Doc) -> Doc:
        leading = self.unprinted(node, LEADING)
        trailing = self.unprinted(node, TRAILING)
        if node.type not in DANGLING_OWNERS:
            trailing += self.unprinted(node, DANGLING)
        if not leading and not trailing:
            return doc
        return [
            *(print_leading_comment(c, self.text) for c in leading),
            doc,
            *(print_trailing_comment(c, self.text) for c in trailing),
        ]
