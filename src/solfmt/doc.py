"""Document builders and the line-fitting layout printer.

Printing happens in two phases:

1. Node rules convert the syntax tree into a ``Doc``.
2. :func:`print_doc_to_string` lays the ``Doc`` out for a target width.

A ``Doc`` is one of:

- ``str``: literal text.
- ``list``: concatenation of its items.
- :class:`Line`: a possible line break. A plain line prints as a space when
  its enclosing group is flat, a soft line prints as nothing, and a hard
  line always breaks.
- :class:`Indent` / :class:`Align`: add indentation after every newline
  inside the contents.
- :class:`Group`: print the contents flat when they fit on the rest of the
  current line, otherwise print them broken. A group that contains a hard
  line (or :data:`BREAK_PARENT`) is always broken, and so are all of its
  ancestors.
- :class:`IfBreak`: choose contents by the mode of the enclosing group, or
  of the group named by ``group_id``.
- :class:`LineSuffix`: deferred until just before the next newline; used for
  trailing ``//`` comments.

The layout decision is greedy, as in Wadler's "A prettier printer": a group
goes flat when its flat rendering plus whatever follows it up to the next
possible newline fits in the remaining width.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Indent:
    contents: Doc


@dataclass(frozen=True)
class Align:
    width: int
    contents: Doc


@dataclass(frozen=True, eq=False)
class Group:
    contents: Doc
    should_break: bool = False
    id: object = None


@dataclass(frozen=True)
class IfBreak:
    break_contents: Doc
    flat_contents: Doc = ""
    group_id: object = None


@dataclass(frozen=True)
class Line:
    soft: bool = False
    hard: bool = False
    literal: bool = False


@dataclass(frozen=True)
class LineSuffix:
    contents: Doc


@dataclass(frozen=True)
class BreakParent:
    pass


Doc = Union[str, list, Indent, Align, Group, IfBreak, Line, LineSuffix, BreakParent]

# ── Builders ─────────────────────────────────────────────────────

BREAK_PARENT = BreakParent()
line = Line()
softline = Line(soft=True)
hardline: list = [Line(hard=True), BREAK_PARENT]
literalline: list = [Line(hard=True, literal=True), BREAK_PARENT]


def group(contents: Doc, *, should_break: bool = False, id: object = None) -> Group:
    return Group(contents, should_break, id)


def indent(contents: Doc) -> Indent:
    return Indent(contents)


def align(width: int, contents: Doc) -> Align:
    return Align(width, contents)


def if_break(break_contents: Doc, flat_contents: Doc = "", *, group_id: object = None) -> IfBreak:
    return IfBreak(break_contents, flat_contents, group_id)


def line_suffix(contents: Doc) -> LineSuffix:
    return LineSuffix(contents)


def join(separator: Doc, docs: Iterable[Doc]) -> list:
    parts: list = []
    for i, doc in enumerate(docs):
        if i > 0:
            parts.append(separator)
        parts.append(doc)
    return parts


# ── Layout ───────────────────────────────────────────────────────

MODE_BREAK = "break"
MODE_FLAT = "flat"


@dataclass(frozen=True)
class _Indentation:
    value: str = ""
    length: int = 0


_Command = tuple  # (indentation, mode, doc)


def _propagate_breaks(doc: Doc, forced: set[int]) -> bool:
    """Collect the ids of groups that must break. Returns True if ``doc``
    contains a forced break."""
    if isinstance(doc, str):
        return False
    if isinstance(doc, list):
        found = False
        for part in doc:
            found = _propagate_breaks(part, forced) or found
        return found
    if isinstance(doc, Group):
        found = _propagate_breaks(doc.contents, forced) or doc.should_break
        if found:
            forced.add(id(doc))
        return found
    if isinstance(doc, (Indent, Align, LineSuffix)):
        return _propagate_breaks(doc.contents, forced)
    if isinstance(doc, IfBreak):
        in_break = _propagate_breaks(doc.break_contents, forced)
        in_flat = _propagate_breaks(doc.flat_contents, forced)
        return in_break or in_flat
    if isinstance(doc, BreakParent):
        return True
    if isinstance(doc, Line):
        return doc.hard
    raise TypeError(f"unexpected document part: {doc!r}")


def _trim(out: list[str]) -> None:
    """Drop trailing spaces and tabs before a newline."""
    while out:
        stripped = out[-1].rstrip(" \t")
        if stripped:
            out[-1] = stripped
            return
        out.pop()


class _LayoutPrinter:

    def __init__(self, width: int, tab_width: int, use_tabs: bool) -> None:
        self.width = width
        self.tab_width = tab_width
        self.use_tabs = use_tabs
        self._forced: set[int] = set()
        self._group_modes: dict[object, str] = {}

    def _indent(self, ind: _Indentation) -> _Indentation:
        if self.use_tabs:
            return _Indentation(ind.value + "\t", ind.length + self.tab_width)
        return _Indentation(ind.value + " " * self.tab_width, ind.length + self.tab_width)

    @staticmethod
    def _align(ind: _Indentation, width: int) -> _Indentation:
        return _Indentation(ind.value + " " * width, ind.length + width)

    def _if_break_contents(self, doc: IfBreak, mode: str) -> Doc:
        group_mode = mode
        if doc.group_id is not None:
            group_mode = self._group_modes.get(doc.group_id, MODE_FLAT)
        return doc.break_contents if group_mode == MODE_BREAK else doc.flat_contents

    def _fits(self, next_cmd: _Command, rest: Sequence[_Command], width: int) -> bool:
        """Does ``next_cmd`` plus the rest up to the next newline fit?"""
        rest_idx = len(rest)
        cmds = [next_cmd]
        while width >= 0:
            if not cmds:
                if rest_idx == 0:
                    return True
                rest_idx -= 1
                cmds.append(rest[rest_idx])
                continue

            ind, mode, doc = cmds.pop()
            if isinstance(doc, str):
                newline = doc.find("\n")
                if newline >= 0:
                    return width - newline >= 0
                width -= len(doc)
            elif isinstance(doc, list):
                for part in reversed(doc):
                    cmds.append((ind, mode, part))
            elif isinstance(doc, (Indent, Align)):
                cmds.append((ind, mode, doc.contents))
            elif isinstance(doc, Group):
                group_mode = MODE_BREAK if id(doc) in self._forced else mode
                cmds.append((ind, group_mode, doc.contents))
            elif isinstance(doc, IfBreak):
                cmds.append((ind, mode, self._if_break_contents(doc, mode)))
            elif isinstance(doc, Line):
                if mode == MODE_BREAK or doc.hard:
                    return True
                if not doc.soft:
                    width -= 1
        return False

    def print(self, doc: Doc) -> str:
        self._forced = set()
        self._group_modes = {}
        _propagate_breaks(doc, self._forced)

        out: list[str] = []
        pos = 0
        suffix: list[_Command] = []
        cmds: list[_Command] = [(_Indentation(), MODE_BREAK, doc)]

        while cmds or suffix:
            if not cmds:
                cmds.extend(reversed(suffix))
                suffix = []
                continue

            ind, mode, doc = cmds.pop()
            if isinstance(doc, str):
                out.append(doc)
                newline = doc.rfind("\n")
                pos = len(doc) - newline - 1 if newline >= 0 else pos + len(doc)
            elif isinstance(doc, list):
                for part in reversed(doc):
                    cmds.append((ind, mode, part))
            elif isinstance(doc, Indent):
                cmds.append((self._indent(ind), mode, doc.contents))
            elif isinstance(doc, Align):
                cmds.append((self._align(ind, doc.width), mode, doc.contents))
            elif isinstance(doc, Group):
                forced = id(doc) in self._forced
                if mode == MODE_FLAT and not forced:
                    next_mode = MODE_FLAT
                elif not forced and self._fits(
                    (ind, MODE_FLAT, doc.contents), cmds, self.width - pos
                ):
                    next_mode = MODE_FLAT
                else:
                    next_mode = MODE_BREAK
                if doc.id is not None:
                    self._group_modes[doc.id] = next_mode
                cmds.append((ind, next_mode, doc.contents))
            elif isinstance(doc, IfBreak):
                cmds.append((ind, mode, self._if_break_contents(doc, mode)))
            elif isinstance(doc, LineSuffix):
                suffix.append((ind, mode, doc.contents))
            elif isinstance(doc, BreakParent):
                pass
            elif isinstance(doc, Line):
                if mode == MODE_FLAT and not doc.hard:
                    if not doc.soft:
                        out.append(" ")
                        pos += 1
                    continue
                if suffix:
                    # Flush trailing comments before the newline
                    cmds.append((ind, mode, doc))
                    cmds.extend(reversed(suffix))
                    suffix = []
                    continue
                if doc.literal:
                    out.append("\n")
                    pos = 0
                else:
                    _trim(out)
                    out.append("\n" + ind.value)
                    pos = ind.length
            else:
                raise TypeError(f"unexpected document part: {doc!r}")

        return "".join(out)


def print_doc_to_string(
    doc: Doc, *, width: int = 80, tab_width: int = 4, use_tabs: bool = False
) -> str:
    """Lay out ``doc`` for a maximum line ``width``."""
    return _LayoutPrinter(width, tab_width, use_tabs).print(doc)
