"""Comment attachment and comment printing.

Attachment runs on the parser JSON before nodes are frozen: each comment
from the parser's flat ``comments`` list goes to the innermost enclosing
node, as a leading comment of the following child, a trailing comment of
the preceding child, or a dangling comment of the enclosing node.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from solfmt.ast_nodes import DANGLING, LEADING, TRAILING, Comment
from solfmt.doc import BREAK_PARENT, Doc, hardline, join, line_suffix
from solfmt.source import has_newline, is_next_line_empty, is_previous_line_empty

# ── Attachment ───────────────────────────────────────────────────


def needs_attachment(data: Mapping[str, Any]) -> bool:
    """True for a root carrying the parser's flat, unplaced comment list."""
    comments = data.get("comments")
    if not comments:
        return False
    return not any(
        c.get("leading") or c.get("trailing") or "placement" in c for c in comments
    )


def _child_nodes(data: Mapping[str, Any]) -> list[dict]:
    children = []
    for key, value in data.items():
        if key in ("type", "range", "loc", "comments"):
            continue
        if isinstance(value, Mapping) and "type" in value:
            children.append(value)
        elif isinstance(value, list):
            children.extend(v for v in value if isinstance(v, Mapping) and "type" in v)
    located = [c for c in children if "range" in c]
    return sorted(located, key=lambda c: c["range"][0])


def _is_own_line(text: str, start: int) -> bool:
    line_start = text.rfind("\n", 0, start) + 1
    return not text[line_start:start].strip()


def _is_end_of_line(text: str, end: int) -> bool:
    newline = text.find("\n", end + 1)
    if newline < 0:
        newline = len(text)
    return not text[end + 1 : newline].strip()


def _place(root: dict, comment: dict, text: str) -> None:
    start, end = comment["range"]
    enclosing = root
    preceding = following = None
    descended = True
    while descended:
        descended = False
        preceding = following = None
        for child in _child_nodes(enclosing):
            child_start, child_end = child["range"]
            if child_start <= start and end <= child_end:
                enclosing = child
                descended = True
                break
            if child_end < start:
                preceding = child
            elif child_start > end and following is None:
                following = child

    if _is_own_line(text, start):
        order = ((following, LEADING), (preceding, TRAILING))
    elif _is_end_of_line(text, end):
        order = ((preceding, TRAILING), (following, LEADING))
    else:
        order = ((following, LEADING), (preceding, TRAILING))

    target, placement = enclosing, DANGLING
    for candidate, candidate_placement in order:
        if candidate is not None:
            target, placement = candidate, candidate_placement
            break
    target.setdefault("comments", []).append({**comment, "placement": placement})


def attach_comments(data: Mapping[str, Any], text: str) -> dict:
    """Return a copy of ``data`` with its flat comment list distributed."""
    root = copy.deepcopy(dict(data))
    comments = root.pop("comments", None) or []
    for comment in sorted(comments, key=lambda c: c["range"][0]):
        _place(root, dict(comment), text)
    return root


# ── Printing ─────────────────────────────────────────────────────


def comment_text(comment: Comment, text: str) -> str:
    """The comment exactly as written, without trailing blanks."""
    raw = comment.span.slice(text).replace("\r\n", "\n")
    return raw if comment.is_block else raw.rstrip()


def print_leading_comment(comment: Comment, text: str) -> Doc:
    contents = comment_text(comment, text)
    after = comment.span.end + 1
    if comment.is_block and not has_newline(text, after):
        return [contents, " "]
    parts: list = [contents, hardline]
    if is_next_line_empty(text, after):
        parts.append(hardline)
    return parts


def print_trailing_comment(comment: Comment, text: str) -> Doc:
    contents = comment_text(comment, text)
    start = comment.span.start
    if has_newline(text, start, backwards=True):
        blank = hardline if is_previous_line_empty(text, start) else ""
        return line_suffix([hardline, blank, contents])
    if comment.is_block:
        return [" ", contents]
    return [line_suffix([" ", contents]), BREAK_PARENT]


def print_dangling_comments(comments: list[Comment], text: str) -> Doc:
    """Own-line dangling comments, one per line."""
    return join(hardline, [comment_text(c, text) for c in comments])
