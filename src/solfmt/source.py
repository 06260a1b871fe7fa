"""Source text representation and span tracking for diagnostics."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Span:
    """An end-inclusive range of offsets within the original source text."""

    start: int
    end: int

    def slice(self, text: str) -> str:
        """Extract the text covered by the span."""
        return text[self.start : self.end + 1]

    def contains(self, other: Span) -> bool:
        return self.start <= other.start and other.end <= self.end

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


class SourceText:
    """Loaded source text with line access for diagnostics."""

    def __init__(self, text: str, name: str = "<input>") -> None:
        self.text = text
        self.name = name
        self.lines = text.splitlines()
        self._line_starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(i + 1)

    @classmethod
    def from_path(cls, path: Path) -> SourceText:
        # Text mode would rewrite "\r\n" and shift every offset after it
        return cls(path.read_bytes().decode("utf-8"), str(path))

    def line_col(self, offset: int) -> tuple[int, int]:
        """Return the 1-indexed (line, column) of an offset."""
        index = bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1].rstrip("\r")
        return ""

    def span_text(self, span: Span) -> str:
        return span.slice(self.text)


# ── Text scanning helpers ────────────────────────────────────────


def has_newline(text: str, index: int, *, backwards: bool = False) -> bool:
    """Is there a newline after (or before) ``index``, skipping blanks?"""
    if backwards:
        i = index - 1
        while i >= 0 and text[i] in " \t":
            i -= 1
        return i < 0 or text[i] in "\r\n"
    i = index
    while i < len(text) and text[i] in " \t":
        i += 1
    return i < len(text) and text[i] in "\r\n"


def _skip_newline(text: str, index: int) -> int | None:
    if text.startswith("\r\n", index):
        return index + 2
    if index < len(text) and text[index] in "\r\n":
        return index + 1
    return None


def is_next_line_empty(text: str, index: int) -> bool:
    """Is the line after the one containing ``index`` blank?

    Separators, same-line block comments and a trailing line comment are
    skipped first.
    """
    n = len(text)
    i = index
    while True:
        start = i
        while i < n and text[i] in " \t,;":
            i += 1
        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            if close >= 0 and "\n" not in text[i:close]:
                i = close + 2
        if i == start:
            break
    if text.startswith("//", i):
        newline = text.find("\n", i)
        i = n if newline < 0 else newline
    after = _skip_newline(text, i)
    return after is not None and has_newline(text, after)


def is_previous_line_empty(text: str, index: int) -> bool:
    """Is the line before the one containing ``index`` blank?"""
    i = index - 1
    while i >= 0 and text[i] in " \t":
        i -= 1
    if i < 0 or text[i] != "\n":
        return False
    i -= 1
    if i >= 0 and text[i] == "\r":
        i -= 1
    while i >= 0 and text[i] in " \t":
        i -= 1
    return i >= 0 and text[i] == "\n"
