"""Formatting errors and Rust-style colored diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from solfmt.source import SourceText, Span


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific source location."""

    span: Span
    message: str
    style: str = "primary"  # "primary" or "secondary"


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and notes."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic, source: SourceText | None = None) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        # Header: error[E001]: message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            if source is None:
                if label.message:
                    lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} {label.message}")
                continue

            start_line, start_col = source.line_col(label.span.start)
            end_line, end_col = source.line_col(label.span.end)
            lines.append(
                f"  {self._c(_BLUE)}-->{self._c(_RESET)} "
                f"{source.name}:{start_line}:{start_col}"
            )
            gutter = f"{start_line:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")
            lines.append(
                f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} "
                f"{source.line_at(start_line)}"
            )

            # Carets only for single-line spans
            if start_line == end_line:
                caret_len = max(1, end_col - start_col + 1)
                padding = " " * (start_col - 1)
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                    f"{padding}{self._c(color)}{'^' * caret_len}{self._c(_RESET)}"
                )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


class FormatError(Exception):
    """Base class for failures that abort a format call."""

    code = "E000"

    def __init__(self, message: str, span: Span | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.span = span

    def notes(self) -> list[str]:
        return []

    def to_diagnostic(self) -> Diagnostic:
        labels = []
        if self.span is not None:
            labels.append(DiagnosticLabel(self.span, ""))
        return Diagnostic(
            severity=Severity.ERROR,
            code=self.code,
            message=self.message,
            labels=labels,
            notes=self.notes(),
        )


class UnknownNodeType(FormatError):
    """The node printer registry has no rule for a node type."""

    code = "E001"

    def __init__(self, node_type: object, span: Span | None = None) -> None:
        super().__init__(f"unknown node type: {node_type!r}", span)
        self.node_type = node_type

    def notes(self) -> list[str]:
        return ["the AST was produced by a parser for an unsupported grammar version"]


class InvalidVersionRange(FormatError):
    """A pragma version expression could not be canonicalized."""

    code = "E002"

    def __init__(self, text: str, span: Span | None = None, reason: str = "") -> None:
        message = f"invalid version range: {text!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, span)
        self.text = text
        self.reason = reason


class AstLoadError(FormatError):
    """The AST input is not shaped like parser output."""

    code = "E003"
