"""TOML config loading for .solfmt.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_NAMES = (".solfmt.toml", "solfmt.toml")

EXPLICIT_TYPES = ("always", "never", "preserve")
END_OF_LINE = ("lf", "crlf", "cr", "auto")


@dataclass(frozen=True)
class FormatOptions:
    print_width: int = 80
    tab_width: int = 4
    use_tabs: bool = False
    single_quote: bool = False
    bracket_spacing: bool = False
    explicit_types: str = "always"
    end_of_line: str = "lf"

    def __post_init__(self) -> None:
        if self.explicit_types not in EXPLICIT_TYPES:
            raise ValueError(
                f"explicit_types must be one of {', '.join(EXPLICIT_TYPES)}, "
                f"got {self.explicit_types!r}"
            )
        if self.end_of_line not in END_OF_LINE:
            raise ValueError(
                f"end_of_line must be one of {', '.join(END_OF_LINE)}, "
                f"got {self.end_of_line!r}"
            )
        if self.print_width < 1 or self.tab_width < 0:
            raise ValueError("print_width must be positive and tab_width non-negative")

    def merged(self, **overrides: Any) -> FormatOptions:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find a solfmt config. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        for name in CONFIG_NAMES:
            candidate = path / name
            if candidate.exists():
                logger.debug("using config %s", candidate)
                return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError("No .solfmt.toml found in any parent directory")
        path = parent


def load_config(path: Path) -> FormatOptions:
    """Parse the [format] table of a config file into FormatOptions."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    table = data.get("format", {})
    known = {f.name for f in fields(FormatOptions)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ValueError(f"unknown [format] keys in {path}: {', '.join(unknown)}")

    return FormatOptions(**table)
