"""Numeric literal canonicalization."""

from __future__ import annotations

import re

# Order matters: each rewrite assumes the previous ones ran.
_REWRITES: tuple[tuple[re.Pattern[str], str], ...] = (
    # Remove unnecessary plus and zeroes from scientific notation.
    (re.compile(r"^([+-]?[\d_.]+e)(?:\+|(-))?0*(\d)"), r"\1\2\3"),
    # Remove unnecessary scientific notation (1x).
    (re.compile(r"^([+-]?[\d_.]+)e[+-]?0+$"), r"\1"),
    # Make sure numbers always start with a digit.
    (re.compile(r"^([+-])?\."), r"\g<1>0."),
    # Remove extraneous trailing decimal zeroes.
    (re.compile(r"(\.\d+?)0+(?=e|$)"), r"\1"),
    # Remove trailing dot.
    (re.compile(r"\.(?=e|$)"), ""),
)


def is_hex(value: str) -> bool:
    return value[:2] in ("0x", "0X")


def print_number(value: str) -> str:
    """Canonicalize a decimal or scientific literal; hex literals pass through.

    Hex digits are left alone since address literals carry a checksum in
    their letter case.
    """
    if is_hex(value):
        return value
    value = value.lower()
    for pattern, replacement in _REWRITES:
        value = pattern.sub(replacement, value, count=1)
    return value
