"""Quote normalization for string and hex literal fragments."""

from __future__ import annotations

import re

from solfmt.config import FormatOptions

_DOUBLE = '"'
_SINGLE = "'"

# An escape sequence, or a bare quote character
_QUOTE_OR_ESCAPE = re.compile(r"""\\(.)|(["'])""", re.DOTALL)


def make_string(raw: str, enclosing_quote: str) -> str:
    """Wrap ``raw`` fragment content in ``enclosing_quote``.

    Escaped quotes of the other kind are unescaped, bare enclosing quotes
    are escaped, and every other escape sequence is kept as written.
    """
    other_quote = _SINGLE if enclosing_quote == _DOUBLE else _DOUBLE

    def replace(match: re.Match[str]) -> str:
        escaped, quote = match.group(1), match.group(2)
        if escaped == other_quote:
            return escaped
        if quote == enclosing_quote:
            return "\\" + quote
        if quote:
            return quote
        return "\\" + escaped

    return enclosing_quote + _QUOTE_OR_ESCAPE.sub(replace, raw) + enclosing_quote


def print_string(raw: str, options: FormatOptions) -> str:
    """Quote a fragment with the preferred quote unless that needs more escapes."""
    preferred = _SINGLE if options.single_quote else _DOUBLE
    alternate = _DOUBLE if preferred == _SINGLE else _SINGLE

    enclosing = preferred
    if preferred in raw or alternate in raw:
        if raw.count(preferred) > raw.count(alternate):
            enclosing = alternate
    return make_string(raw, enclosing)
