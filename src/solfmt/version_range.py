"""Semantic version range canonicalization for pragma directives.

A range is a set of comparator sets joined by ``||``; the comparators of a
set are space separated and must all hold. ``nodesemver`` desugars the
shorthand forms (``^``, ``~``, ``x`` wildcards, partial versions and hyphen
ranges) into primitive comparators, so two ranges with the same meaning
print the same:

    >>> canonicalize_range("^0.8.0 || 0.7.x")
    '>=0.8.0 <0.9.0 || >=0.7.0 <0.8.0'
"""

from __future__ import annotations

import re

import nodesemver

from solfmt.errors import InvalidVersionRange

_OR = re.compile(r"\s*\|\|\s*")


def canonicalize_range(text: str) -> str:
    """Return the canonical form of a version range.

    Raises InvalidVersionRange when ``text`` is not a valid range.
    """
    if not text.strip():
        raise InvalidVersionRange(text, reason="empty range")
    # nodesemver reads a dangling "||" as a match-anything set
    if any(not part for part in _OR.split(text.strip())):
        raise InvalidVersionRange(text, reason="empty comparator set")

    canonical = nodesemver.valid_range(text, False)
    if canonical is None:
        raise InvalidVersionRange(text, reason="not a semver range")
    return " || ".join(part or "*" for part in _OR.split(canonical.strip()))


def normalize_pragma_value(value: str) -> str:
    """Respace comparison operators in a pragma value, then canonicalize
    it when more than one token remains."""
    value = re.sub(r"([<>=])", r" \1", value)
    value = value.replace("< =", "<=").replace("> =", ">=").strip()
    if len(value.split(" ")) > 1:
        value = canonicalize_range(value)
    return value
