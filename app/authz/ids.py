"""
User id comparison policy.

Ids are compared ordinally and case-insensitively, one character at a time.
Each character maps to its uppercase form when ``str.upper`` yields a single
character. When the full uppercase expands (``"ᾳ"`` -> ``"ΑΙ"``) the character
maps to its single-character lowercase form instead, so ``"ᾳ"`` and ``"ᾼ"``
compare equal; a character with neither stays as is (``"ß"``). Python string
methods never consult the process locale, so the result is the same on every
host. ``str.casefold`` is not used: it expands characters (``"ß"`` -> ``"ss"``)
and would make distinct ids equal.
"""

from __future__ import annotations


def _fold_char(ch: str) -> str:
    upper = ch.upper()
    if len(upper) == 1:
        return upper
    lower = ch.lower()
    return lower if len(lower) == 1 else ch


def _upper_ordinal(value: str) -> str:
    return "".join(_fold_char(ch) for ch in value)


def ids_equal(left: str | None, right: str | None) -> bool:
    """Return True when both ids are present and equal ignoring case."""
    if left is None or right is None:
        return False
    if len(left) != len(right):
        return False
    return _upper_ordinal(left) == _upper_ordinal(right)
