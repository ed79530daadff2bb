"""Quoting and escaping rules for TOON scalars and keys."""

from __future__ import annotations

import re

LIST_ITEM_MARKER = "-"

_LOOKS_NUMERIC = re.compile(
    r"-?[0-9]+(?:\.[0-9]+)?(?:e[+-]?[0-9]+)?", re.IGNORECASE
)
_LOOKS_OCTAL = re.compile(r"0[0-9]+")
_UNQUOTED_KEY = re.compile(r"[A-Za-z_][A-Za-z0-9_.]*")
_STRUCTURAL = re.compile(r"[\[\]{}]")
_CONTROL = re.compile(r"[\n\r\t]")
_KEYWORDS = frozenset({"true", "false", "null"})


def is_safe_unquoted(value: str, delimiter: str) -> bool:
    """Decide whether a string value can be written without quotes.

    Args:
        value: The raw string value.
        delimiter: The active delimiter; values containing it must be quoted.

    Returns:
        True if the value is unambiguous when written bare.
    """
    if not value:
        return False

    if value != value.strip():
        return False

    if value in _KEYWORDS:
        return False

    if _LOOKS_NUMERIC.fullmatch(value) or _LOOKS_OCTAL.fullmatch(value):
        return False

    if ":" in value or '"' in value or "\\" in value:
        return False

    if _STRUCTURAL.search(value) or _CONTROL.search(value):
        return False

    if delimiter in value:
        return False

    return not value.startswith(LIST_ITEM_MARKER)


def is_valid_unquoted_key(key: str) -> bool:
    """Return True if an object key can be written without quotes."""
    return _UNQUOTED_KEY.fullmatch(key) is not None


def escape(value: str) -> str:
    """Apply TOON escape rules; backslashes first so later escapes survive."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return escaped.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")


def quote(value: str) -> str:
    """Double-quote a string with TOON escape rules."""
    return f'"{escape(value)}"'
