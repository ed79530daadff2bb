"""Scalar, key and header rendering for TOON output."""

from __future__ import annotations

from collections.abc import Iterable

from toonline.models import Bool, Number, String, Value
from toonline.strings import is_safe_unquoted, is_valid_unquoted_key, quote

DEFAULT_DELIMITER = ","


def encode_primitive(value: Value, delimiter: str) -> str:
    """Render a scalar value; anything that is not bool/number/string is null."""
    match value:
        case Bool(value=flag):
            return "true" if flag else "false"
        case Number(text=text):
            return text
        case String(value=text):
            return encode_string_literal(text, delimiter)
        case _:
            return "null"


def encode_string_literal(value: str, delimiter: str) -> str:
    """Encode a string value, quoting if necessary per TOON rules.

    Args:
        value: The raw string value.
        delimiter: The active delimiter.

    Returns:
        The value, possibly double-quoted with escapes applied.
    """
    if is_safe_unquoted(value, delimiter):
        return value
    return quote(value)


def encode_key(key: str) -> str:
    """Encode an object key, quoting it unless it is identifier-like."""
    if is_valid_unquoted_key(key):
        return key
    return quote(key)


def join_encoded_values(values: Iterable[Value], delimiter: str) -> str:
    return delimiter.join(encode_primitive(v, delimiter) for v in values)


def format_header(
    length: int,
    key: str | None = None,
    fields: list[str] | None = None,
    delimiter: str = DEFAULT_DELIMITER,
    length_marker: bool = False,
) -> str:
    """Format an array header such as ``items[2]{sku,qty}:``.

    Args:
        length: Number of elements in the array.
        key: Optional key the array is attached to.
        fields: Column names for a tabular array.
        delimiter: The active delimiter; non-comma delimiters are echoed
            inside the brackets.
        length_marker: Prefix the length with ``#``.

    Returns:
        The header, ending in ``:`` with no trailing space.
    """
    parts: list[str] = []
    if key is not None:
        parts.append(encode_key(key))

    marker = "#" if length_marker else ""
    suffix = delimiter if delimiter != DEFAULT_DELIMITER else ""
    parts.append(f"[{marker}{length}{suffix}]")

    if fields:
        parts.append(f"{{{delimiter.join(encode_key(f) for f in fields)}}}")

    parts.append(":")
    return "".join(parts)
