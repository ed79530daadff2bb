"""TOON (Token-Oriented Object Notation) encoder entry points."""

from __future__ import annotations

import json
from typing import Any

from toonline.encoder import encode_value
from toonline.models import EncodeOptions
from toonline.normalize import normalize, parse_json


def encode(obj: Any, options: EncodeOptions | None = None) -> str:
    """Encode a Python object into TOON format.

    The object is normalized first (dataclasses, dates, decimals, sets and
    so on become plain JSON-shaped values).

    Args:
        obj: The object to encode.
        options: Encoding options; defaults to ``EncodeOptions()``.

    Returns:
        TOON-formatted string (no trailing newline).
    """
    return encode_value(normalize(obj), options)


def encode_json(
    text: str,
    options: EncodeOptions | None = None,
    *,
    decoder: json.JSONDecoder | None = None,
) -> str:
    """Encode a JSON document into TOON format.

    Args:
        text: The JSON text.
        options: Encoding options; defaults to ``EncodeOptions()``.
        decoder: Optional decoder from ``make_json_decoder`` to reuse.

    Returns:
        TOON-formatted string (no trailing newline).

    Raises:
        InvalidInputError: If the text is blank or not valid JSON.
    """
    return encode_value(parse_json(text, decoder), options)
