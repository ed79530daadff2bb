"""Conversion of Python objects and JSON text into the TOON value tree."""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import json
import logging
import math
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from toonline.models import (
    SCALAR_TYPES,
    Array,
    Bool,
    Null,
    Number,
    Object,
    String,
    Value,
)

logger = logging.getLogger(__name__)

_VALUE_TYPES = (*SCALAR_TYPES, Array, Object)


class InvalidInputError(ValueError):
    """Raised when JSON text is blank or cannot be parsed."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name!r}")


def make_json_decoder() -> json.JSONDecoder:
    """Build the decoder used by :func:`parse_json`.

    Floats are read as ``Decimal`` so their text survives exactly, and the
    non-standard ``NaN``/``Infinity`` constants are rejected.
    """
    return json.JSONDecoder(
        parse_float=decimal.Decimal,
        parse_constant=_reject_constant,
    )


def parse_json(text: str, decoder: json.JSONDecoder | None = None) -> Value:
    """Parse JSON text into a value tree.

    Args:
        text: The JSON document.
        decoder: Decoder to use; callers encoding many documents can build one
            with :func:`make_json_decoder` and pass it in.

    Returns:
        The normalized value tree.

    Raises:
        InvalidInputError: If the text is blank, not valid JSON, or nested
            deeper than the interpreter's recursion limit.
    """
    if not text or not text.strip():
        raise InvalidInputError("Invalid JSON: input is blank")
    if decoder is None:
        decoder = make_json_decoder()
    try:
        return normalize(decoder.decode(text))
    except ValueError as exc:
        raise InvalidInputError(f"Invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise InvalidInputError("Invalid JSON: document is nested too deeply") from exc


def normalize(obj: Any) -> Value:
    """Convert an arbitrary Python object into a value tree.

    Handlers are tried in order; the first one that returns a value wins.
    Objects nothing recognizes become null.
    """
    for handler in _HANDLERS:
        result = handler(obj)
        if result is not None:
            return result
    logger.debug("No normalizer for %s; encoding as null", type(obj).__name__)
    return Null()


def format_float(value: float) -> str:
    """Render a finite float as plain decimal text without an exponent."""
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        return format_decimal(decimal.Decimal(text))
    return text


def format_decimal(value: decimal.Decimal) -> str:
    """Render a finite Decimal as plain text with no trailing zeros."""
    if value.is_zero():
        return "0"
    text = format(value.normalize(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _try_value(obj: Any) -> Value | None:
    if isinstance(obj, _VALUE_TYPES):
        return obj
    return None


def _try_primitive(obj: Any) -> Value | None:
    if obj is None:
        return Null()
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, int):
        return Number(str(int(obj)))
    if isinstance(obj, float):
        if not math.isfinite(obj):
            return Null()
        return Number(format_float(obj))
    return None


def _try_decimal(obj: Any) -> Value | None:
    if not isinstance(obj, decimal.Decimal):
        return None
    if not obj.is_finite():
        return Null()
    return Number(format_decimal(obj))


def _try_temporal(obj: Any) -> Value | None:
    # datetime is a subclass of date, so one check covers both
    if isinstance(obj, (datetime.date, datetime.time)):
        return String(obj.isoformat())
    return None


def _try_enum(obj: Any) -> Value | None:
    if isinstance(obj, enum.Enum):
        return normalize(obj.value)
    return None


def _try_mapping(obj: Any) -> Value | None:
    if not isinstance(obj, Mapping):
        return None
    return Object(tuple((str(key), normalize(value)) for key, value in obj.items()))


def _try_iterable(obj: Any) -> Value | None:
    if isinstance(obj, (str, bytes, bytearray)) or not isinstance(obj, Iterable):
        return None
    return Array(tuple(normalize(item) for item in obj))


def _try_dataclass(obj: Any) -> Value | None:
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        return None
    return Object(
        tuple(
            (field.name, normalize(getattr(obj, field.name)))
            for field in dataclasses.fields(obj)
        )
    )


_HANDLERS: tuple[Callable[[Any], Value | None], ...] = (
    _try_value,
    _try_enum,
    _try_primitive,
    _try_decimal,
    _try_temporal,
    _try_mapping,
    _try_dataclass,
    _try_iterable,
)
