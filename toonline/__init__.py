"""Encode JSON-shaped data as TOON for language-model prompts."""

from toonline.models import (
    Array,
    Bool,
    Delimiter,
    EncodeOptions,
    Null,
    Number,
    Object,
    String,
    Value,
)
from toonline.normalize import InvalidInputError, make_json_decoder, normalize
from toonline.toon import encode, encode_json

__version__ = "0.1.0"

__all__ = [
    "Array",
    "Bool",
    "Delimiter",
    "EncodeOptions",
    "InvalidInputError",
    "Null",
    "Number",
    "Object",
    "String",
    "Value",
    "__version__",
    "encode",
    "encode_json",
    "make_json_decoder",
    "normalize",
]
