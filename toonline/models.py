"""Core data structures for toonline."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class Delimiter(enum.Enum):
    """Separator used for inline arrays and tabular rows."""

    COMMA = ","
    TAB = "\t"
    PIPE = "|"


@dataclass(frozen=True)
class EncodeOptions:
    """Settings for a single encode call.

    Attributes:
        indent: Spaces per indentation level.
        delimiter: Separator for inline arrays and tabular rows.
        length_marker: Render array lengths as ``[#N]`` instead of ``[N]``.
    """

    indent: int = 2
    delimiter: Delimiter = Delimiter.COMMA
    length_marker: bool = False

    def __post_init__(self) -> None:
        if self.indent < 1:
            raise ValueError(f"indent must be a positive integer, got {self.indent}")


@dataclass(frozen=True)
class Null:
    """JSON null."""


@dataclass(frozen=True)
class Bool:
    """JSON boolean."""

    value: bool


@dataclass(frozen=True)
class Number:
    """A finite number, already rendered as plain decimal text."""

    text: str


@dataclass(frozen=True)
class String:
    """JSON string."""

    value: str


@dataclass(frozen=True)
class Array:
    """Ordered sequence of values."""

    items: tuple[Value, ...] = ()


@dataclass(frozen=True)
class Object:
    """Ordered mapping of string keys to values; entry order is output order."""

    entries: tuple[tuple[str, Value], ...] = ()

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]


Value = Union[Null, Bool, Number, String, Array, Object]

SCALAR_TYPES = (Null, Bool, Number, String)


def is_scalar(value: Value) -> bool:
    """Return True for null, boolean, number and string values."""
    return isinstance(value, SCALAR_TYPES)
