"""Indented line accumulator used while encoding nested structures."""

from __future__ import annotations


class LineWriter:
    """Collects lines, each prefixed with ``depth`` copies of the indent unit."""

    def __init__(self, indent: int) -> None:
        self._lines: list[str] = []
        self._indent_unit = " " * indent

    def push(self, depth: int, content: str) -> None:
        self._lines.append(f"{self._indent_unit * depth}{content}")

    def render(self) -> str:
        """Join all lines with newlines (no trailing newline)."""
        return "\n".join(self._lines)

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self._lines)
