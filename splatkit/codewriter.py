"""Accumulates lines of generated source text, indenting by brace depth."""

from __future__ import annotations

from collections.abc import Iterable

_INDENT = "    "


class CodeWriter:
    """Builds a block of code whose indentation follows ``{`` and ``}``."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._indent = 0

    def add_line(self, line: str) -> None:
        """Append ``line``; closing braces dedent it and opening braces indent what follows."""
        depth = self._indent - line.count("}")
        if depth < 0:
            raise ValueError(f"unbalanced closing brace in line: {line!r}")
        self._lines.append(_INDENT * depth + line + "\n")
        self._indent = depth + line.count("{")

    def add_lines(self, lines: Iterable[str]) -> None:
        """Append each of ``lines`` in turn."""
        for line in lines:
            self.add_line(line)

    def string(self) -> str:
        """The text written so far."""
        return "".join(self._lines)