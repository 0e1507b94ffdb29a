"""Box-drawn tables for command-line output."""

from __future__ import annotations

from typing import Sequence


class TableFormatter:
    """A table whose columns widen to fit the widest cell."""

    def __init__(self, headers: Sequence[str]) -> None:
        self.headers = list(headers)
        self.rows: list[list[str]] = []
        self._widths = [len(header) for header in self.headers]

    def add_row(self, row: Sequence[str]) -> None:
        """Add a row; rows whose length differs from the headers are ignored."""
        if len(row) != len(self.headers):
            return
        row = list(row)
        self.rows.append(row)
        self._widths = [max(width, len(cell)) for width, cell in zip(self._widths, row)]

    def _border(self, left: str, middle: str, right: str) -> str:
        return left + middle.join("─" * (width + 2) for width in self._widths) + right + "\n"

    def _row(self, cells: Sequence[str]) -> str:
        body = "".join(
            f" {cell.ljust(width)} │" for cell, width in zip(cells, self._widths)
        )
        return "│" + body + "\n"

    def __str__(self) -> str:
        parts = [
            self._border("┌", "┬", "┐"),
            self._row(self.headers),
            self._border("├", "┼", "┤"),
        ]
        parts.extend(self._row(row) for row in self.rows)
        parts.append(self._border("└", "┴", "┘"))
        return "".join(parts)