"""Fluent builder for plain-text reports."""

from __future__ import annotations


class ReportBuilder:
    """Accumulates report lines; every adder returns the builder for chaining."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._separator = "="
        self._width = 40

    def with_separator(self, separator: str) -> "ReportBuilder":
        """Set the character used for separator lines."""
        self._separator = separator
        return self

    def with_width(self, width: int) -> "ReportBuilder":
        """Set the width of separator lines."""
        self._width = width
        return self

    def _rule(self) -> str:
        return self._separator * self._width

    def header(self, text: str) -> "ReportBuilder":
        """Add a title followed by a separator line."""
        self._lines += [text, self._rule()]
        return self

    def section(self, title: str) -> "ReportBuilder":
        """Add a section title preceded by a blank line."""
        self._lines.append(f"\n{title}")
        return self

    def add_line(self, text: str) -> "ReportBuilder":
        self._lines.append(text)
        return self

    def add_bullet(self, text: str) -> "ReportBuilder":
        self._lines.append(f"• {text}")
        return self

    def add_numbered(self, number: int, text: str) -> "ReportBuilder":
        self._lines.append(f"{number}. {text}")
        return self

    def add_key_value(self, key: str, value: str) -> "ReportBuilder":
        self._lines.append(f"{key}: {value}")
        return self

    def add_indented(self, text: str, level: int) -> "ReportBuilder":
        """Add ``text`` indented by two spaces per level."""
        self._lines.append("  " * level + text)
        return self

    def add_separator(self) -> "ReportBuilder":
        self._lines.append(self._rule())
        return self

    def add_empty_line(self) -> "ReportBuilder":
        self._lines.append("")
        return self

    def build(self) -> str:
        """Return the report as one newline-joined string."""
        return "\n".join(self._lines)

    def build_lines(self) -> list[str]:
        """Return a copy of the report lines."""
        return list(self._lines)

    def __str__(self) -> str:
        return self.build()