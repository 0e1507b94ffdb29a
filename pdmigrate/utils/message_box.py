"""Rounded, optionally coloured message boxes for terminal output."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

_TOP_LEFT = "╭"
_TOP_RIGHT = "╮"
_BOTTOM_LEFT = "╰"
_BOTTOM_RIGHT = "╯"
_HORIZONTAL = "─"
_VERTICAL = "│"

_RESET = "\x1b[0m"


class MessageType(Enum):
    """Kind of message a box shows; each has its own prefix and colour."""

    INFO = ("ℹ", 86)
    SUCCESS = ("✓", 42)
    WARNING = ("⚠", 178)
    ERROR = ("✗", 196)
    QUESTION = ("?", 99)

    @property
    def prefix(self) -> str:
        return self.value[0]

    @property
    def color(self) -> int:
        return self.value[1]


@dataclass(frozen=True)
class _Style:
    color: int
    enabled: bool

    def render(self, text: str, bold: bool = False) -> str:
        if not self.enabled:
            return text
        weight = "1;" if bold else ""
        return f"\x1b[{weight}38;5;{self.color}m{text}{_RESET}"


def _color_wanted() -> bool:
    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def wrap_text(text: str, max_width: int) -> list[str]:
    """Greedily wrap ``text`` on whitespace so lines fit within ``max_width``."""
    words = text.split()
    if not words:
        return [""]
    lines: list[str] = []
    current = words[0]
    for word in words[1:]:
        if len(current) + len(word) + 1 <= max_width:
            current += " " + word
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


class Box:
    """Builder for a message box with a title line and content lines."""

    def __init__(
        self,
        message_type: MessageType,
        title: str,
        width: int = 80,
        color: Optional[bool] = None,
    ) -> None:
        self.message_type = message_type
        self.title = title
        self.content: list[str] = []
        self.width = width
        self.color = color

    def add_line(self, text: str) -> "Box":
        """Append a line of text."""
        self.content.append(text)
        return self

    def add_bullet(self, text: str) -> "Box":
        """Append a bulleted line."""
        self.content.append(f"• {text}")
        return self

    def set_width(self, width: int) -> "Box":
        """Set the total width of the box."""
        self.width = width
        return self

    def render(self) -> str:
        """Return the box as a string."""
        enabled = _color_wanted() if self.color is None else self.color
        style = _Style(self.message_type.color, enabled)
        prefix = self.message_type.prefix
        width = self.width
        content_width = width - 6

        wrapped: list[str] = []
        for line in "\n".join([self.title, *self.content]).split("\n"):
            if len(line) <= content_width:
                wrapped.append(line)
            else:
                wrapped.extend(wrap_text(line, content_width))

        vertical = style.render(_VERTICAL)
        out = [style.render(_TOP_LEFT + _HORIZONTAL * (width - 2) + _TOP_RIGHT) + "\n"]

        first, *rest = wrapped
        padding = max(width - len(first) - 4 - len(prefix), 0)
        out.append(
            f"{vertical} {style.render(prefix, bold=True)} "
            f"{style.render(first)}{' ' * padding} {vertical}\n"
        )
        for line in rest:
            padding = max(width - len(line) - 4, 0)
            out.append(f"{vertical}   {line}{' ' * padding} {vertical}\n")

        out.append(style.render(_BOTTOM_LEFT + _HORIZONTAL * (width - 2) + _BOTTOM_RIGHT))
        return "".join(out)

    def __str__(self) -> str:
        return self.render()


def _quick(message_type: MessageType, title: str, lines: tuple[str, ...]) -> str:
    box = Box(message_type, title)
    for line in lines:
        box.add_line(line)
    return box.render()


def info(title: str, *args: str) -> str:
    """Render an informational box."""
    return _quick(MessageType.INFO, title, args)


def success(title: str, *args: str) -> str:
    """Render a success box."""
    return _quick(MessageType.SUCCESS, title, args)


def warning(title: str, *args: str) -> str:
    """Render a warning box."""
    return _quick(MessageType.WARNING, title, args)


def error(title: str, *args: str) -> str:
    """Render an error box."""
    return _quick(MessageType.ERROR, title, args)


def question(title: str, *args: str) -> str:
    """Render a question box."""
    return _quick(MessageType.QUESTION, title, args)