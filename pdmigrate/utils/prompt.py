"""Interactive yes/no confirmation before destructive operations."""

from __future__ import annotations

import sys
from typing import Sequence

from pdmigrate.utils.message_box import Box, MessageType


def _read_answer() -> bool:
    print("Continue? (yes/no): ", end="", flush=True)
    line = sys.stdin.readline()
    if not line.endswith("\n"):
        raise EOFError("failed to read user confirmation: unexpected end of input")
    return line.strip().lower() in ("yes", "y")


def prompt_for_confirmation(auto_approve: bool, action: str, details: str) -> bool:
    """Ask the user to confirm ``action``; approved at once when ``auto_approve``."""
    if auto_approve:
        return True
    box = Box(MessageType.WARNING, f"About to {action}").add_line(f"Details: {details}")
    print(box.render())
    return _read_answer()


def prompt_for_multiple_items(
    auto_approve: bool, action: str, items: Sequence[str]
) -> bool:
    """Ask the user to confirm ``action`` on each of ``items``."""
    if auto_approve:
        return True
    box = Box(
        MessageType.WARNING,
        f"About to {action} the following {len(items)} item(s):",
    )
    for number, item in enumerate(items, start=1):
        box.add_line(f"{number}. {item}")
    print(box.render())
    return _read_answer()