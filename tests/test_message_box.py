import re

import pytest

from pdmigrate.utils.message_box import (
    Box,
    MessageType,
    error,
    info,
    question,
    success,
    warning,
    wrap_text,
)

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _plain(box: Box) -> list[str]:
    box.color = False
    return box.render().split("\n")


def test_borders_span_default_width():
    lines = _plain(Box(MessageType.INFO, "Title"))
    assert len(lines[0]) == 80
    assert lines[0][0] == "╭" and lines[0][-1] == "╮"
    assert lines[-1][0] == "╰" and lines[-1][-1] == "╯"
    assert len(lines[-1]) == 80


def test_set_width_changes_border_length():
    box = Box(MessageType.INFO, "Title")
    assert box.set_width(40) is box
    lines = _plain(box)
    assert len(lines[0]) == 40
    assert len(lines[-1]) == 40


@pytest.mark.parametrize(
    "message_type, prefix",
    [
        (MessageType.INFO, "ℹ"),
        (MessageType.SUCCESS, "✓"),
        (MessageType.WARNING, "⚠"),
        (MessageType.ERROR, "✗"),
        (MessageType.QUESTION, "?"),
    ],
)
def test_title_line_carries_prefix(message_type, prefix):
    lines = _plain(Box(message_type, "Hello"))
    assert lines[1].startswith(f"│ {prefix} Hello")
    assert lines[1].rstrip().endswith("│")


def test_content_lines_are_indented():
    box = Box(MessageType.WARNING, "About")
    assert box.add_line("first") is box
    box.add_bullet("second")
    lines = _plain(box)
    assert lines[2].startswith("│   first")
    assert lines[3].startswith("│   • second")
    assert all(line.endswith("│") for line in lines[1:-1])


def test_long_lines_are_wrapped_to_content_width():
    words = [f"word{i}" for i in range(40)]
    box = Box(MessageType.INFO, "T").add_line(" ".join(words))
    lines = _plain(box)
    body = [line[4:].rstrip()[:-1].rstrip() for line in lines[2:-1]]
    assert len(body) > 1
    assert all(len(part) <= 80 - 6 for part in body)
    assert " ".join(body).split() == words


def test_colored_render_matches_plain_after_stripping_codes():
    colored = Box(MessageType.ERROR, "Boom", color=True).add_line("detail").render()
    plain = Box(MessageType.ERROR, "Boom", color=False).add_line("detail").render()
    assert "\x1b[" in colored
    assert ANSI.sub("", colored) == plain


@pytest.mark.parametrize(
    "func, message_type",
    [
        (info, MessageType.INFO),
        (success, MessageType.SUCCESS),
        (warning, MessageType.WARNING),
        (error, MessageType.ERROR),
        (question, MessageType.QUESTION),
    ],
)
def test_convenience_functions(func, message_type):
    rendered = ANSI.sub("", func("Title", "one", "two"))
    expected = Box(message_type, "Title", color=False).add_line("one").add_line("two").render()
    assert rendered == expected


def test_wrap_text_empty_gives_single_empty_line():
    assert wrap_text("", 10) == [""]
    assert wrap_text("   ", 10) == [""]


def test_wrap_text_greedy():
    assert wrap_text("a b c", 3) == ["a b", "c"]


def test_wrap_text_keeps_long_word_whole():
    result = wrap_text("short averyveryverylongword end", 8)
    assert "averyveryverylongword" in result
    assert " ".join(result).split() == ["short", "averyveryverylongword", "end"]