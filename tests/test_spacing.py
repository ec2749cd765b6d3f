import io
import logging

import pytest

from g4fmt.format import FormatOptions, FormatWriteError, IndentTracker, OutputWriter, needs_space
from g4fmt.syntax import Category


@pytest.mark.parametrize(
    ("previous", "text", "expected"),
    [
        ("(", "x", False),
        ("x", ";", False),
        ("x", ")", False),
        ("x", "?", False),
        ("x", "*", False),
        ("x", "y", True),
        ("x", "+", True),
        (")", "(", True),
        (None, "x", False),
    ],
)
def test_spacing_table(previous: str | None, text: str, expected: bool) -> None:
    assert needs_space(previous, text) is expected


def test_no_space_at_line_start() -> None:
    assert needs_space("x", "y", at_line_start=True) is False


def test_action_blocks_never_get_spaces() -> None:
    assert needs_space("x", "y", Category.ACTION_BLOCK) is False
    assert needs_space("x", "y", Category.RULE_SPEC) is True


def test_writer_indents_lazily_and_drops_leading_breaks() -> None:
    sink = io.StringIO()
    writer = OutputWriter(sink, "  ")

    writer.line_break(1)
    assert writer.has_output is False

    writer.write("a")
    writer.line_break(1)
    writer.line_break(2)
    writer.write("b")

    assert sink.getvalue() == "a\n\n    b"


def test_writer_ignores_empty_text() -> None:
    sink = io.StringIO()
    writer = OutputWriter(sink)

    writer.write("")

    assert writer.has_output is False
    assert sink.getvalue() == ""


def test_writer_wraps_sink_failures() -> None:
    sink = io.StringIO()
    sink.close()
    writer = OutputWriter(sink)

    with pytest.raises(FormatWriteError):
        writer.write("x")


def test_indent_tracker_clamps_at_zero(caplog: pytest.LogCaptureFixture) -> None:
    tracker = IndentTracker()
    tracker.increment()
    tracker.decrement()

    with caplog.at_level(logging.WARNING, logger="g4fmt.format.indent"):
        tracker.decrement()

    assert tracker.depth == 0
    assert "below zero" in caplog.text


def test_indent_tracker_restore() -> None:
    tracker = IndentTracker(2)
    tracker.restore(-3)
    assert tracker.depth == 0
    tracker.restore(4)
    assert tracker.depth == 4


def test_format_options() -> None:
    assert FormatOptions().indent_unit == "   "
    assert FormatOptions(indent_width=0).indent_unit == ""
    with pytest.raises(ValueError):
        FormatOptions(indent_width=-1)
