"""Output writer."""

from typing import TextIO

from g4fmt.format.errors import FormatWriteError


class OutputWriter:
    """Appends formatted text to a sink.

    Indentation after a line break is written lazily, right before the next
    text, using the depth captured at the break. Blank lines therefore carry no
    trailing whitespace, and a break requested before any text was written is
    dropped.
    """

    def __init__(self, sink: TextIO, indent_unit: str = "   ") -> None:
        self._sink = sink
        self._indent_unit = indent_unit
        self._has_output = False
        self._pending_indent: int | None = None

    @property
    def has_output(self) -> bool:
        return self._has_output

    def write(self, text: str) -> None:
        if not text:
            return
        if self._pending_indent is not None:
            self._put(self._indent_unit * self._pending_indent)
            self._pending_indent = None
        self._put(text)
        self._has_output = True

    def line_break(self, depth: int) -> None:
        if not self._has_output:
            return
        self._put("\n")
        self._pending_indent = depth

    def _put(self, text: str) -> None:
        try:
            self._sink.write(text)
        except (OSError, ValueError) as exc:
            raise FormatWriteError(f"Failed to write formatted output: {exc}") from exc
