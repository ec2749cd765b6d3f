from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class TextSize:
    """Offset into grammar source."""

    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("TextSize cannot be negative")

    def __repr__(self) -> str:
        return f"TextSize({self.value})"


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """Half-open ``[start, end)`` span of source text, ``start <= end``."""

    _start: int
    _end: int

    def __post_init__(self):
        if self._start < 0 or self._start > self._end:
            raise ValueError(f"Invalid text range ({self._start}, {self._end})")

    @staticmethod
    def empty(offset: TextSize) -> "TextRange":
        return TextRange(offset.value, offset.value)

    @property
    def start(self) -> TextSize:
        return TextSize(self._start)

    @property
    def end(self) -> TextSize:
        return TextSize(self._end)

    def as_tuple(self) -> tuple[int, int]:
        return (self._start, self._end)

    def cover(self, other: "TextRange") -> "TextRange":
        return TextRange(min(self._start, other._start), max(self._end, other._end))

    def __repr__(self) -> str:
        return f"TextRange({self._start}, {self._end})"


def offset_to_line_and_column(source: str, offset: TextSize) -> tuple[int, int]:
    """
    Return the (1-indexed) line and column of an offset.

    Offsets past the end of the text point just after the last character of the
    last line.
    """
    remaining = offset.value
    lineno = 0
    line = ""
    for lineno, line in enumerate(source.splitlines(keepends=True)):
        if remaining < len(line):
            return lineno + 1, remaining + 1
        remaining -= len(line)
    return lineno + 1, len(line) + 1
