"""Text offsets and ranges."""

from g4fmt.text.text import TextRange, TextSize, offset_to_line_and_column

__all__ = [
    "TextRange",
    "TextSize",
    "offset_to_line_and_column",
]
