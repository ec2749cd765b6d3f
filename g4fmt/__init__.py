"""Pretty printer for ANTLR v4 grammar files."""

from g4fmt.format import FormatOptions, format_tree
from g4fmt.parser import parse, parse_result
from g4fmt.pipeline import FormatRunResult, GrammarParseResult, run_format

__all__ = [
    "FormatOptions",
    "FormatRunResult",
    "GrammarParseResult",
    "format_tree",
    "parse",
    "parse_result",
    "run_format",
]
