"""Grammar formatting engine."""

from g4fmt.format.context import FormatterState, Frame
from g4fmt.format.errors import FormatError, FormatWriteError
from g4fmt.format.formatter import GrammarFormatter
from g4fmt.format.hidden import HiddenTokenLocator, is_comment
from g4fmt.format.indent import IndentTracker
from g4fmt.format.options import FormatOptions
from g4fmt.format.runner import format_to, format_tree, format_with_diagnostics, run_format
from g4fmt.format.spacing import NO_SPACE_AFTER, NO_SPACE_BEFORE, needs_space
from g4fmt.format.walker import TreeListener, walk
from g4fmt.format.writer import OutputWriter

__all__ = [
    "NO_SPACE_AFTER",
    "NO_SPACE_BEFORE",
    "FormatError",
    "FormatOptions",
    "FormatWriteError",
    "FormatterState",
    "Frame",
    "GrammarFormatter",
    "HiddenTokenLocator",
    "IndentTracker",
    "OutputWriter",
    "TreeListener",
    "format_to",
    "format_tree",
    "format_with_diagnostics",
    "is_comment",
    "needs_space",
    "run_format",
    "walk",
]
