"""Format runner over a shared grammar parse result."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, TextIO

from g4fmt.diagnostics import Diagnostic, collect_diagnostics
from g4fmt.format.formatter import GrammarFormatter
from g4fmt.format.options import FormatOptions
from g4fmt.format.walker import walk
from g4fmt.parser import ParsedGrammar, parse_result

if TYPE_CHECKING:
    from g4fmt.pipeline import FormatRunResult, GrammarParseResult

logger = logging.getLogger(__name__)


def format_to(parsed: ParsedGrammar, sink: TextIO, options: FormatOptions | None = None) -> list[Diagnostic]:
    """Format ``parsed`` into ``sink``; returns the formatter's diagnostics."""
    formatter = GrammarFormatter(parsed.stream, sink, options)
    walk(parsed.root, formatter)
    formatter.finish()
    return formatter.diagnostics


def format_with_diagnostics(
    parsed: ParsedGrammar,
    options: FormatOptions | None = None,
) -> tuple[str, list[Diagnostic]]:
    buffer = io.StringIO()
    diagnostics = format_to(parsed, buffer, options)
    return buffer.getvalue(), diagnostics


def format_tree(parsed: ParsedGrammar, options: FormatOptions | None = None) -> str:
    text, _ = format_with_diagnostics(parsed, options)
    return text


def run_format(
    text: str,
    options: FormatOptions | None = None,
    *,
    parse: GrammarParseResult | None = None,
) -> FormatRunResult:
    """Run formatting from a single parse lifecycle."""
    from g4fmt.pipeline.results import FormatRunResult

    resolved_parse = _resolve_parse(text, parse=parse)
    formatted_text, format_diagnostics = format_with_diagnostics(resolved_parse.parsed, options)
    diagnostics = collect_diagnostics(resolved_parse.diagnostics, format_diagnostics)
    changed = formatted_text != resolved_parse.source_text
    logger.debug("Formatted %d characters, changed=%s", len(resolved_parse.source_text), changed)

    return FormatRunResult(
        parse=resolved_parse,
        formatted_text=formatted_text,
        diagnostics=diagnostics,
        changed=changed,
    )


def _resolve_parse(text: str, *, parse: GrammarParseResult | None) -> GrammarParseResult:
    if parse is not None:
        if parse.source_text != text:
            raise ValueError("Provided parse result was built from a different text")
        return parse
    return parse_result(text)
