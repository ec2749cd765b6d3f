"""Shared parse carriers and lazy pipeline entrypoint exports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from g4fmt.pipeline.result import GrammarParseResult
from g4fmt.pipeline.results import FormatRunResult

if TYPE_CHECKING:
    from g4fmt.format.options import FormatOptions


def run_format(
    text: str,
    options: FormatOptions | None = None,
    *,
    parse: GrammarParseResult | None = None,
) -> FormatRunResult:
    from g4fmt.format.runner import run_format as _run_format

    return _run_format(text, options=options, parse=parse)


__all__ = [
    "FormatRunResult",
    "GrammarParseResult",
    "run_format",
]
