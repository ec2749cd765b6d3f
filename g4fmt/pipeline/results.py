"""Pipeline run result carriers for tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from g4fmt.diagnostics import Diagnostic, has_errors
from g4fmt.pipeline.result import GrammarParseResult


@dataclass(frozen=True, slots=True)
class FormatRunResult:
    """Result of formatting from a shared parse result."""

    parse: GrammarParseResult
    formatted_text: str
    diagnostics: list[Diagnostic]
    changed: bool

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)
