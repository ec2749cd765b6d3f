"""Parse carrier shared by tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from g4fmt.diagnostics import has_errors
from g4fmt.parser.tree_sink import ParsedGrammar

if TYPE_CHECKING:
    from g4fmt.cst import SyntaxNode
    from g4fmt.diagnostics import Diagnostic
    from g4fmt.lexer import TokenStream


@dataclass(slots=True)
class GrammarParseResult:
    """Parse once, consume many times (formatting, dumps, checks)."""

    source_text: str
    parsed: ParsedGrammar

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.parsed.diagnostics

    @property
    def has_errors(self) -> bool:
        return has_errors(self.parsed.diagnostics)

    @property
    def root(self) -> SyntaxNode:
        return self.parsed.root

    @property
    def stream(self) -> TokenStream:
        return self.parsed.stream
