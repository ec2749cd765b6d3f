"""High-level parse entrypoint for ANTLR v4 grammar text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from g4fmt.diagnostics import collect_diagnostics
from g4fmt.lexer import Lexer, TokenStream
from g4fmt.parser.grammar import parse_grammar_spec
from g4fmt.parser.parse import build_tree
from g4fmt.parser.parser import Parser
from g4fmt.parser.token_source import TokenSource
from g4fmt.parser.tree_sink import ParsedGrammar

if TYPE_CHECKING:
    from g4fmt.pipeline import GrammarParseResult


def parse(text: str) -> ParsedGrammar:
    lexer = Lexer(text)
    stream = TokenStream(lexer.lex())
    parser = Parser(TokenSource(stream))

    parse_grammar_spec(parser)
    events, parser_diagnostics = parser.finish()
    diagnostics = collect_diagnostics(lexer.diagnostics, parser_diagnostics)

    return build_tree(stream=stream, events=events, diagnostics=diagnostics)


def parse_result(text: str) -> GrammarParseResult:
    from g4fmt.pipeline import GrammarParseResult

    return GrammarParseResult(source_text=text, parsed=parse(text))
