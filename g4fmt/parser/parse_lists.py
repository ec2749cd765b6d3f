"""Reusable node-list parse loop helpers."""

from collections.abc import Callable
from dataclasses import dataclass

from g4fmt.lexer import TokenKind
from g4fmt.parser.marker import CompletedMarker
from g4fmt.parser.parser import Parser, ParserProgress
from g4fmt.syntax import GrammarSyntaxKind


@dataclass(slots=True)
class ParseNodeList:
    """Non-separated list parser with progress and recovery hooks.

    ``parse_element`` returns ``None`` when the current token cannot start an
    element; ``recover`` then decides whether the loop may continue.
    """

    list_kind: GrammarSyntaxKind
    is_at_list_end: Callable[[Parser], bool]
    parse_element: Callable[[Parser], CompletedMarker | None]
    recover: Callable[[Parser], bool]

    def parse_list(self, parser: Parser) -> CompletedMarker:
        marker = parser.start()
        progress = ParserProgress()

        while not parser.at(TokenKind.EOF) and not self.is_at_list_end(parser):
            progress.assert_progressing(parser)
            if self.parse_element(parser) is None and not self.recover(parser):
                break

        return marker.complete(parser, self.list_kind)
