"""Parser recovery primitives."""

from dataclasses import dataclass
from enum import StrEnum

from g4fmt.lexer import TokenKind
from g4fmt.parser.marker import CompletedMarker
from g4fmt.parser.parser import Parser
from g4fmt.syntax import GrammarSyntaxKind


class RecoveryError(StrEnum):
    EOF = "eof"
    ALREADY_RECOVERED = "already_recovered"


@dataclass(frozen=True, slots=True)
class ParseRecoveryTokenSet:
    """Recover by consuming tokens into an ERROR node until a safe token is reached.

    With ``include_terminator`` the safe token itself is swallowed too, which
    is how a rule with garbage before its ``;`` gets closed.
    """

    node_kind: GrammarSyntaxKind
    recovery_set: frozenset[TokenKind]
    include_terminator: frozenset[TokenKind] = frozenset()

    def recover(self, parser: Parser) -> tuple[CompletedMarker | None, RecoveryError | None]:
        if parser.at(TokenKind.EOF):
            return None, RecoveryError.EOF

        if self.is_at_recovered(parser) and not parser.at_set(self.include_terminator):
            return None, RecoveryError.ALREADY_RECOVERED

        marker = parser.start()
        while not parser.at(TokenKind.EOF) and not self.is_at_recovered(parser):
            parser.bump()
        if parser.at_set(self.include_terminator):
            parser.bump()

        return marker.complete(parser, self.node_kind), None

    def is_at_recovered(self, parser: Parser) -> bool:
        return parser.at_set(self.recovery_set)
