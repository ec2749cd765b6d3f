"""Event-based parser core."""

from dataclasses import dataclass

from g4fmt.diagnostics import Diagnostic, DiagnosticSpec, make_diagnostic
from g4fmt.lexer import Token, TokenKind
from g4fmt.parser.event import Event, StartEvent, TokenEvent
from g4fmt.parser.marker import Marker
from g4fmt.parser.token_source import TokenSource
from g4fmt.syntax import GrammarSyntaxKind
from g4fmt.text import TextRange


@dataclass(slots=True)
class ParserProgress:
    """Detect parser stalls inside list-style loops."""

    _position: int | None = None

    def has_progressed(self, parser: "Parser") -> bool:
        has_progressed = self._position is None or self._position < parser.position
        self._position = parser.position
        return has_progressed

    def assert_progressing(self, parser: "Parser") -> None:
        if not self.has_progressed(parser):
            raise RuntimeError(f"Parser stopped making progress at {parser.current.name} {parser.current_range}")


class Parser:
    """Event-based parser."""

    def __init__(self, source: TokenSource) -> None:
        self._source = source
        self._events: list[Event] = []
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> TokenSource:
        return self._source

    @property
    def events(self) -> list[Event]:
        return self._events

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def current(self) -> TokenKind:
        return self._source.current

    @property
    def current_token(self) -> Token:
        return self._source.current_token

    @property
    def current_range(self) -> TextRange:
        return self._source.current_range

    @property
    def position(self) -> int:
        return self._source.position

    def at(self, kind: TokenKind) -> bool:
        return self.current == kind

    def at_set(self, kinds: frozenset[TokenKind] | set[TokenKind]) -> bool:
        return self.current in kinds

    def nth(self, n: int) -> TokenKind:
        return self._source.nth(n)

    def start(self) -> Marker:
        pos = len(self._events)
        self._events.append(StartEvent.tombstone())
        return Marker(pos=pos)

    def bump(self) -> None:
        if self.current == TokenKind.EOF:
            return
        self._events.append(
            TokenEvent(
                kind=GrammarSyntaxKind.from_token_kind(self.current),
                index=self._source.current_index,
            )
        )
        self._source.bump()

    def eat(self, kind: TokenKind) -> bool:
        if self.current == kind:
            self.bump()
            return True
        return False

    def expect(self, kind: TokenKind, spec: DiagnosticSpec) -> bool:
        if self.eat(kind):
            return True
        self.error(spec, f"Expected {_describe(kind)} but found {_describe(self.current)}")
        return False

    def error(self, spec: DiagnosticSpec, message: str | None = None) -> None:
        diagnostic = make_diagnostic(spec, self.current_range, message)
        if self._diagnostics:
            previous = self._diagnostics[-1]
            if previous.range.start == diagnostic.range.start:
                return
        self._diagnostics.append(diagnostic)

    def finish(self) -> tuple[list[Event], list[Diagnostic]]:
        return self._events, self._diagnostics


def _describe(kind: TokenKind) -> str:
    if kind == TokenKind.EOF:
        return "end of input"
    return kind.name
