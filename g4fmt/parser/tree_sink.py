"""Tree sink for parser events."""

from dataclasses import dataclass

from g4fmt.cst import SyntaxNode, TreeBuilder
from g4fmt.diagnostics import Diagnostic
from g4fmt.lexer import TokenKind, TokenStream
from g4fmt.syntax import GrammarSyntaxKind


@dataclass(frozen=True, slots=True)
class ParsedGrammar:
    """Syntax tree plus the token stream it indexes into."""

    root: SyntaxNode
    stream: TokenStream
    diagnostics: list[Diagnostic]


class StreamTreeSink:
    """Converts parser events into a ``SyntaxNode`` tree over a token stream.

    Token events carry stream indices; the sink keeps a cursor on the next
    main-channel token so empty nodes get ANTLR-like spans, and appends the
    ``EOF`` token as the last child of the root.
    """

    def __init__(self, stream: TokenStream, builder: TreeBuilder | None = None) -> None:
        self._stream = stream
        self._main_indices = [token.index for token in stream.main_channel()]
        self._cursor = 0
        self._parents_count = 0
        self._errors: list[Diagnostic] = []
        self._builder = builder if builder is not None else TreeBuilder()
        self._needs_eof = True

    def token(self, kind: GrammarSyntaxKind, index: int) -> None:
        token = self._stream.get(index)
        if token.kind == TokenKind.EOF:
            self._needs_eof = False
        self._builder.token(token)
        self._cursor = self._main_indices.index(index, self._cursor) + 1

    def start_node(self, kind: GrammarSyntaxKind) -> None:
        self._builder.start_node(kind, self._next_index())
        self._parents_count += 1

    def finish_node(self) -> None:
        self._parents_count -= 1
        if self._parents_count < 0:
            raise RuntimeError("finish_node called more often than start_node")

        if self._parents_count == 0 and self._needs_eof:
            self.token(GrammarSyntaxKind.EOF, self._stream[-1].index)

        self._builder.finish_node(self._next_index())

    def errors(self, errors: list[Diagnostic]) -> None:
        self._errors = list(errors)

    def finish(self) -> ParsedGrammar:
        return ParsedGrammar(root=self._builder.finish(), stream=self._stream, diagnostics=self._errors)

    def _next_index(self) -> int:
        if self._cursor < len(self._main_indices):
            return self._main_indices[self._cursor]
        return self._main_indices[-1]
