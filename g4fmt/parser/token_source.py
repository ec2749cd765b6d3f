"""Token source that hides hidden-channel tokens from the parser."""

from g4fmt.lexer import Token, TokenKind, TokenStream
from g4fmt.text import TextRange


class TokenSource:
    """Main-channel cursor over a ``TokenStream``.

    The hidden tokens stay in the stream; the tree only records main-channel
    tokens and the formatter goes back to the stream for the rest.
    """

    def __init__(self, stream: TokenStream) -> None:
        self._stream = stream
        self._tokens = stream.main_channel()
        self._position = 0

    @property
    def stream(self) -> TokenStream:
        return self._stream

    @property
    def current_token(self) -> Token:
        return self._tokens[self._position]

    @property
    def current(self) -> TokenKind:
        return self.current_token.kind

    @property
    def current_range(self) -> TextRange:
        return self.current_token.range

    @property
    def current_index(self) -> int:
        """Stream index of the current token."""
        return self.current_token.index

    @property
    def position(self) -> int:
        """Number of main-channel tokens consumed so far."""
        return self._position

    def bump(self) -> None:
        if self.current != TokenKind.EOF:
            self._position += 1

    def nth_token(self, n: int) -> Token:
        index = min(self._position + n, len(self._tokens) - 1)
        return self._tokens[index]

    def nth(self, n: int) -> TokenKind:
        return self.nth_token(n).kind
