"""Random-access view over a lexed token list."""

from collections.abc import Iterator, Sequence

from g4fmt.lexer.tokens import Channel, Token, TokenKind


class TokenStream(Sequence[Token]):
    """Every token of a source, hidden ones included, addressable by index.

    The hidden-token lookups return the contiguous run of hidden tokens
    strictly left or right of an index, stopping at the nearest main-channel
    token, in stream order.
    """

    def __init__(self, tokens: list[Token]) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("Token list must end with an EOF token")
        self._tokens = tokens

    def __getitem__(self, index):
        return self._tokens[index]

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    @property
    def tokens(self) -> list[Token]:
        return self._tokens

    @property
    def text(self) -> str:
        return "".join(token.text for token in self._tokens)

    def get(self, index: int) -> Token:
        if index < 0 or index >= len(self._tokens):
            raise IndexError(f"Token index {index} out of range")
        return self._tokens[index]

    def main_channel(self) -> list[Token]:
        return [token for token in self._tokens if not token.is_hidden]

    def hidden_tokens_to_left(self, index: int, channel: Channel | None = None) -> list[Token]:
        if index < 0 or index >= len(self._tokens):
            raise IndexError(f"Token index {index} out of range")

        start = index
        while start > 0 and self._tokens[start - 1].is_hidden:
            start -= 1
        return self._filter(self._tokens[start:index], channel)

    def hidden_tokens_to_right(self, index: int, channel: Channel | None = None) -> list[Token]:
        if index < 0 or index >= len(self._tokens):
            raise IndexError(f"Token index {index} out of range")

        stop = index + 1
        while stop < len(self._tokens) and self._tokens[stop].is_hidden:
            stop += 1
        return self._filter(self._tokens[index + 1 : stop], channel)

    @staticmethod
    def _filter(tokens: list[Token], channel: Channel | None) -> list[Token]:
        if channel is None:
            return list(tokens)
        return [token for token in tokens if token.channel == channel]
