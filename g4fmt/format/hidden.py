"""Hidden-token locator."""

from typing import Final

from g4fmt.lexer import Channel, Token, TokenStream

COMMENT_PREFIXES: Final[tuple[str, ...]] = ("/*", "//")


def is_comment(text: str) -> bool:
    return text.strip().startswith(COMMENT_PREFIXES)


class HiddenTokenLocator:
    """Finds comments next to a token span that were not written yet.

    ``left_watermark`` and ``right_watermark`` only move forward, so each
    boundary is looked at once per direction. A comment sitting between two
    siblings is both right of the first and left of the second; the set of
    handed out indices makes sure it is still written once.
    """

    def __init__(self, stream: TokenStream) -> None:
        self._stream = stream
        self.left_watermark = -1
        self.right_watermark = -1
        self._emitted: set[int] = set()

    def left_comments(self, start: int) -> list[Token]:
        if start <= self.left_watermark or start < 0:
            return []
        self.left_watermark = start
        return self._unseen(self._stream.hidden_tokens_to_left(start, Channel.COMMENT))

    def right_comments(self, stop: int) -> list[Token]:
        if stop <= self.right_watermark or stop >= len(self._stream):
            return []
        self.right_watermark = stop
        return self._unseen(self._stream.hidden_tokens_to_right(stop, Channel.COMMENT))

    def is_emitted(self, index: int) -> bool:
        return index in self._emitted

    def _unseen(self, tokens: list[Token]) -> list[Token]:
        comments = [token for token in tokens if token.index not in self._emitted and is_comment(token.text)]
        self._emitted.update(token.index for token in comments)
        return comments
