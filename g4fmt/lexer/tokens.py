"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Final

from g4fmt.text import TextRange, TextSize


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1
    ERROR_TOKEN = 2  # unexpected character, kept on the main channel

    # -------------------------
    # Hidden tokens (emitted by the lexer)
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11
    LINE_COMMENT = 12
    BLOCK_COMMENT = 13

    # -------------------------
    # Comments / literals / identifiers
    # -------------------------
    DOC_COMMENT = 20  # /** ... */
    TOKEN_REF = 21  # Uppercase identifier
    RULE_REF = 22  # lowercase identifier
    STRING_LITERAL = 23  # 'a'
    INT = 24
    LEXER_CHAR_SET = 25  # [a-z] inside lexer rules
    ARG_ACTION = 26  # [int x] inside parser rules

    # -------------------------
    # Actions
    # -------------------------
    BEGIN_ACTION = 30  # {
    ACTION_CONTENT = 31
    END_ACTION = 32  # }

    # -------------------------
    # Keywords
    # -------------------------
    OPTIONS = 40
    TOKENS = 41
    CHANNELS = 42
    IMPORT = 43
    FRAGMENT = 44
    LEXER = 45
    PARSER = 46
    GRAMMAR = 47
    PROTECTED = 48
    PUBLIC = 49
    PRIVATE = 50
    RETURNS = 51
    LOCALS = 52
    THROWS = 53
    CATCH = 54
    FINALLY = 55
    MODE = 56

    # -------------------------
    # Punctuation / operators
    # -------------------------
    COLON = 60  # :
    COLONCOLON = 61  # ::
    COMMA = 62  # ,
    SEMI = 63  # ;
    LPAREN = 64  # (
    RPAREN = 65  # )
    LBRACE = 66  # { of options/tokens/channels blocks
    RBRACE = 67  # }
    RARROW = 68  # ->
    LT = 69  # <
    GT = 70  # >
    ASSIGN = 71  # =
    QUESTION = 72  # ?
    STAR = 73  # *
    PLUS_ASSIGN = 74  # +=
    PLUS = 75  # +
    OR = 76  # |
    DOLLAR = 77  # $
    RANGE = 78  # ..
    DOT = 79  # .
    AT = 80  # @
    POUND = 81  # #
    NOT = 82  # ~

    @property
    def is_hidden(self) -> bool:
        return self in (
            TokenKind.WHITESPACE,
            TokenKind.NEWLINE,
            TokenKind.LINE_COMMENT,
            TokenKind.BLOCK_COMMENT,
        )

    @property
    def channel(self) -> "Channel":
        match self:
            case TokenKind.LINE_COMMENT | TokenKind.BLOCK_COMMENT:
                return Channel.COMMENT
            case TokenKind.WHITESPACE | TokenKind.NEWLINE:
                return Channel.OFF_CHANNEL
            case _:
                return Channel.DEFAULT


class Channel(IntEnum):
    """Token channels, numbered the way ANTLR numbers them."""

    DEFAULT = 0
    OFF_CHANNEL = 1  # whitespace
    COMMENT = 2


KEYWORDS: Final[dict[str, TokenKind]] = {
    "options": TokenKind.OPTIONS,
    "tokens": TokenKind.TOKENS,
    "channels": TokenKind.CHANNELS,
    "import": TokenKind.IMPORT,
    "fragment": TokenKind.FRAGMENT,
    "lexer": TokenKind.LEXER,
    "parser": TokenKind.PARSER,
    "grammar": TokenKind.GRAMMAR,
    "protected": TokenKind.PROTECTED,
    "public": TokenKind.PUBLIC,
    "private": TokenKind.PRIVATE,
    "returns": TokenKind.RETURNS,
    "locals": TokenKind.LOCALS,
    "throws": TokenKind.THROWS,
    "catch": TokenKind.CATCH,
    "finally": TokenKind.FINALLY,
    "mode": TokenKind.MODE,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token (hidden or main channel).

    ``index`` is the absolute position in the full token stream, hidden tokens
    included.
    """

    kind: TokenKind
    text: str
    index: int
    range: TextRange

    @property
    def channel(self) -> Channel:
        return self.kind.channel

    @property
    def is_hidden(self) -> bool:
        return self.kind.is_hidden

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, index={self.index})"


def eof_token(index: int, offset: TextSize) -> Token:
    return Token(TokenKind.EOF, "", index, TextRange.empty(offset))
