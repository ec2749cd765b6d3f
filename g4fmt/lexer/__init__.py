"""Lexer for ANTLR v4 grammar text."""

from g4fmt.lexer.lexer import Lexer, dump_tokens, lex
from g4fmt.lexer.token_stream import TokenStream
from g4fmt.lexer.tokens import KEYWORDS, Channel, Token, TokenKind, eof_token

__all__ = [
    "KEYWORDS",
    "Channel",
    "Lexer",
    "Token",
    "TokenKind",
    "TokenStream",
    "dump_tokens",
    "eof_token",
    "lex",
]
