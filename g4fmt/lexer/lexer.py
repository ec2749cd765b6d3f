"""Lexer."""

from dataclasses import dataclass

from g4fmt.diagnostics import Diagnostic, DiagnosticSpec, make_diagnostic
from g4fmt.diagnostics.codes import (
    LEXER_UNEXPECTED_CHARACTER,
    LEXER_UNTERMINATED_ACTION,
    LEXER_UNTERMINATED_COMMENT,
    LEXER_UNTERMINATED_STRING,
)
from g4fmt.lexer.tokens import KEYWORDS, Token, TokenKind, eof_token
from g4fmt.text import TextRange, TextSize

_SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMI,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    "=": TokenKind.ASSIGN,
    "?": TokenKind.QUESTION,
    "*": TokenKind.STAR,
    "+": TokenKind.PLUS,
    "|": TokenKind.OR,
    "$": TokenKind.DOLLAR,
    ".": TokenKind.DOT,
    "@": TokenKind.AT,
    "#": TokenKind.POUND,
    "~": TokenKind.NOT,
}

_DOUBLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "::": TokenKind.COLONCOLON,
    "->": TokenKind.RARROW,
    "+=": TokenKind.PLUS_ASSIGN,
    "..": TokenKind.RANGE,
}

_BRACE_BLOCK_KEYWORDS = frozenset({TokenKind.OPTIONS, TokenKind.TOKENS, TokenKind.CHANNELS})


@dataclass(slots=True)
class _RuleContext:
    """What kind of construct the lexer is inside of.

    ``[`` opens a character set inside lexer rules and an argument action
    everywhere else, and doc comments only stay on the main channel between
    top-level constructs, so the lexer follows the rule structure loosely the
    same way ANTLR's own grammar lexer does.
    """

    rule_type: TokenKind | None = None
    in_brace_block: bool = False
    last_significant: TokenKind | None = None

    @property
    def at_top_level(self) -> bool:
        return self.rule_type is None

    def observe(self, kind: TokenKind) -> None:
        if kind.is_hidden:
            return
        if kind in _BRACE_BLOCK_KEYWORDS and self.rule_type is None:
            self.rule_type = kind
        elif kind == TokenKind.RBRACE:
            self.in_brace_block = False
            if self.rule_type in _BRACE_BLOCK_KEYWORDS:
                self.rule_type = None
        elif kind == TokenKind.LBRACE:
            self.in_brace_block = True
        elif kind == TokenKind.AT and self.rule_type is None:
            self.rule_type = TokenKind.AT
        elif kind == TokenKind.END_ACTION and self.rule_type == TokenKind.AT:
            self.rule_type = None
        elif kind in (TokenKind.TOKEN_REF, TokenKind.RULE_REF) and self.rule_type is None:
            self.rule_type = kind
        elif kind == TokenKind.SEMI:
            self.rule_type = None
        self.last_significant = kind


class Lexer:
    """Lossless lexer for ANTLR v4 grammars.

    Every character of the source ends up in exactly one token; whitespace and
    comments are hidden-channel tokens, everything else is on the main channel.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._current_start = 0
        self._context = _RuleContext()
        # Brace nesting of the action block being lexed, 0 outside actions.
        self._action_depth = 0
        self._tokens: list[Token] = []
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """List of diagnostics emitted during lexing."""
        return self._diagnostics

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    @property
    def current_range(self) -> TextRange:
        return TextRange(self._current_start, self._position)

    def lex(self) -> list[Token]:
        """Lex the whole source; the last token is always ``EOF``."""
        if self._tokens:
            return self._tokens

        while not self.is_eof:
            self._current_start = self._position
            if self._action_depth > 0:
                kind = self._lex_action_token()
            else:
                kind = self._lex_token()
            self._push(kind)

        if self._action_depth > 0:
            self._error(LEXER_UNTERMINATED_ACTION, TextRange(self._current_start, self._position))
            self._action_depth = 0

        self._tokens.append(eof_token(len(self._tokens), TextSize(self._position)))
        return self._tokens

    def _push(self, kind: TokenKind) -> None:
        text = self._source[self._current_start : self._position]
        self._tokens.append(Token(kind, text, len(self._tokens), self.current_range))
        # Semicolons inside an action do not end the enclosing rule.
        if self._action_depth == 0 or kind == TokenKind.BEGIN_ACTION:
            self._context.observe(kind)

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch == "\r" or ch == "\n":
            self._consume_newline()
            return TokenKind.NEWLINE

        if ch in " \t\f":
            self._consume_whitespaces()
            return TokenKind.WHITESPACE

        if ch == "/" and self._peek_char() == "/":
            return self._lex_line_comment()

        if ch == "/" and self._peek_char() == "*":
            return self._lex_block_comment()

        if ch == "'":
            return self._lex_string()

        if ch.isdigit():
            while self._current_char().isdigit():
                self._advance(1)
            return TokenKind.INT

        if ch.isalpha() or ch == "_":
            return self._lex_identifier()

        if ch == "{":
            self._advance(1)
            if self._context.last_significant in _BRACE_BLOCK_KEYWORDS:
                return TokenKind.LBRACE
            self._action_depth = 1
            return TokenKind.BEGIN_ACTION

        if ch == "}":
            self._advance(1)
            return TokenKind.RBRACE

        if ch == "[":
            return self._lex_bracketed()

        pair = ch + self._peek_char()
        if pair in _DOUBLE_CHAR_TOKENS:
            self._advance(2)
            return _DOUBLE_CHAR_TOKENS[pair]

        if ch in _SINGLE_CHAR_TOKENS:
            self._advance(1)
            return _SINGLE_CHAR_TOKENS[ch]

        self._advance(1)
        self._error(LEXER_UNEXPECTED_CHARACTER, self.current_range, f"Unexpected character {ch!r}")
        return TokenKind.ERROR_TOKEN

    def _lex_line_comment(self) -> TokenKind:
        # Consume until end of line, do not consume the newline itself.
        while not self.is_eof and self._current_char() not in "\r\n":
            self._advance(1)
        return TokenKind.LINE_COMMENT

    def _lex_block_comment(self) -> TokenKind:
        is_doc = self._source.startswith("/**", self._position) and not self._source.startswith(
            "/**/", self._position
        )
        self._advance(2)
        end = self._source.find("*/", self._position)
        if end < 0:
            self._position = len(self._source)
            self._error(LEXER_UNTERMINATED_COMMENT, self.current_range)
        else:
            self._position = end + 2

        if is_doc and self._context.at_top_level:
            return TokenKind.DOC_COMMENT
        return TokenKind.BLOCK_COMMENT

    def _lex_string(self) -> TokenKind:
        # Consume opening quote
        self._advance(1)
        closed = False
        while not self.is_eof:
            ch = self._current_char()
            if ch == "'":
                self._advance(1)
                closed = True
                break
            if ch == "\\":
                self._advance(2 if self._peek_char() not in "\r\n\0" else 1)
                continue
            if ch == "\n" or ch == "\r":
                break
            self._advance(1)

        if not closed:
            self._error(LEXER_UNTERMINATED_STRING, self.current_range)
        return TokenKind.STRING_LITERAL

    def _lex_identifier(self) -> TokenKind:
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch.isalnum() or ch == "_":
                self._advance(1)
                continue
            break

        text = self._source[self._current_start : self._position]
        keyword = KEYWORDS.get(text)
        if keyword is not None:
            return keyword
        return TokenKind.TOKEN_REF if text[0].isupper() else TokenKind.RULE_REF

    def _lex_bracketed(self) -> TokenKind:
        """``[a-z]`` in lexer rules, ``[int x]`` argument actions elsewhere."""
        is_char_set = self._context.rule_type == TokenKind.TOKEN_REF
        self._advance(1)
        depth = 1
        while not self.is_eof:
            ch = self._current_char()
            if ch == "\\":
                self._advance(2)
                continue
            if ch == "]":
                depth -= 1
                self._advance(1)
                if depth == 0 or is_char_set:
                    break
                continue
            if ch == "[" and not is_char_set:
                depth += 1
            elif ch in "'\"" and not is_char_set:
                self._skip_quoted(ch)
                continue
            self._advance(1)
        return TokenKind.LEXER_CHAR_SET if is_char_set else TokenKind.ARG_ACTION

    def _lex_action_token(self) -> TokenKind:
        ch = self._current_char()

        if ch == "}" and self._action_depth == 1:
            self._advance(1)
            self._action_depth = 0
            return TokenKind.END_ACTION

        if ch == ";":
            self._advance(1)
            return TokenKind.SEMI

        if ch == "@":
            self._advance(1)
            return TokenKind.AT

        if self._at_doc_comment():
            self._advance(3)
            end = self._source.find("*/", self._position)
            self._position = len(self._source) if end < 0 else end + 2
            return TokenKind.DOC_COMMENT

        while not self.is_eof:
            ch = self._current_char()
            if ch in ";@" or self._at_doc_comment():
                break
            if ch == "}":
                if self._action_depth == 1:
                    break
                self._action_depth -= 1
                self._advance(1)
            elif ch == "{":
                self._action_depth += 1
                self._advance(1)
            elif ch in "'\"":
                self._skip_quoted(ch)
            elif ch == "/" and self._peek_char() == "/":
                while not self.is_eof and self._current_char() not in "\r\n":
                    self._advance(1)
            elif ch == "/" and self._peek_char() == "*":
                end = self._source.find("*/", self._position + 2)
                self._position = len(self._source) if end < 0 else end + 2
            elif ch == "\\":
                self._advance(2)
            else:
                self._advance(1)
        return TokenKind.ACTION_CONTENT

    def _at_doc_comment(self) -> bool:
        return self._source.startswith("/**", self._position) and not self._source.startswith(
            "/**/", self._position
        )

    def _skip_quoted(self, quote: str) -> None:
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch == "\\":
                self._advance(2)
                continue
            self._advance(1)
            if ch == quote or ch == "\n":
                return

    def _consume_whitespaces(self) -> None:
        while not self.is_eof and self._current_char() in " \t\f":
            self._advance(1)

    def _consume_newline(self) -> None:
        if self._current_char() == "\r" and self._peek_char() == "\n":
            self._advance(2)
        else:
            self._advance(1)

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position = min(self._position + steps, len(self._source))

    def _error(self, spec: DiagnosticSpec, range: TextRange, message: str | None = None) -> None:
        self._diagnostics.append(make_diagnostic(spec, range, message))


def lex(source: str) -> tuple[list[Token], list[Diagnostic]]:
    lexer = Lexer(source)
    tokens = lexer.lex()
    return tokens, lexer.diagnostics


def dump_tokens(tokens: list[Token], diagnostics: list[Diagnostic] | None = None) -> None:
    """Print token list with index, kind, channel, range and text for debugging."""
    for tok in tokens:
        print(f"{tok.index:03d} {tok.kind.name:<16} {tok.channel.name:<11} range={tok.range.as_tuple()} text={tok.text!r}")

    if diagnostics is not None:
        print("\nDiagnostics:")
        for d in diagnostics:
            print(f"- {d.severity.upper()} {d.code} range={d.range.as_tuple()} message={d.message}")
