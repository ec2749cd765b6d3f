import pytest

from g4fmt.lexer import Channel, Lexer, Token, TokenKind, lex
from tests._shared_cases import GrammarCase, GRAMMAR_CASES, case_id


def _main_kinds(source: str) -> list[TokenKind]:
    tokens, _ = lex(source)
    return [token.kind for token in tokens if not token.is_hidden]


def _first(tokens: list[Token], kind: TokenKind) -> Token:
    return next(token for token in tokens if token.kind == kind)


@pytest.mark.parametrize("case", GRAMMAR_CASES, ids=case_id)
def test_lexer_is_lossless(case: GrammarCase) -> None:
    tokens, _ = lex(case.source)

    assert "".join(token.text for token in tokens) == case.source
    assert tokens[-1].kind == TokenKind.EOF
    assert [token.index for token in tokens] == list(range(len(tokens)))


def test_grammar_declaration_tokens() -> None:
    assert _main_kinds("lexer grammar L;") == [
        TokenKind.LEXER,
        TokenKind.GRAMMAR,
        TokenKind.TOKEN_REF,
        TokenKind.SEMI,
        TokenKind.EOF,
    ]


def test_identifier_case_selects_token_or_rule_ref() -> None:
    assert _main_kinds("foo Bar _baz") == [
        TokenKind.RULE_REF,
        TokenKind.TOKEN_REF,
        TokenKind.RULE_REF,
        TokenKind.EOF,
    ]


def test_punctuation_prefers_two_character_operators() -> None:
    assert _main_kinds("a+=b -> :: .. + = : .") == [
        TokenKind.RULE_REF,
        TokenKind.PLUS_ASSIGN,
        TokenKind.RULE_REF,
        TokenKind.RARROW,
        TokenKind.COLONCOLON,
        TokenKind.RANGE,
        TokenKind.PLUS,
        TokenKind.ASSIGN,
        TokenKind.COLON,
        TokenKind.DOT,
        TokenKind.EOF,
    ]


def test_hidden_tokens_use_antlr_channels() -> None:
    tokens, diagnostics = lex("a // line\n/* block */ b")

    assert diagnostics == []
    assert _first(tokens, TokenKind.LINE_COMMENT).channel == Channel.COMMENT
    assert _first(tokens, TokenKind.BLOCK_COMMENT).channel == Channel.COMMENT
    assert _first(tokens, TokenKind.WHITESPACE).channel == Channel.OFF_CHANNEL
    assert _first(tokens, TokenKind.NEWLINE).channel == Channel.OFF_CHANNEL
    assert _first(tokens, TokenKind.RULE_REF).channel == Channel.DEFAULT


def test_square_brackets_are_char_sets_in_lexer_rules() -> None:
    tokens, _ = lex("ID : [a-z\\]]+ ;")

    char_set = _first(tokens, TokenKind.LEXER_CHAR_SET)
    assert char_set.text == "[a-z\\]]"
    assert TokenKind.ARG_ACTION not in [token.kind for token in tokens]


def test_square_brackets_are_arguments_in_parser_rules() -> None:
    tokens, _ = lex("foo[int x, List<int[]> y] : a ;")

    arg = _first(tokens, TokenKind.ARG_ACTION)
    assert arg.text == "[int x, List<int[]> y]"


def test_brace_after_options_is_a_plain_brace() -> None:
    assert _main_kinds("options { a = b; }") == [
        TokenKind.OPTIONS,
        TokenKind.LBRACE,
        TokenKind.RULE_REF,
        TokenKind.ASSIGN,
        TokenKind.RULE_REF,
        TokenKind.SEMI,
        TokenKind.RBRACE,
        TokenKind.EOF,
    ]


def test_action_blocks_split_on_semicolons_and_track_nesting() -> None:
    tokens, diagnostics = lex("@members { int f() { return 1; } }")
    main = [token for token in tokens if not token.is_hidden]

    assert diagnostics == []
    assert [token.kind for token in main] == [
        TokenKind.AT,
        TokenKind.RULE_REF,
        TokenKind.BEGIN_ACTION,
        TokenKind.ACTION_CONTENT,
        TokenKind.SEMI,
        TokenKind.ACTION_CONTENT,
        TokenKind.END_ACTION,
        TokenKind.EOF,
    ]
    assert main[3].text == " int f() { return 1"
    assert main[5].text == " } "


def test_semicolon_inside_action_does_not_end_lexer_rule() -> None:
    tokens, _ = lex("A : 'a' {x();} [b-c] ;")

    assert _first(tokens, TokenKind.LEXER_CHAR_SET).text == "[b-c]"


def test_doc_comments_are_main_channel_only_at_top_level() -> None:
    top_level, _ = lex("/** grammar doc */\ngrammar T;")
    inside_rule, _ = lex("a : /** not doc */ b ;")

    assert _first(top_level, TokenKind.DOC_COMMENT).text == "/** grammar doc */"
    assert TokenKind.DOC_COMMENT not in [token.kind for token in inside_rule]
    assert _first(inside_rule, TokenKind.BLOCK_COMMENT).text == "/** not doc */"


def test_empty_block_comment_is_not_a_doc_comment() -> None:
    tokens, _ = lex("/**/ grammar T;")

    assert tokens[0].kind == TokenKind.BLOCK_COMMENT


def test_unterminated_string_stops_at_end_of_line() -> None:
    tokens, diagnostics = lex("A : 'abc\n;")

    assert _first(tokens, TokenKind.STRING_LITERAL).text == "'abc"
    assert [d.code for d in diagnostics] == ["LEXER_UNTERMINATED_STRING"]


def test_unterminated_comment_and_action_are_reported() -> None:
    _, comment_diagnostics = lex("grammar T; /* never closed")
    _, action_diagnostics = lex("@members { int x")

    assert [d.code for d in comment_diagnostics] == ["LEXER_UNTERMINATED_COMMENT"]
    assert [d.code for d in action_diagnostics] == ["LEXER_UNTERMINATED_ACTION"]


def test_unexpected_character_becomes_error_token() -> None:
    tokens, diagnostics = lex("a : b % ;")

    error = _first(tokens, TokenKind.ERROR_TOKEN)
    assert error.text == "%"
    assert len(diagnostics) == 1
    assert diagnostics[0].code == "LEXER_UNEXPECTED_CHARACTER"
    assert diagnostics[0].range.as_tuple() == (6, 7)


def test_lexer_instance_caches_tokens() -> None:
    lexer = Lexer("grammar T;")

    first = lexer.lex()
    second = lexer.lex()

    assert first is second
    assert lexer.source == "grammar T;"
    assert lexer.is_eof
