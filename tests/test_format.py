import io
import textwrap

import pytest

from g4fmt.format import FormatOptions, FormatWriteError, GrammarFormatter, format_to, format_tree, walk
from g4fmt.lexer import TokenKind, lex
from g4fmt.parser import parse
from tests._shared_cases import GrammarCase, CLEAN_CASES, GRAMMAR_CASES, case_id


def _format(source: str, options: FormatOptions | None = None) -> str:
    return format_tree(parse(source), options)


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


def _main_texts(source: str) -> list[str]:
    tokens, _ = lex(source)
    texts = [token.text.strip() for token in tokens if not token.is_hidden and token.kind != TokenKind.EOF]
    return [text for text in texts if text]


def _comment_texts(source: str) -> list[str]:
    tokens, _ = lex(source)
    return [token.text for token in tokens if token.kind in (TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT)]


def test_parser_rule_body_is_indented_under_rule_name() -> None:
    assert _format("grammar T;\nfoo : 'a' 'b' ;\n") == "grammar T;\n\nfoo\n   : 'a' 'b'\n   ;\n"


def test_options_block_opens_on_its_own_line() -> None:
    source = "grammar T;\noptions { x=1; }\nfoo : a ;\n"

    assert _format(source) == "grammar T;\n\noptions\n   { x = 1; }\n\nfoo\n   : a\n   ;\n"


def test_line_comment_before_first_rule_sits_directly_above_it() -> None:
    formatted = _format("grammar T;\n// c\nfoo : a ;\n")

    assert formatted == "grammar T;\n\n// c\nfoo\n   : a\n   ;\n"
    assert formatted.count("// c") == 1


def test_comment_before_grammar_declaration() -> None:
    assert _format("// header\ngrammar T;\n") == "// header\n\ngrammar T;\n"


def test_top_level_alternatives_start_new_lines() -> None:
    formatted = _format("grammar T;\nfoo : a | b (c | d) | e ;\n")

    assert formatted == "grammar T;\n\nfoo\n   : a\n   | b (c | d)\n   | e\n   ;\n"


def test_suffixes_and_parentheses_hug_their_operands() -> None:
    formatted = _format("grammar T;\nfoo : ( a )* b ? c+ ;\n")

    assert "   : (a)* b? c +\n" in formatted


def test_lexer_rules_are_separated_by_an_extra_blank_line() -> None:
    formatted = _format("lexer grammar L;\nA : 'a' ;\nB : 'b' ;\n")

    assert formatted == "lexer grammar L;\n\n\nA\n   : 'a'\n   ;\n\n\nB\n   : 'b'\n   ;\n"


def test_tokens_block() -> None:
    formatted = _format("grammar T;\ntokens{A,B}\nfoo : A ;\n")

    assert "tokens\n   { A , B }\n" in formatted


def test_indent_width_option() -> None:
    formatted = _format("grammar T;\nfoo : a ;\n", FormatOptions(indent_width=2))

    assert formatted == "grammar T;\n\nfoo\n  : a\n  ;\n"


def test_flat_and_scoped_contexts_agree_on_simple_rules() -> None:
    source = "grammar T;\nfoo : a | (b | c) ;\nbar : d ;\nX : 'x' ;\n"

    assert _format(source, FormatOptions(scoped_contexts=False)) == _format(source)


def test_comments_are_placed_in_their_own_lines() -> None:
    source = next(case.source for case in GRAMMAR_CASES if case.name == "comments_everywhere")

    assert _format(source) == _dedent(
        """
        // Leading comment

        grammar Commented;

        /* block before options */
        options
           { language = Java; }

        // after options
        // before rule
        rule1
           : a
           // after a
           | b
           /* inline */ c
           ;

        rule2
           : (x | y)*
           ;

        // trailing
        // end of file
        """
    )


def test_action_text_is_kept_and_broken_after_statements() -> None:
    formatted = _format("grammar T;\n@header {\n    import x;\n}\nfoo : a ;\n")

    assert "@ header{\n    import x;\n}\n" in formatted


def test_empty_input_formats_to_empty_output() -> None:
    assert _format("") == ""


@pytest.mark.parametrize("case", CLEAN_CASES, ids=case_id)
def test_every_main_token_is_emitted_once_in_order(case: GrammarCase) -> None:
    assert _main_texts(_format(case.source)) == _main_texts(case.source)


@pytest.mark.parametrize("case", GRAMMAR_CASES, ids=case_id)
def test_every_comment_is_emitted_once(case: GrammarCase) -> None:
    assert _comment_texts(_format(case.source)) == _comment_texts(case.source)


@pytest.mark.parametrize("case", CLEAN_CASES, ids=case_id)
def test_formatting_is_idempotent(case: GrammarCase) -> None:
    once = _format(case.source)

    assert _format(once) == once


@pytest.mark.parametrize("scoped", [True, False])
@pytest.mark.parametrize("case", CLEAN_CASES, ids=case_id)
def test_indent_is_balanced_after_traversal(case: GrammarCase, scoped: bool) -> None:
    parsed = parse(case.source)
    formatter = GrammarFormatter(parsed.stream, io.StringIO(), FormatOptions(scoped_contexts=scoped))

    walk(parsed.root, formatter)
    formatter.finish()

    assert formatter.indent_depth == 0
    assert formatter.state.at_line_start is True


def test_error_nodes_keep_their_text_and_warn() -> None:
    parsed = parse("grammar T;\nfoo : a ;\n;\nbar : b ;\n")
    sink = io.StringIO()

    diagnostics = format_to(parsed, sink)

    assert [d.code for d in diagnostics] == ["FORMAT_ERROR_NODE"]
    assert sink.getvalue() == "grammar T;\n\nfoo\n   : a\n   ;\n;\nbar\n   : b\n   ;\n"


def test_write_failure_aborts_formatting() -> None:
    parsed = parse("grammar T;\nfoo : a ;\n")
    sink = io.StringIO()
    sink.close()

    with pytest.raises(FormatWriteError):
        format_to(parsed, sink)


def test_comment_after_empty_alternative_stays_before_rule_terminator() -> None:
    formatted = _format("grammar T;\nr : /* c1 */ ; // c2\n")

    assert formatted == "grammar T;\n\nr\n   :\n   /* c1 */\n   ;\n\n// c2\n"


@pytest.mark.parametrize(
    "source",
    [
        "grammar T;\nr : ( 'a' | /* c1 */ ) /* c2 */ 'b' ;\n",
        "grammar T;\nr : 'a' | /* c1 */ ; /* c2 */\n",
        "grammar T;\nr : /* c1 */ ; // c2\n",
    ],
    ids=["inside_block", "last_labeled_alt", "only_alternative"],
)
def test_comments_around_empty_alternatives_keep_source_order(source: str) -> None:
    formatted = _format(source)

    assert _comment_texts(formatted) == ["/* c1 */", _comment_texts(source)[1]]
    assert formatted.count("c1") == 1
    assert formatted.count("c2") == 1


def test_comment_inside_block_is_written_before_closing_paren() -> None:
    formatted = _format("grammar T;\nr : ( 'a' | /* c1 */ ) /* c2 */ 'b' ;\n")

    assert formatted.index("/* c1 */") < formatted.index(")") < formatted.index("/* c2 */")
