import pytest

from g4fmt.lexer import Channel, Token, TokenKind, TokenStream, lex
from g4fmt.text import TextRange


def _stream(source: str) -> TokenStream:
    tokens, _ = lex(source)
    return TokenStream(tokens)


def _indices(tokens: list[Token]) -> list[int]:
    return [token.index for token in tokens]


def test_stream_requires_trailing_eof() -> None:
    with pytest.raises(ValueError):
        TokenStream([])
    with pytest.raises(ValueError):
        TokenStream([Token(TokenKind.RULE_REF, "a", 0, TextRange(0, 1))])


def test_stream_is_a_sequence_over_all_tokens() -> None:
    stream = _stream("a /* x */ b")

    assert len(stream) == 6
    assert stream[0].text == "a"
    assert stream.get(4).text == "b"
    assert stream.text == "a /* x */ b"
    assert [token.text for token in stream.main_channel()] == ["a", "b", ""]


def test_get_rejects_out_of_range_indices() -> None:
    stream = _stream("a")

    with pytest.raises(IndexError):
        stream.get(-1)
    with pytest.raises(IndexError):
        stream.get(len(stream))


def test_hidden_tokens_to_left_stop_at_main_channel() -> None:
    # 0:a 1:ws 2:/* x */ 3:ws 4:b 5:EOF
    stream = _stream("a /* x */ b")

    assert _indices(stream.hidden_tokens_to_left(4)) == [1, 2, 3]
    assert _indices(stream.hidden_tokens_to_left(4, Channel.COMMENT)) == [2]
    assert stream.hidden_tokens_to_left(0) == []


def test_hidden_tokens_to_right_filter_by_channel() -> None:
    stream = _stream("a /* x */ b")

    assert _indices(stream.hidden_tokens_to_right(0)) == [1, 2, 3]
    assert _indices(stream.hidden_tokens_to_right(0, Channel.OFF_CHANNEL)) == [1, 3]
    assert stream.hidden_tokens_to_right(4) == []


def test_hidden_token_lookups_validate_index() -> None:
    stream = _stream("a")

    with pytest.raises(IndexError):
        stream.hidden_tokens_to_left(10)
    with pytest.raises(IndexError):
        stream.hidden_tokens_to_right(-1)
