"""Helpers to build a syntax tree from parser events."""

from g4fmt.diagnostics import Diagnostic
from g4fmt.lexer import TokenStream
from g4fmt.parser.event import Event, process_events
from g4fmt.parser.tree_sink import ParsedGrammar, StreamTreeSink


def build_tree(
    stream: TokenStream,
    events: list[Event],
    diagnostics: list[Diagnostic],
) -> ParsedGrammar:
    sink = StreamTreeSink(stream)
    process_events(sink, events, diagnostics)
    return sink.finish()
