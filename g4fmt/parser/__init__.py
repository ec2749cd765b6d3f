"""Parser infrastructure (token source + event-based parser + tree sink)."""

from g4fmt.parser.antlr import parse, parse_result
from g4fmt.parser.event import (
    Event,
    FinishEvent,
    StartEvent,
    TokenEvent,
    process_events,
)
from g4fmt.parser.grammar import parse_grammar_spec, parse_rules
from g4fmt.parser.marker import CompletedMarker, Marker
from g4fmt.parser.parse import build_tree
from g4fmt.parser.parse_lists import ParseNodeList
from g4fmt.parser.parse_recovery import ParseRecoveryTokenSet, RecoveryError
from g4fmt.parser.parser import Parser, ParserProgress
from g4fmt.parser.token_source import TokenSource
from g4fmt.parser.tree_sink import ParsedGrammar, StreamTreeSink

__all__ = [
    "CompletedMarker",
    "Event",
    "FinishEvent",
    "Marker",
    "ParseNodeList",
    "ParseRecoveryTokenSet",
    "ParsedGrammar",
    "Parser",
    "ParserProgress",
    "RecoveryError",
    "StartEvent",
    "StreamTreeSink",
    "TokenEvent",
    "TokenSource",
    "build_tree",
    "parse",
    "parse_grammar_spec",
    "parse_result",
    "parse_rules",
    "process_events",
]
