"""Markers for event-based parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from g4fmt.parser.event import FinishEvent, StartEvent
from g4fmt.syntax import GrammarSyntaxKind

if TYPE_CHECKING:
    from g4fmt.parser.parser import Parser


@dataclass(slots=True)
class Marker:
    """An open node: a tombstone start event waiting for its kind."""

    pos: int

    def complete(self, parser: Parser, kind: GrammarSyntaxKind) -> CompletedMarker:
        event = parser.events[self.pos]
        if not isinstance(event, StartEvent):
            raise RuntimeError("Marker must point to a StartEvent")

        parser.events[self.pos] = StartEvent(kind=kind)
        finish_pos = len(parser.events)
        parser.events.append(FinishEvent())
        return CompletedMarker(start_pos=self.pos, finish_pos=finish_pos, kind=kind)


@dataclass(frozen=True, slots=True)
class CompletedMarker:
    start_pos: int
    finish_pos: int
    kind: GrammarSyntaxKind
