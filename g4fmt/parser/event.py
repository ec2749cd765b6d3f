"""Parser events."""

from dataclasses import dataclass
from typing import Protocol

from g4fmt.diagnostics import Diagnostic
from g4fmt.syntax import GrammarSyntaxKind


@dataclass(frozen=True, slots=True)
class StartEvent:
    kind: GrammarSyntaxKind

    @property
    def is_tombstone(self) -> bool:
        return self.kind == GrammarSyntaxKind.TOMBSTONE

    @staticmethod
    def tombstone() -> "StartEvent":
        return StartEvent(kind=GrammarSyntaxKind.TOMBSTONE)


@dataclass(frozen=True, slots=True)
class FinishEvent:
    pass


@dataclass(frozen=True, slots=True)
class TokenEvent:
    kind: GrammarSyntaxKind
    index: int  # absolute index in the full token stream


Event = StartEvent | FinishEvent | TokenEvent


class TreeSink(Protocol):
    def token(self, kind: GrammarSyntaxKind, index: int) -> None: ...

    def start_node(self, kind: GrammarSyntaxKind) -> None: ...

    def finish_node(self) -> None: ...

    def errors(self, errors: list[Diagnostic]) -> None: ...


def process_events(sink: TreeSink, events: list[Event], errors: list[Diagnostic]) -> None:
    """Replay parser events into a sink.

    Tombstones are markers that were started but never completed; they have
    no matching ``FinishEvent`` and are skipped.
    """
    sink.errors(errors)
    for event in events:
        match event:
            case StartEvent() if event.is_tombstone:
                continue
            case StartEvent(kind=kind):
                sink.start_node(kind)
            case FinishEvent():
                sink.finish_node()
            case TokenEvent(kind=kind, index=index):
                sink.token(kind, index)
