"""Immutable syntax tree over the token stream."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

from g4fmt.lexer import Token
from g4fmt.syntax import Category, GrammarSyntaxKind, category_of


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """Composite node covering the token indices ``start_index..stop_index``.

    Leaves are the lexer's own ``Token`` objects. An empty node (an empty
    alternative, say) has ``start_index`` on the following token and
    ``stop_index`` on the preceding one, so ``start_index > stop_index``.
    """

    kind: GrammarSyntaxKind
    children: tuple["SyntaxElement", ...]
    start_index: int
    stop_index: int

    @property
    def category(self) -> Category:
        return category_of(self.kind)

    @property
    def token_start(self) -> int:
        return min(self.start_index, self.stop_index)

    @property
    def token_stop(self) -> int:
        return max(self.start_index, self.stop_index)

    @property
    def is_empty(self) -> bool:
        return not any(True for _ in self.iter_tokens())

    @property
    def text(self) -> str:
        """Main-channel text of the node, tokens joined by a single space."""
        return " ".join(token.text for token in self.iter_tokens() if token.text)

    def child_nodes(self) -> list["SyntaxNode"]:
        return [child for child in self.children if isinstance(child, SyntaxNode)]

    def iter_tokens(self) -> Iterator[Token]:
        for child in self.children:
            if isinstance(child, SyntaxNode):
                yield from child.iter_tokens()
            else:
                yield child

    def descendants(self) -> Iterator["SyntaxNode"]:
        yield self
        for child in self.child_nodes():
            yield from child.descendants()

    def find_all(self, kind: GrammarSyntaxKind) -> list["SyntaxNode"]:
        return [node for node in self.descendants() if node.kind == kind]


SyntaxElement: TypeAlias = SyntaxNode | Token


class TreeBuilder:
    """Builds ``SyntaxNode``s bottom-up from start/token/finish calls.

    The builder is handed the index of the next unconsumed main-channel token
    on every ``start_node`` and ``finish_node`` so that empty nodes still get a
    span.
    """

    def __init__(self) -> None:
        self._stack: list[tuple[GrammarSyntaxKind, list[SyntaxElement], int]] = []
        self._roots: list[SyntaxElement] = []
        self._last_token_index = -1

    def start_node(self, kind: GrammarSyntaxKind, next_index: int) -> None:
        self._stack.append((kind, [], next_index))

    def token(self, token: Token) -> None:
        self._last_token_index = token.index
        self._push_element(token)

    def finish_node(self, next_index: int) -> None:
        if not self._stack:
            raise RuntimeError("finish_node called with empty builder stack")

        kind, children, start_hint = self._stack.pop()
        tokens = [token for child in children for token in _element_tokens(child)]
        if tokens:
            start, stop = tokens[0].index, tokens[-1].index
        else:
            start = next_index if next_index >= 0 else start_hint
            stop = self._last_token_index if self._last_token_index >= 0 else start
        self._push_element(SyntaxNode(kind=kind, children=tuple(children), start_index=start, stop_index=stop))

    def finish(self) -> SyntaxNode:
        if self._stack:
            raise RuntimeError("Cannot finish tree: unclosed nodes remain on stack")

        if len(self._roots) == 1 and isinstance(self._roots[0], SyntaxNode):
            return self._roots[0]

        tokens = [token for child in self._roots for token in _element_tokens(child)]
        start = tokens[0].index if tokens else 0
        stop = tokens[-1].index if tokens else 0
        return SyntaxNode(
            kind=GrammarSyntaxKind.ROOT,
            children=tuple(self._roots),
            start_index=start,
            stop_index=stop,
        )

    def _push_element(self, element: SyntaxElement) -> None:
        if self._stack:
            self._stack[-1][1].append(element)
            return
        self._roots.append(element)


def _element_tokens(element: SyntaxElement) -> Iterator[Token]:
    if isinstance(element, SyntaxNode):
        yield from element.iter_tokens()
    else:
        yield element


def dump_tree(node: SyntaxNode) -> str:
    """Indented kind/text listing of a tree, for debugging and tests."""
    lines: list[str] = []

    def walk(current: SyntaxElement, depth: int) -> None:
        indent = "  " * depth
        if isinstance(current, SyntaxNode):
            lines.append(f"{indent}{current.kind.name} [{current.start_index}..{current.stop_index}]")
            for child in current.children:
                walk(child, depth + 1)
        else:
            lines.append(f"{indent}{current.kind.name} {current.text!r}")

    walk(node, 0)
    return "\n".join(lines)
