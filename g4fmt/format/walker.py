"""Depth-first tree walk driving a formatting listener."""

from typing import Protocol

from g4fmt.cst import SyntaxNode
from g4fmt.lexer import Token


class TreeListener(Protocol):
    def enter_node(self, node: SyntaxNode) -> None: ...

    def exit_node(self, node: SyntaxNode) -> None: ...

    def visit_token(self, token: Token) -> None: ...


def walk(node: SyntaxNode, listener: TreeListener) -> None:
    """Call ``listener`` for every node and leaf of ``node`` in tree order."""
    listener.enter_node(node)
    for child in node.children:
        if isinstance(child, SyntaxNode):
            walk(child, listener)
        else:
            listener.visit_token(child)
    listener.exit_node(node)
