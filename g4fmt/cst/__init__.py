"""Syntax tree structures."""

from g4fmt.cst.tree import SyntaxElement, SyntaxNode, TreeBuilder, dump_tree

__all__ = [
    "SyntaxElement",
    "SyntaxNode",
    "TreeBuilder",
    "dump_tree",
]
