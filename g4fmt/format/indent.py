"""Indentation depth tracking."""

import logging

logger = logging.getLogger(__name__)


class IndentTracker:
    """Non-negative nesting depth; decrements below zero clamp at zero."""

    def __init__(self, depth: int = 0) -> None:
        self._depth = max(depth, 0)

    @property
    def depth(self) -> int:
        return self._depth

    def increment(self) -> None:
        self._depth += 1

    def decrement(self) -> None:
        if self._depth == 0:
            logger.warning("Indent decrement below zero ignored")
            return
        self._depth -= 1

    def restore(self, depth: int) -> None:
        self._depth = max(depth, 0)
