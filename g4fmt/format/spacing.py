"""Spacing policy between two emitted tokens."""

from typing import Final

from g4fmt.syntax import Category

NO_SPACE_BEFORE: Final[frozenset[str]] = frozenset({"?", "*", ";", ")"})
NO_SPACE_AFTER: Final[frozenset[str]] = frozenset({"("})


def needs_space(
    previous: str | None,
    text: str,
    category: Category | None = None,
    *,
    at_line_start: bool = False,
) -> bool:
    """Whether a single space separates ``previous`` from ``text``."""
    if at_line_start or previous is None:
        return False
    if category == Category.ACTION_BLOCK:
        return False
    return previous not in NO_SPACE_AFTER and text not in NO_SPACE_BEFORE
