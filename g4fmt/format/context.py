"""Formatter state and context frames."""

from dataclasses import dataclass, field
from typing import Final

from g4fmt.syntax import Category

# Categories that become the active category when their node is entered.
RECOGNIZED: Final[frozenset[Category]] = frozenset(
    {
        Category.GRAMMAR_SPEC,
        Category.OPTIONS_SPEC,
        Category.TOKENS_SPEC,
        Category.CHANNELS_SPEC,
        Category.MODE_SPEC,
        Category.RULE_SPEC,
        Category.LEXER_RULE_SPEC,
        Category.LABELED_ALT,
        Category.ACTION_BLOCK,
    }
)


@dataclass(frozen=True, slots=True)
class Frame:
    """What to restore when a recognized node is left (scoped contexts)."""

    category: Category | None
    indent: int
    paren_depth: int


@dataclass(slots=True)
class FormatterState:
    active_category: Category | None = None
    at_line_start: bool = True
    open_paren_depth: int = 0
    last_emitted_text: str | None = None
    pending_break: bool = False
    error_depth: int = 0
    frames: list[Frame] = field(default_factory=list)

    @property
    def category(self) -> Category:
        return self.active_category if self.active_category is not None else Category.OTHER
