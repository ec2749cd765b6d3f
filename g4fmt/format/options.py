"""Formatter configuration."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """Knobs for the formatting engine.

    ``scoped_contexts`` keeps a stack of enclosing categories and restores the
    outer one when a recognized node is left. With it off, the most recently
    entered category stays active until another one is entered.
    """

    indent_width: int = 3
    scoped_contexts: bool = True

    def __post_init__(self) -> None:
        if self.indent_width < 0:
            raise ValueError("indent_width cannot be negative")

    @property
    def indent_unit(self) -> str:
        return " " * self.indent_width
