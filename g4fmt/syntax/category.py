"""Syntactic categories that select formatting rules."""

from enum import StrEnum
from typing import Final

from g4fmt.syntax.kind import GrammarSyntaxKind


class Category(StrEnum):
    GRAMMAR_SPEC = "GrammarSpec"
    GRAMMAR_TYPE = "GrammarType"
    OPTIONS_SPEC = "OptionsSpec"
    TOKENS_SPEC = "TokensSpec"
    CHANNELS_SPEC = "ChannelsSpec"
    MODE_SPEC = "ModeSpec"
    RULE_SPEC = "RuleSpec"
    LEXER_RULE_SPEC = "LexerRuleSpec"
    LABELED_ALT = "LabeledAlternative"
    ACTION_BLOCK = "ActionBlock"
    OTHER = "Other"

    @property
    def opens_block(self) -> bool:
        """Categories whose entry forces a line break."""
        return self in _BLOCK_CATEGORIES

    @property
    def is_rule(self) -> bool:
        return self in (Category.RULE_SPEC, Category.LEXER_RULE_SPEC)


_BLOCK_CATEGORIES: Final[frozenset[Category]] = frozenset(
    {
        Category.GRAMMAR_SPEC,
        Category.OPTIONS_SPEC,
        Category.TOKENS_SPEC,
        Category.CHANNELS_SPEC,
        Category.MODE_SPEC,
        Category.RULE_SPEC,
        Category.LEXER_RULE_SPEC,
    }
)

# RULE_SPEC is the wrapper around both rule flavours; parser rules are only
# recognized through it.
NODE_CATEGORIES: Final[dict[GrammarSyntaxKind, Category]] = {
    GrammarSyntaxKind.GRAMMAR_SPEC: Category.GRAMMAR_SPEC,
    GrammarSyntaxKind.GRAMMAR_TYPE: Category.GRAMMAR_TYPE,
    GrammarSyntaxKind.OPTIONS_SPEC: Category.OPTIONS_SPEC,
    GrammarSyntaxKind.TOKENS_SPEC: Category.TOKENS_SPEC,
    GrammarSyntaxKind.CHANNELS_SPEC: Category.CHANNELS_SPEC,
    GrammarSyntaxKind.MODE_SPEC: Category.MODE_SPEC,
    GrammarSyntaxKind.RULE_SPEC: Category.RULE_SPEC,
    GrammarSyntaxKind.LEXER_RULE_SPEC: Category.LEXER_RULE_SPEC,
    GrammarSyntaxKind.LABELED_ALT: Category.LABELED_ALT,
    GrammarSyntaxKind.ACTION_BLOCK: Category.ACTION_BLOCK,
}


def category_of(kind: GrammarSyntaxKind) -> Category:
    return NODE_CATEGORIES.get(kind, Category.OTHER)
