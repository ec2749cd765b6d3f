from g4fmt.syntax.category import NODE_CATEGORIES, Category, category_of
from g4fmt.syntax.kind import GrammarSyntaxKind

__all__ = ["NODE_CATEGORIES", "Category", "GrammarSyntaxKind", "category_of"]
