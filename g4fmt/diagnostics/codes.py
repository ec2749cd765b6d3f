"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint="Close the literal with a single quote before the end of the line.",
    severity="error",
    category="lexer",
)

LEXER_UNTERMINATED_COMMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_COMMENT",
    message="Unterminated block comment.",
    hint="Close the comment with `*/`.",
    severity="error",
    category="lexer",
)

LEXER_UNTERMINATED_ACTION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_ACTION",
    message="Unterminated action block.",
    hint="Balance the braces of the action.",
    severity="error",
    category="lexer",
)

LEXER_UNEXPECTED_CHARACTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNEXPECTED_CHARACTER",
    message="Unexpected character",
    severity="error",
    category="lexer",
)

PARSER_EXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_TOKEN",
    message="Expected token",
    severity="error",
    category="parser",
)

PARSER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_TOKEN",
    message="Unexpected token",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_ELEMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_ELEMENT",
    message="Expected a rule element",
    severity="error",
    category="parser",
)

FORMAT_ERROR_NODE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FORMAT_ERROR_NODE",
    message="Unparsed tokens were copied to the output unformatted.",
    hint="Fix the syntax error reported by the parser.",
    severity="warning",
    category="format",
)
