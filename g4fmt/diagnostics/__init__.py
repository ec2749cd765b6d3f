"""Diagnostics."""

from g4fmt.diagnostics.codes import (
    FORMAT_ERROR_NODE,
    LEXER_UNEXPECTED_CHARACTER,
    LEXER_UNTERMINATED_ACTION,
    LEXER_UNTERMINATED_COMMENT,
    LEXER_UNTERMINATED_STRING,
    PARSER_EXPECTED_ELEMENT,
    PARSER_EXPECTED_TOKEN,
    PARSER_UNEXPECTED_TOKEN,
    DiagnosticSpec,
)
from g4fmt.diagnostics.diagnostic import Diagnostic, Severity
from g4fmt.diagnostics.report import (
    collect_diagnostics,
    has_errors,
    make_diagnostic,
    render_diagnostic,
)

__all__ = [
    "FORMAT_ERROR_NODE",
    "LEXER_UNEXPECTED_CHARACTER",
    "LEXER_UNTERMINATED_ACTION",
    "LEXER_UNTERMINATED_COMMENT",
    "LEXER_UNTERMINATED_STRING",
    "PARSER_EXPECTED_ELEMENT",
    "PARSER_EXPECTED_TOKEN",
    "PARSER_UNEXPECTED_TOKEN",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "has_errors",
    "make_diagnostic",
    "render_diagnostic",
]
