"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from g4fmt.diagnostics.codes import DiagnosticSpec
from g4fmt.diagnostics.diagnostic import Diagnostic
from g4fmt.text import TextRange, offset_to_line_and_column


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return diagnostics


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def make_diagnostic(spec: DiagnosticSpec, range: TextRange, message: str | None = None) -> Diagnostic:
    """Instantiate a diagnostic from its spec, optionally overriding the message."""
    return Diagnostic(
        code=spec.code,
        message=message if message is not None else spec.message,
        range=range,
        severity=spec.severity,
        hint=spec.hint,
        category=spec.category,
    )


def render_diagnostic(diagnostic: Diagnostic, source: str, path: str = "<stdin>") -> str:
    """Render as ``path:line:col: severity CODE: message``."""
    line, column = offset_to_line_and_column(source, diagnostic.range.start)
    rendered = f"{path}:{line}:{column}: {diagnostic.severity} {diagnostic.code}: {diagnostic.message}"
    if diagnostic.hint:
        rendered += f" (hint: {diagnostic.hint})"
    return rendered
