"""Context-aware formatting engine.

The engine is driven by three events coming from a tree walk: entering a
node, leaving it, and visiting a leaf token. The active syntactic category
decides what each leaf does to the layout; comments are pulled from the
hidden channel of the token stream around every node and leaf.
"""

import logging
from typing import TextIO

from g4fmt.cst import SyntaxNode
from g4fmt.diagnostics import FORMAT_ERROR_NODE, Diagnostic, make_diagnostic
from g4fmt.format.context import RECOGNIZED, FormatterState, Frame
from g4fmt.format.hidden import HiddenTokenLocator
from g4fmt.format.indent import IndentTracker
from g4fmt.format.options import FormatOptions
from g4fmt.format.spacing import needs_space
from g4fmt.format.writer import OutputWriter
from g4fmt.lexer import Token, TokenKind, TokenStream
from g4fmt.syntax import Category, GrammarSyntaxKind
from g4fmt.text import TextRange

logger = logging.getLogger(__name__)


class GrammarFormatter:
    """Listener that re-emits a grammar tree as formatted text into ``sink``."""

    def __init__(self, stream: TokenStream, sink: TextIO, options: FormatOptions | None = None) -> None:
        self._options = options or FormatOptions()
        self._stream = stream
        self._writer = OutputWriter(sink, self._options.indent_unit)
        self._locator = HiddenTokenLocator(stream)
        self._indent = IndentTracker()
        self._state = FormatterState()
        self._diagnostics: list[Diagnostic] = []

    @property
    def state(self) -> FormatterState:
        return self._state

    @property
    def locator(self) -> HiddenTokenLocator:
        return self._locator

    @property
    def indent_depth(self) -> int:
        return self._indent.depth

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    def enter_node(self, node: SyntaxNode) -> None:
        category = node.category
        for comment in self._locator.left_comments(node.token_start):
            self.write_comment(category, comment.text)

        if node.kind == GrammarSyntaxKind.ERROR:
            self._report_error_node(node)
            self._state.error_depth += 1
            return

        if category not in RECOGNIZED:
            return

        if self._options.scoped_contexts:
            self._state.frames.append(
                Frame(
                    category=self._state.active_category,
                    indent=self._indent.depth,
                    paren_depth=self._state.open_paren_depth,
                )
            )
        self._state.active_category = category
        if category.is_rule:
            self._state.open_paren_depth = 0
        if category.opens_block:
            self.line_break()

    def exit_node(self, node: SyntaxNode) -> None:
        # An empty node's stop is the following token, which is not written yet.
        if not node.is_empty:
            for comment in self._locator.right_comments(node.token_stop):
                self.write_comment(node.category, comment.text)

        if node.kind == GrammarSyntaxKind.ERROR:
            self._state.error_depth -= 1
            return

        if self._options.scoped_contexts and node.category in RECOGNIZED:
            frame = self._state.frames.pop()
            self._state.active_category = frame.category
            self._indent.restore(frame.indent)
            self._state.open_paren_depth = frame.paren_depth

    def visit_token(self, token: Token) -> None:
        category = self._state.category
        for comment in self._locator.left_comments(token.index):
            self.write_comment(category, comment.text)

        logger.debug("%s : %s", category, token.text)
        if token.kind == TokenKind.EOF:
            return
        if self._state.error_depth > 0:
            self.emit(token.text)
            return

        match category:
            case Category.OPTIONS_SPEC | Category.TOKENS_SPEC | Category.CHANNELS_SPEC | Category.MODE_SPEC:
                self._visit_braced(token)
            case Category.LABELED_ALT:
                self._visit_alternative(token)
            case Category.RULE_SPEC | Category.LEXER_RULE_SPEC:
                self._visit_rule(token, category)
            case Category.GRAMMAR_SPEC:
                self.emit(token.text)
                if token.kind in (TokenKind.SEMI, TokenKind.DOC_COMMENT):
                    self.line_break()
            case Category.ACTION_BLOCK:
                self._visit_action(token)
            case _:
                self.emit(token.text)

    def write_comment(self, category: Category, text: str) -> None:
        if category != Category.GRAMMAR_SPEC:
            self.line_break()
        self.emit(text)
        if category in (Category.GRAMMAR_SPEC, Category.GRAMMAR_TYPE):
            self.line_break()
        if text.lstrip().startswith("//"):
            self._state.pending_break = True

    def emit(self, text: str, *, spaced: bool = True) -> None:
        """Write ``text`` after the separating space the spacing policy asks for."""
        if not text:
            return
        if self._state.pending_break and not self._state.at_line_start:
            self.line_break()
        self._state.pending_break = False

        if spaced and needs_space(
            self._state.last_emitted_text,
            text,
            self._state.category,
            at_line_start=self._state.at_line_start,
        ):
            self._writer.write(" ")
        self._writer.write(text)
        self._state.at_line_start = False
        self._state.last_emitted_text = text

    def line_break(self) -> None:
        self._writer.line_break(self._indent.depth)
        self._state.at_line_start = True
        self._state.pending_break = False

    def finish(self) -> None:
        """Terminate the last line."""
        if self._writer.has_output and not self._state.at_line_start:
            self.line_break()
        if self._indent.depth != 0:
            logger.debug("Formatting ended at indent depth %d", self._indent.depth)

    def _visit_braced(self, token: Token) -> None:
        match token.kind:
            case TokenKind.LBRACE:
                self._indent.increment()
                self.line_break()
                self.emit(token.text)
            case TokenKind.RBRACE:
                self.emit(token.text)
                self._indent.decrement()
                self.line_break()
            case _:
                self.emit(token.text)

    def _visit_alternative(self, token: Token) -> None:
        match token.kind:
            case TokenKind.SEMI:
                self._close_rule(token)
            case TokenKind.LPAREN | TokenKind.RPAREN | TokenKind.OR:
                self._visit_alternative_punctuation(token)
            case _:
                self.emit(token.text)

    def _visit_alternative_punctuation(self, token: Token) -> None:
        match token.kind:
            case TokenKind.LPAREN:
                self.emit(token.text)
                self._state.open_paren_depth += 1
            case TokenKind.RPAREN:
                self.emit(token.text)
                if self._state.open_paren_depth == 0:
                    logger.warning("Unbalanced ')' at token %d", token.index)
                else:
                    self._state.open_paren_depth -= 1
            case _:
                if self._state.open_paren_depth == 0:
                    self.line_break()
                self.emit(token.text)

    def _visit_rule(self, token: Token, category: Category) -> None:
        match token.kind:
            case TokenKind.COLON:
                self._indent.increment()
                self.line_break()
                self.emit(token.text)
            case TokenKind.SEMI:
                self._close_rule(token)
            case TokenKind.DOC_COMMENT:
                self.emit(token.text)
                self.line_break()
            case TokenKind.LPAREN | TokenKind.RPAREN | TokenKind.OR if (
                self._options.scoped_contexts and category == Category.RULE_SPEC
            ):
                # Top-level alternatives of a parser rule are children of the
                # rule, not of a labeled alternative.
                self._visit_alternative_punctuation(token)
            case _:
                self.emit(token.text)

    def _visit_action(self, token: Token) -> None:
        text = token.text
        if token.kind == TokenKind.ACTION_CONTENT and self._state.at_line_start:
            text = text.lstrip()
            if not text:
                return
        self.emit(text, spaced=False)
        if token.kind in (TokenKind.SEMI, TokenKind.DOC_COMMENT, TokenKind.AT):
            self.line_break()

    def _close_rule(self, token: Token) -> None:
        self.line_break()
        self.emit(token.text)
        self._indent.decrement()
        self.line_break()

    def _report_error_node(self, node: SyntaxNode) -> None:
        tokens = list(node.iter_tokens())
        if tokens:
            span = tokens[0].range.cover(tokens[-1].range)
        else:
            span = TextRange.empty(self._stream.get(node.token_start).range.start)
        logger.warning("Copying %d unparsed token(s) at offset %d unformatted", len(tokens), span.start.value)
        self._diagnostics.append(make_diagnostic(FORMAT_ERROR_NODE, span))
