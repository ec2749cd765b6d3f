"""ANTLR v4 grammar routines that emit syntax tree events."""

from collections.abc import Callable
from typing import Final

from g4fmt.diagnostics.codes import (
    PARSER_EXPECTED_ELEMENT,
    PARSER_EXPECTED_TOKEN,
    PARSER_UNEXPECTED_TOKEN,
)
from g4fmt.lexer import TokenKind
from g4fmt.parser.marker import CompletedMarker
from g4fmt.parser.parse_lists import ParseNodeList
from g4fmt.parser.parse_recovery import ParseRecoveryTokenSet
from g4fmt.parser.parser import Parser, ParserProgress
from g4fmt.syntax import GrammarSyntaxKind as K

IDENTIFIERS: Final[frozenset[TokenKind]] = frozenset({TokenKind.RULE_REF, TokenKind.TOKEN_REF})

GRAMMAR_TYPE_START: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.LEXER, TokenKind.PARSER, TokenKind.GRAMMAR}
)

PREQUEL_START: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.OPTIONS, TokenKind.IMPORT, TokenKind.TOKENS, TokenKind.CHANNELS, TokenKind.AT}
)

RULE_MODIFIERS: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.PUBLIC, TokenKind.PRIVATE, TokenKind.PROTECTED, TokenKind.FRAGMENT}
)

EBNF_OPERATORS: Final[frozenset[TokenKind]] = frozenset({TokenKind.QUESTION, TokenKind.STAR, TokenKind.PLUS})

ELEMENT_START: Final[frozenset[TokenKind]] = frozenset(
    {
        TokenKind.RULE_REF,
        TokenKind.TOKEN_REF,
        TokenKind.STRING_LITERAL,
        TokenKind.DOT,
        TokenKind.NOT,
        TokenKind.LPAREN,
        TokenKind.BEGIN_ACTION,
    }
)

LEXER_ELEMENT_START: Final[frozenset[TokenKind]] = frozenset(
    {
        TokenKind.TOKEN_REF,
        TokenKind.STRING_LITERAL,
        TokenKind.LEXER_CHAR_SET,
        TokenKind.DOT,
        TokenKind.NOT,
        TokenKind.LPAREN,
        TokenKind.BEGIN_ACTION,
    }
)

RULE_LIST_RECOVERY: Final[frozenset[TokenKind]] = frozenset(
    {*IDENTIFIERS, *RULE_MODIFIERS, TokenKind.DOC_COMMENT, TokenKind.MODE, TokenKind.SEMI}
)

# Garbage up to and including the next ``;`` closes the construct being parsed.
TO_SEMI: Final[ParseRecoveryTokenSet] = ParseRecoveryTokenSet(
    node_kind=K.ERROR,
    recovery_set=frozenset({TokenKind.SEMI}),
    include_terminator=frozenset({TokenKind.SEMI}),
)

IN_BRACES: Final[ParseRecoveryTokenSet] = ParseRecoveryTokenSet(
    node_kind=K.ERROR,
    recovery_set=frozenset({TokenKind.SEMI, TokenKind.RBRACE}),
    include_terminator=frozenset({TokenKind.SEMI}),
)

TO_EOF: Final[ParseRecoveryTokenSet] = ParseRecoveryTokenSet(
    node_kind=K.ERROR,
    recovery_set=frozenset(),
)


def parse_grammar_spec(parser: Parser) -> CompletedMarker:
    """grammarSpec: DOC_COMMENT* grammarType identifier SEMI prequelConstruct* rules modeSpec* EOF"""
    root = parser.start()
    _bump_doc_comments(parser)

    if parser.at_set(GRAMMAR_TYPE_START):
        parse_grammar_type(parser)
        _expect_identifier(parser)
        parser.expect(TokenKind.SEMI, PARSER_EXPECTED_TOKEN)
    else:
        parser.error(PARSER_EXPECTED_TOKEN, "Expected a grammar declaration")

    while _kind_after_doc_comments(parser) in PREQUEL_START:
        _bump_doc_comments(parser)
        parse_prequel_construct(parser)

    parse_rules(parser)

    while True:
        _bump_doc_comments(parser)
        if not parser.at(TokenKind.MODE):
            break
        parse_mode_spec(parser)

    if not parser.at(TokenKind.EOF):
        parser.error(PARSER_UNEXPECTED_TOKEN, f"Unexpected token {parser.current.name}")
        TO_EOF.recover(parser)

    return root.complete(parser, K.GRAMMAR_SPEC)


def parse_grammar_type(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    if parser.eat(TokenKind.LEXER) or parser.eat(TokenKind.PARSER):
        parser.expect(TokenKind.GRAMMAR, PARSER_EXPECTED_TOKEN)
    else:
        parser.bump()
    return marker.complete(parser, K.GRAMMAR_TYPE)


def parse_identifier(parser: Parser) -> CompletedMarker | None:
    if not parser.at_set(IDENTIFIERS):
        return None
    marker = parser.start()
    parser.bump()
    return marker.complete(parser, K.IDENTIFIER)


def parse_prequel_construct(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    match parser.current:
        case TokenKind.OPTIONS:
            parse_options_spec(parser)
        case TokenKind.IMPORT:
            parse_delegate_grammars(parser)
        case TokenKind.TOKENS:
            parse_id_list_spec(parser, K.TOKENS_SPEC)
        case TokenKind.CHANNELS:
            parse_id_list_spec(parser, K.CHANNELS_SPEC)
        case _:
            parse_action(parser)
    return marker.complete(parser, K.PREQUEL_CONSTRUCT)


def parse_options_spec(parser: Parser) -> CompletedMarker:
    """optionsSpec: OPTIONS LBRACE (option SEMI)* RBRACE"""
    marker = parser.start()
    parser.bump()
    if parser.expect(TokenKind.LBRACE, PARSER_EXPECTED_TOKEN):
        progress = ParserProgress()
        while not parser.at(TokenKind.RBRACE) and not parser.at(TokenKind.EOF):
            progress.assert_progressing(parser)
            if parser.at_set(IDENTIFIERS):
                parse_option(parser)
                if not parser.eat(TokenKind.SEMI):
                    parser.error(PARSER_EXPECTED_TOKEN, "Expected SEMI after option")
                    IN_BRACES.recover(parser)
            else:
                parser.error(PARSER_UNEXPECTED_TOKEN, f"Unexpected token {parser.current.name} in options")
                IN_BRACES.recover(parser)
        parser.expect(TokenKind.RBRACE, PARSER_EXPECTED_TOKEN)
    return marker.complete(parser, K.OPTIONS_SPEC)


def parse_option(parser: Parser) -> CompletedMarker:
    """option: identifier ASSIGN optionValue"""
    marker = parser.start()
    parse_identifier(parser)
    if parser.expect(TokenKind.ASSIGN, PARSER_EXPECTED_TOKEN):
        parse_option_value(parser)
    return marker.complete(parser, K.OPTION)


def parse_option_value(parser: Parser) -> CompletedMarker:
    """optionValue: identifier (DOT identifier)* | STRING_LITERAL | actionBlock | INT"""
    marker = parser.start()
    if parser.at_set(IDENTIFIERS):
        parse_identifier(parser)
        while parser.at(TokenKind.DOT) and parser.nth(1) in IDENTIFIERS:
            parser.bump()
            parse_identifier(parser)
    elif parser.at(TokenKind.STRING_LITERAL) or parser.at(TokenKind.INT):
        parser.bump()
    elif parser.at(TokenKind.BEGIN_ACTION):
        parse_action_block(parser)
    else:
        parser.error(PARSER_EXPECTED_ELEMENT, "Expected an option value")
    return marker.complete(parser, K.OPTION_VALUE)


def parse_delegate_grammars(parser: Parser) -> CompletedMarker:
    """delegateGrammars: IMPORT delegateGrammar (COMMA delegateGrammar)* SEMI"""
    marker = parser.start()
    parser.bump()
    parse_delegate_grammar(parser)
    while parser.eat(TokenKind.COMMA):
        parse_delegate_grammar(parser)
    if not parser.eat(TokenKind.SEMI):
        parser.error(PARSER_EXPECTED_TOKEN, "Expected SEMI after import")
        TO_SEMI.recover(parser)
    return marker.complete(parser, K.DELEGATE_GRAMMARS)


def parse_delegate_grammar(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    _expect_identifier(parser)
    if parser.eat(TokenKind.ASSIGN):
        _expect_identifier(parser)
    return marker.complete(parser, K.DELEGATE_GRAMMAR)


def parse_id_list_spec(parser: Parser, kind: K) -> CompletedMarker:
    """tokensSpec / channelsSpec: keyword LBRACE idList? RBRACE"""
    marker = parser.start()
    parser.bump()
    if parser.expect(TokenKind.LBRACE, PARSER_EXPECTED_TOKEN):
        if parser.at_set(IDENTIFIERS):
            parse_id_list(parser)
        if not parser.eat(TokenKind.RBRACE):
            parser.error(PARSER_EXPECTED_TOKEN, "Expected RBRACE")
            ParseRecoveryTokenSet(
                node_kind=K.ERROR,
                recovery_set=frozenset({TokenKind.RBRACE}),
                include_terminator=frozenset({TokenKind.RBRACE}),
            ).recover(parser)
    return marker.complete(parser, kind)


def parse_id_list(parser: Parser) -> CompletedMarker:
    """idList: identifier (COMMA identifier)* COMMA?"""
    marker = parser.start()
    parse_identifier(parser)
    while parser.eat(TokenKind.COMMA):
        if parse_identifier(parser) is None:
            break
    return marker.complete(parser, K.ID_LIST)


def parse_action(parser: Parser) -> CompletedMarker:
    """action_: AT (actionScopeName COLONCOLON)? identifier actionBlock"""
    marker = parser.start()
    parser.bump()
    if parser.nth(1) == TokenKind.COLONCOLON:
        scope = parser.start()
        if parse_identifier(parser) is None:
            parser.bump()
        scope.complete(parser, K.ACTION_SCOPE_NAME)
        parser.bump()
    _expect_identifier(parser)
    if parser.at(TokenKind.BEGIN_ACTION):
        parse_action_block(parser)
    else:
        parser.error(PARSER_EXPECTED_TOKEN, "Expected an action block")
    return marker.complete(parser, K.ACTION)


def parse_action_block(parser: Parser) -> CompletedMarker:
    """actionBlock: BEGIN_ACTION ACTION_CONTENT* END_ACTION"""
    marker = parser.start()
    parser.bump()
    while not parser.at(TokenKind.END_ACTION) and not parser.at(TokenKind.EOF):
        parser.bump()
    parser.expect(TokenKind.END_ACTION, PARSER_EXPECTED_TOKEN)
    return marker.complete(parser, K.ACTION_BLOCK)


def parse_arg_action_block(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parser.expect(TokenKind.ARG_ACTION, PARSER_EXPECTED_TOKEN)
    return marker.complete(parser, K.ARG_ACTION_BLOCK)


def parse_rules(parser: Parser) -> CompletedMarker:
    """rules: ruleSpec*"""
    recovery = ParseRecoveryTokenSet(
        node_kind=K.ERROR,
        recovery_set=RULE_LIST_RECOVERY,
        include_terminator=frozenset({TokenKind.SEMI}),
    )

    def recover_element(current: Parser) -> bool:
        current.error(PARSER_UNEXPECTED_TOKEN, f"Unexpected token {current.current.name}, expected a rule")
        _, recovery_error = recovery.recover(current)
        return recovery_error is None

    return ParseNodeList(
        list_kind=K.RULES,
        is_at_list_end=lambda current: _kind_after_doc_comments(current) in (TokenKind.MODE, TokenKind.EOF),
        parse_element=parse_rule_spec,
        recover=recover_element,
    ).parse_list(parser)


def parse_rule_spec(parser: Parser) -> CompletedMarker | None:
    """ruleSpec: parserRuleSpec | lexerRuleSpec"""
    match _rule_name_kind(parser):
        case TokenKind.RULE_REF:
            marker = parser.start()
            parse_parser_rule_spec(parser)
            return marker.complete(parser, K.RULE_SPEC)
        case TokenKind.TOKEN_REF:
            marker = parser.start()
            parse_lexer_rule_spec(parser)
            return marker.complete(parser, K.RULE_SPEC)
        case _:
            return None


def parse_parser_rule_spec(parser: Parser) -> CompletedMarker:
    """parserRuleSpec: DOC_COMMENT* ruleModifiers? RULE_REF argActionBlock? ruleReturns?
    throwsSpec? localsSpec? rulePrequel* COLON ruleBlock SEMI exceptionGroup
    """
    marker = parser.start()
    _bump_doc_comments(parser)
    if parser.at_set(RULE_MODIFIERS):
        parse_rule_modifiers(parser)
    parser.expect(TokenKind.RULE_REF, PARSER_EXPECTED_TOKEN)

    if parser.at(TokenKind.ARG_ACTION):
        parse_arg_action_block(parser)
    if parser.at(TokenKind.RETURNS):
        _parse_keyword_with_arg_action(parser, K.RULE_RETURNS)
    if parser.at(TokenKind.THROWS):
        parse_throws_spec(parser)
    if parser.at(TokenKind.LOCALS):
        _parse_keyword_with_arg_action(parser, K.LOCALS_SPEC)
    while parser.at(TokenKind.OPTIONS) or parser.at(TokenKind.AT):
        parse_rule_prequel(parser)

    _parse_rule_body(parser, parse_rule_block)
    parse_exception_group(parser)
    return marker.complete(parser, K.PARSER_RULE_SPEC)


def parse_rule_modifiers(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    while parser.at_set(RULE_MODIFIERS):
        modifier = parser.start()
        parser.bump()
        modifier.complete(parser, K.RULE_MODIFIER)
    return marker.complete(parser, K.RULE_MODIFIERS)


def parse_throws_spec(parser: Parser) -> CompletedMarker:
    """throwsSpec: THROWS identifier (COMMA identifier)*"""
    marker = parser.start()
    parser.bump()
    _expect_identifier(parser)
    while parser.eat(TokenKind.COMMA):
        _expect_identifier(parser)
    return marker.complete(parser, K.THROWS_SPEC)


def parse_rule_prequel(parser: Parser) -> CompletedMarker:
    """rulePrequel: optionsSpec | ruleAction"""
    marker = parser.start()
    if parser.at(TokenKind.OPTIONS):
        parse_options_spec(parser)
    else:
        parse_rule_action(parser)
    return marker.complete(parser, K.RULE_PREQUEL)


def parse_rule_action(parser: Parser) -> CompletedMarker:
    """ruleAction: AT identifier actionBlock"""
    marker = parser.start()
    parser.bump()
    _expect_identifier(parser)
    if parser.at(TokenKind.BEGIN_ACTION):
        parse_action_block(parser)
    else:
        parser.error(PARSER_EXPECTED_TOKEN, "Expected an action block")
    return marker.complete(parser, K.RULE_ACTION)


def parse_exception_group(parser: Parser) -> CompletedMarker | None:
    """exceptionGroup: exceptionHandler* finallyClause?"""
    if not parser.at(TokenKind.CATCH) and not parser.at(TokenKind.FINALLY):
        return None

    marker = parser.start()
    while parser.at(TokenKind.CATCH):
        handler = parser.start()
        parser.bump()
        parse_arg_action_block(parser)
        _expect_action_block(parser)
        handler.complete(parser, K.EXCEPTION_HANDLER)
    if parser.at(TokenKind.FINALLY):
        clause = parser.start()
        parser.bump()
        _expect_action_block(parser)
        clause.complete(parser, K.FINALLY_CLAUSE)
    return marker.complete(parser, K.EXCEPTION_GROUP)


def parse_rule_block(parser: Parser) -> CompletedMarker:
    """ruleBlock: ruleAltList; ruleAltList: labeledAlt (OR labeledAlt)*"""
    marker = parser.start()
    alt_list = parser.start()
    parse_labeled_alt(parser)
    while parser.eat(TokenKind.OR):
        parse_labeled_alt(parser)
    alt_list.complete(parser, K.RULE_ALT_LIST)
    return marker.complete(parser, K.RULE_BLOCK)


def parse_labeled_alt(parser: Parser) -> CompletedMarker:
    """labeledAlt: alternative (POUND identifier)?"""
    marker = parser.start()
    parse_alternative(parser)
    if parser.eat(TokenKind.POUND):
        _expect_identifier(parser)
    return marker.complete(parser, K.LABELED_ALT)


def parse_alt_list(parser: Parser) -> CompletedMarker:
    """altList: alternative (OR alternative)*"""
    marker = parser.start()
    parse_alternative(parser)
    while parser.eat(TokenKind.OR):
        parse_alternative(parser)
    return marker.complete(parser, K.ALT_LIST)


def parse_alternative(parser: Parser) -> CompletedMarker:
    """alternative: elementOptions? element+ | <empty>"""
    marker = parser.start()
    if parser.at(TokenKind.LT):
        parse_element_options(parser)
    while parser.at_set(ELEMENT_START):
        parse_element(parser)
    return marker.complete(parser, K.ALTERNATIVE)


def parse_element(parser: Parser) -> CompletedMarker:
    """element: labeledElement ebnfSuffix? | atom ebnfSuffix? | ebnf | actionBlock QUESTION? elementOptions?"""
    marker = parser.start()
    if parser.at_set(IDENTIFIERS) and parser.nth(1) in (TokenKind.ASSIGN, TokenKind.PLUS_ASSIGN):
        parse_labeled_element(parser)
        _parse_optional_ebnf_suffix(parser)
    elif parser.at(TokenKind.LPAREN):
        parse_ebnf(parser)
    elif parser.at(TokenKind.BEGIN_ACTION):
        parse_action_block(parser)
        parser.eat(TokenKind.QUESTION)
        if parser.at(TokenKind.LT):
            parse_element_options(parser)
    else:
        parse_atom(parser)
        _parse_optional_ebnf_suffix(parser)
    return marker.complete(parser, K.ELEMENT)


def parse_labeled_element(parser: Parser) -> CompletedMarker:
    """labeledElement: identifier (ASSIGN | PLUS_ASSIGN) (atom | block)"""
    marker = parser.start()
    parse_identifier(parser)
    parser.bump()
    if parser.at(TokenKind.LPAREN):
        parse_block(parser)
    else:
        parse_atom(parser)
    return marker.complete(parser, K.LABELED_ELEMENT)


def parse_ebnf(parser: Parser) -> CompletedMarker:
    """ebnf: block blockSuffix?"""
    marker = parser.start()
    parse_block(parser)
    if parser.at_set(EBNF_OPERATORS):
        suffix = parser.start()
        parse_ebnf_suffix(parser)
        suffix.complete(parser, K.BLOCK_SUFFIX)
    return marker.complete(parser, K.EBNF)


def parse_ebnf_suffix(parser: Parser) -> CompletedMarker:
    """ebnfSuffix: (QUESTION | STAR | PLUS) QUESTION?"""
    marker = parser.start()
    parser.bump()
    parser.eat(TokenKind.QUESTION)
    return marker.complete(parser, K.EBNF_SUFFIX)


def parse_block(parser: Parser) -> CompletedMarker:
    """block: LPAREN (optionsSpec? ruleAction* COLON)? altList RPAREN"""
    marker = parser.start()
    parser.bump()
    if parser.at(TokenKind.OPTIONS) or parser.at(TokenKind.AT) or parser.at(TokenKind.COLON):
        if parser.at(TokenKind.OPTIONS):
            parse_options_spec(parser)
        while parser.at(TokenKind.AT):
            parse_rule_action(parser)
        parser.expect(TokenKind.COLON, PARSER_EXPECTED_TOKEN)
    parse_alt_list(parser)
    parser.expect(TokenKind.RPAREN, PARSER_EXPECTED_TOKEN)
    return marker.complete(parser, K.BLOCK)


def parse_atom(parser: Parser) -> CompletedMarker:
    """atom: terminalDef | ruleref | notSet | DOT elementOptions?"""
    marker = parser.start()
    match parser.current:
        case TokenKind.RULE_REF:
            parse_ruleref(parser)
        case TokenKind.TOKEN_REF | TokenKind.STRING_LITERAL:
            parse_terminal(parser)
        case TokenKind.NOT:
            parse_not_set(parser)
        case TokenKind.DOT:
            parser.bump()
            if parser.at(TokenKind.LT):
                parse_element_options(parser)
        case _:
            parser.error(PARSER_EXPECTED_ELEMENT, f"Expected a rule element but found {parser.current.name}")
    return marker.complete(parser, K.ATOM)


def parse_ruleref(parser: Parser) -> CompletedMarker:
    """ruleref: RULE_REF argActionBlock? elementOptions?"""
    marker = parser.start()
    parser.bump()
    if parser.at(TokenKind.ARG_ACTION):
        parse_arg_action_block(parser)
    if parser.at(TokenKind.LT):
        parse_element_options(parser)
    return marker.complete(parser, K.RULEREF)


def parse_terminal(parser: Parser) -> CompletedMarker:
    """terminalDef: (TOKEN_REF | STRING_LITERAL) elementOptions?"""
    marker = parser.start()
    parser.bump()
    if parser.at(TokenKind.LT):
        parse_element_options(parser)
    return marker.complete(parser, K.TERMINAL)


def parse_not_set(parser: Parser) -> CompletedMarker:
    """notSet: NOT setElement | NOT blockSet"""
    marker = parser.start()
    parser.bump()
    if parser.at(TokenKind.LPAREN):
        parse_block_set(parser)
    else:
        parse_set_element(parser)
    return marker.complete(parser, K.NOT_SET)


def parse_block_set(parser: Parser) -> CompletedMarker:
    """blockSet: LPAREN setElement (OR setElement)* RPAREN"""
    marker = parser.start()
    parser.bump()
    parse_set_element(parser)
    while parser.eat(TokenKind.OR):
        parse_set_element(parser)
    parser.expect(TokenKind.RPAREN, PARSER_EXPECTED_TOKEN)
    return marker.complete(parser, K.BLOCK_SET)


def parse_set_element(parser: Parser) -> CompletedMarker:
    """setElement: TOKEN_REF elementOptions? | STRING_LITERAL elementOptions? | characterRange | LEXER_CHAR_SET"""
    marker = parser.start()
    if parser.at(TokenKind.STRING_LITERAL) and parser.nth(1) == TokenKind.RANGE:
        parse_character_range(parser)
    elif parser.at(TokenKind.TOKEN_REF) or parser.at(TokenKind.STRING_LITERAL):
        parser.bump()
        if parser.at(TokenKind.LT):
            parse_element_options(parser)
    elif parser.at(TokenKind.LEXER_CHAR_SET):
        parser.bump()
    else:
        parser.error(PARSER_EXPECTED_ELEMENT, f"Expected a set element but found {parser.current.name}")
    return marker.complete(parser, K.SET_ELEMENT)


def parse_character_range(parser: Parser) -> CompletedMarker:
    """characterRange: STRING_LITERAL RANGE STRING_LITERAL"""
    marker = parser.start()
    parser.bump()
    parser.bump()
    parser.expect(TokenKind.STRING_LITERAL, PARSER_EXPECTED_TOKEN)
    return marker.complete(parser, K.CHARACTER_RANGE)


def parse_element_options(parser: Parser) -> CompletedMarker:
    """elementOptions: LT elementOption (COMMA elementOption)* GT"""
    marker = parser.start()
    parser.bump()
    parse_element_option(parser)
    while parser.eat(TokenKind.COMMA):
        parse_element_option(parser)
    parser.expect(TokenKind.GT, PARSER_EXPECTED_TOKEN)
    return marker.complete(parser, K.ELEMENT_OPTIONS)


def parse_element_option(parser: Parser) -> CompletedMarker:
    """elementOption: identifier | identifier ASSIGN (identifier | STRING_LITERAL)"""
    marker = parser.start()
    _expect_identifier(parser)
    if parser.eat(TokenKind.ASSIGN):
        if parse_identifier(parser) is None:
            parser.expect(TokenKind.STRING_LITERAL, PARSER_EXPECTED_TOKEN)
    return marker.complete(parser, K.ELEMENT_OPTION)


def parse_lexer_rule_spec(parser: Parser) -> CompletedMarker:
    """lexerRuleSpec: DOC_COMMENT* FRAGMENT? TOKEN_REF optionsSpec? COLON lexerRuleBlock SEMI"""
    marker = parser.start()
    _bump_doc_comments(parser)
    parser.eat(TokenKind.FRAGMENT)
    parser.expect(TokenKind.TOKEN_REF, PARSER_EXPECTED_TOKEN)
    if parser.at(TokenKind.OPTIONS):
        parse_options_spec(parser)
    _parse_rule_body(parser, parse_lexer_rule_block)
    return marker.complete(parser, K.LEXER_RULE_SPEC)


def parse_lexer_rule_block(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parse_lexer_alt_list(parser)
    return marker.complete(parser, K.LEXER_RULE_BLOCK)


def parse_lexer_alt_list(parser: Parser) -> CompletedMarker:
    """lexerAltList: lexerAlt (OR lexerAlt)*"""
    marker = parser.start()
    parse_lexer_alt(parser)
    while parser.eat(TokenKind.OR):
        parse_lexer_alt(parser)
    return marker.complete(parser, K.LEXER_ALT_LIST)


def parse_lexer_alt(parser: Parser) -> CompletedMarker:
    """lexerAlt: lexerElements lexerCommands? | <empty>"""
    marker = parser.start()
    if parser.at_set(LEXER_ELEMENT_START):
        elements = parser.start()
        while parser.at_set(LEXER_ELEMENT_START):
            parse_lexer_element(parser)
        elements.complete(parser, K.LEXER_ELEMENTS)
    if parser.at(TokenKind.RARROW):
        parse_lexer_commands(parser)
    return marker.complete(parser, K.LEXER_ALT)


def parse_lexer_element(parser: Parser) -> CompletedMarker:
    """lexerElement: lexerAtom ebnfSuffix? | lexerBlock ebnfSuffix? | actionBlock QUESTION?"""
    marker = parser.start()
    if parser.at(TokenKind.LPAREN):
        block = parser.start()
        parser.bump()
        parse_lexer_alt_list(parser)
        parser.expect(TokenKind.RPAREN, PARSER_EXPECTED_TOKEN)
        block.complete(parser, K.LEXER_BLOCK)
        _parse_optional_ebnf_suffix(parser)
    elif parser.at(TokenKind.BEGIN_ACTION):
        parse_action_block(parser)
        parser.eat(TokenKind.QUESTION)
    else:
        parse_lexer_atom(parser)
        _parse_optional_ebnf_suffix(parser)
    return marker.complete(parser, K.LEXER_ELEMENT)


def parse_lexer_atom(parser: Parser) -> CompletedMarker:
    """lexerAtom: characterRange | terminalDef | notSet | LEXER_CHAR_SET | DOT elementOptions?"""
    marker = parser.start()
    match parser.current:
        case TokenKind.STRING_LITERAL if parser.nth(1) == TokenKind.RANGE:
            parse_character_range(parser)
        case TokenKind.TOKEN_REF | TokenKind.STRING_LITERAL:
            parse_terminal(parser)
        case TokenKind.NOT:
            parse_not_set(parser)
        case TokenKind.LEXER_CHAR_SET:
            parser.bump()
        case _:
            parser.bump()
            if parser.at(TokenKind.LT):
                parse_element_options(parser)
    return marker.complete(parser, K.LEXER_ATOM)


def parse_lexer_commands(parser: Parser) -> CompletedMarker:
    """lexerCommands: RARROW lexerCommand (COMMA lexerCommand)*"""
    marker = parser.start()
    parser.bump()
    parse_lexer_command(parser)
    while parser.eat(TokenKind.COMMA):
        parse_lexer_command(parser)
    return marker.complete(parser, K.LEXER_COMMANDS)


def parse_lexer_command(parser: Parser) -> CompletedMarker:
    """lexerCommand: lexerCommandName (LPAREN lexerCommandExpr RPAREN)?"""
    marker = parser.start()
    name = parser.start()
    if not parser.eat(TokenKind.MODE):
        _expect_identifier(parser)
    name.complete(parser, K.LEXER_COMMAND_NAME)

    if parser.eat(TokenKind.LPAREN):
        expr = parser.start()
        if not parser.eat(TokenKind.INT):
            _expect_identifier(parser)
        expr.complete(parser, K.LEXER_COMMAND_EXPR)
        parser.expect(TokenKind.RPAREN, PARSER_EXPECTED_TOKEN)
    return marker.complete(parser, K.LEXER_COMMAND)


def parse_mode_spec(parser: Parser) -> CompletedMarker:
    """modeSpec: MODE identifier SEMI lexerRuleSpec*"""
    marker = parser.start()
    parser.bump()
    _expect_identifier(parser)
    parser.expect(TokenKind.SEMI, PARSER_EXPECTED_TOKEN)
    while _rule_name_kind(parser) == TokenKind.TOKEN_REF:
        parse_lexer_rule_spec(parser)
    return marker.complete(parser, K.MODE_SPEC)


def _parse_rule_body(parser: Parser, parse_block_fn: Callable[[Parser], CompletedMarker]) -> None:
    """COLON <block> SEMI, closing the rule at the next ``;`` on errors."""
    if not parser.expect(TokenKind.COLON, PARSER_EXPECTED_TOKEN):
        TO_SEMI.recover(parser)
        return

    parse_block_fn(parser)
    if not parser.eat(TokenKind.SEMI):
        parser.error(PARSER_EXPECTED_TOKEN, f"Expected SEMI at end of rule but found {parser.current.name}")
        TO_SEMI.recover(parser)


def _parse_keyword_with_arg_action(parser: Parser, kind: K) -> CompletedMarker:
    marker = parser.start()
    parser.bump()
    parse_arg_action_block(parser)
    return marker.complete(parser, kind)


def _parse_optional_ebnf_suffix(parser: Parser) -> None:
    if parser.at_set(EBNF_OPERATORS):
        parse_ebnf_suffix(parser)


def _expect_action_block(parser: Parser) -> None:
    if parser.at(TokenKind.BEGIN_ACTION):
        parse_action_block(parser)
    else:
        parser.error(PARSER_EXPECTED_TOKEN, "Expected an action block")


def _expect_identifier(parser: Parser) -> CompletedMarker | None:
    identifier = parse_identifier(parser)
    if identifier is None:
        parser.error(PARSER_EXPECTED_TOKEN, f"Expected an identifier but found {parser.current.name}")
    return identifier


def _bump_doc_comments(parser: Parser) -> None:
    while parser.at(TokenKind.DOC_COMMENT):
        parser.bump()


def _kind_after_doc_comments(parser: Parser) -> TokenKind:
    n = 0
    while parser.nth(n) == TokenKind.DOC_COMMENT:
        n += 1
    return parser.nth(n)


def _rule_name_kind(parser: Parser) -> TokenKind:
    """Kind of the rule name ahead, past doc comments and modifiers."""
    n = 0
    while parser.nth(n) == TokenKind.DOC_COMMENT or parser.nth(n) in RULE_MODIFIERS:
        n += 1
    return parser.nth(n)
