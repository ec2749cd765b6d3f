"""Unified syntax kinds for parser and syntax tree."""

from enum import IntEnum

from g4fmt.lexer import TokenKind


class GrammarSyntaxKind(IntEnum):
    """Grammar syntax vocabulary (tokens + nodes).

    Token kinds share their value with the matching ``TokenKind`` so the
    conversion is a plain lookup.
    """

    TOMBSTONE = 0
    EOF = 1
    ERROR_TOKEN = 2

    # Hidden tokens
    WHITESPACE = 10
    NEWLINE = 11
    LINE_COMMENT = 12
    BLOCK_COMMENT = 13

    # Lexical tokens
    DOC_COMMENT = 20
    TOKEN_REF = 21
    RULE_REF = 22
    STRING_LITERAL = 23
    INT = 24
    LEXER_CHAR_SET = 25
    ARG_ACTION = 26

    BEGIN_ACTION = 30
    ACTION_CONTENT = 31
    END_ACTION = 32

    OPTIONS = 40
    TOKENS = 41
    CHANNELS = 42
    IMPORT = 43
    FRAGMENT = 44
    LEXER = 45
    PARSER = 46
    GRAMMAR = 47
    PROTECTED = 48
    PUBLIC = 49
    PRIVATE = 50
    RETURNS = 51
    LOCALS = 52
    THROWS = 53
    CATCH = 54
    FINALLY = 55
    MODE = 56

    COLON = 60
    COLONCOLON = 61
    COMMA = 62
    SEMI = 63
    LPAREN = 64
    RPAREN = 65
    LBRACE = 66
    RBRACE = 67
    RARROW = 68
    LT = 69
    GT = 70
    ASSIGN = 71
    QUESTION = 72
    STAR = 73
    PLUS_ASSIGN = 74
    PLUS = 75
    OR = 76
    DOLLAR = 77
    RANGE = 78
    DOT = 79
    AT = 80
    POUND = 81
    NOT = 82

    # Node kinds
    ROOT = 1000
    ERROR = 1001
    GRAMMAR_SPEC = 1002
    GRAMMAR_TYPE = 1003
    IDENTIFIER = 1004

    # Prequel
    PREQUEL_CONSTRUCT = 1010
    OPTIONS_SPEC = 1011
    OPTION = 1012
    OPTION_VALUE = 1013
    DELEGATE_GRAMMARS = 1014
    DELEGATE_GRAMMAR = 1015
    TOKENS_SPEC = 1016
    CHANNELS_SPEC = 1017
    ID_LIST = 1018
    ACTION = 1019
    ACTION_SCOPE_NAME = 1020
    ACTION_BLOCK = 1021
    ARG_ACTION_BLOCK = 1022

    # Rules
    MODE_SPEC = 1030
    RULES = 1031
    RULE_SPEC = 1032
    PARSER_RULE_SPEC = 1033
    EXCEPTION_GROUP = 1034
    EXCEPTION_HANDLER = 1035
    FINALLY_CLAUSE = 1036
    RULE_PREQUEL = 1037
    RULE_RETURNS = 1038
    THROWS_SPEC = 1039
    LOCALS_SPEC = 1040
    RULE_ACTION = 1041
    RULE_MODIFIERS = 1042
    RULE_MODIFIER = 1043
    RULE_BLOCK = 1044
    RULE_ALT_LIST = 1045
    LABELED_ALT = 1046

    # Lexer rules
    LEXER_RULE_SPEC = 1050
    LEXER_RULE_BLOCK = 1051
    LEXER_ALT_LIST = 1052
    LEXER_ALT = 1053
    LEXER_ELEMENTS = 1054
    LEXER_ELEMENT = 1055
    LEXER_BLOCK = 1056
    LEXER_COMMANDS = 1057
    LEXER_COMMAND = 1058
    LEXER_COMMAND_NAME = 1059
    LEXER_COMMAND_EXPR = 1060
    LEXER_ATOM = 1061

    # Alternatives and elements
    ALT_LIST = 1070
    ALTERNATIVE = 1071
    ELEMENT = 1072
    LABELED_ELEMENT = 1073
    EBNF = 1074
    BLOCK_SUFFIX = 1075
    EBNF_SUFFIX = 1076
    ATOM = 1077
    NOT_SET = 1078
    BLOCK_SET = 1079
    SET_ELEMENT = 1080
    BLOCK = 1081
    RULEREF = 1082
    CHARACTER_RANGE = 1083
    TERMINAL = 1084
    ELEMENT_OPTIONS = 1085
    ELEMENT_OPTION = 1086

    @staticmethod
    def from_token_kind(kind: TokenKind) -> "GrammarSyntaxKind":
        return GrammarSyntaxKind(kind.value)
