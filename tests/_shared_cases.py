"""Centralized grammar source cases used across lexer/parser/format tests."""

from __future__ import annotations

from dataclasses import dataclass
import textwrap


@dataclass(frozen=True, slots=True)
class GrammarCase:
    name: str
    source: str
    should_parse_cleanly: bool = True


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


GRAMMAR_CASES: tuple[GrammarCase, ...] = (
    GrammarCase(name="minimal_parser_rule", source="grammar T;\nfoo : 'a' 'b' ;\n"),
    GrammarCase(
        name="expression_grammar",
        source=_dedent(
            r"""
            grammar Expr;

            prog : stat+ EOF ;
            stat : expr ';' # printExpr
                 | ID '=' expr ';' # assign
                 | ';' # blank
                 ;
            expr : expr ('*' | '/') expr
                 | expr ('+' | '-') expr
                 | INT
                 | ID
                 | '(' expr ')'
                 ;
            ID : [a-zA-Z]+ ;
            INT : [0-9]+ ;
            WS : [ \t\r\n]+ -> skip ;
            """
        ),
    ),
    GrammarCase(
        name="prequel_constructs",
        source=_dedent(
            """
            parser grammar P;

            options { tokenVocab = L; superClass = Base; }

            import Common;

            tokens { A, B, C }

            @header {
            package x;
            }

            @parser::members {
                int count = 0;
            }

            start : A B C ;
            """
        ),
    ),
    GrammarCase(
        name="lexer_grammar_with_modes",
        source=_dedent(
            r"""
            lexer grammar L;

            channels { COMMENTS }

            fragment DIGIT : [0-9] ;
            NUMBER : DIGIT+ ('.' DIGIT+)? ;
            STRING : '"' -> pushMode(STR) ;
            LINE_COMMENT : '//' ~[\r\n]* -> channel(COMMENTS) ;

            mode STR;
            STR_END : '"' -> popMode ;
            STR_TEXT : ~'"'+ ;
            """
        ),
    ),
    GrammarCase(
        name="rule_features",
        source=_dedent(
            """
            grammar Features;

            /** Entry point. */
            public start[int depth] returns [int result] locals [int tmp]
            options { caseInsensitive = true; }
            @init { tmp = 0; }
               : left=atom ops+=op* right=atom? {depth > 0}? <fail='deep'>
               | ~(SEMI | COMMA) .
               ;
               catch [RecognitionException e] { recover(e); }
               finally { cleanup(); }

            atom : ID<assoc=right> | INT ;
            op : '+' | '-' ;
            """
        ),
    ),
    GrammarCase(
        name="comments_everywhere",
        source=_dedent(
            """
            // Leading comment
            grammar Commented;

            /* block before options */
            options { language = Java; } // after options

            // before rule
            rule1 : a // after a
                  | b /* inline */ c
                  ;

            rule2 : ( x | y )* ; // trailing

            // end of file
            """
        ),
    ),
    GrammarCase(
        name="empty_alternatives_with_comments",
        source=_dedent(
            """
            grammar Empty;

            r : 'a' | /* c1 */ ; /* c2 */
            s : ( 'a' | /* c3 */ ) /* c4 */ 'b' ;
            t : /* c5 */ ; // c6
            """
        ),
    ),
    GrammarCase(
        name="stray_semicolon_between_rules",
        source="grammar T;\nfoo : a ;\n;\nbar : b ;\n",
        should_parse_cleanly=False,
    ),
    GrammarCase(
        name="missing_rule_terminator",
        source="grammar T;\nfoo : a\nbar : b ;\n",
        should_parse_cleanly=False,
    ),
)

CLEAN_CASES: tuple[GrammarCase, ...] = tuple(case for case in GRAMMAR_CASES if case.should_parse_cleanly)


def case_id(case: GrammarCase) -> str:
    return case.name
