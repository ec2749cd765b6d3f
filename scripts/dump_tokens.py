#!/usr/bin/env python
import argparse
from pathlib import Path

from g4fmt.cst import dump_tree
from g4fmt.lexer import dump_tokens, lex
from g4fmt.parser import parse


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump the tokens and syntax tree of a grammar file")
    parser.add_argument("grammar", type=Path)
    parser.add_argument("--tree", action="store_true", help="Also print the concrete syntax tree")
    args = parser.parse_args()

    text = args.grammar.read_text(encoding="utf-8")
    tokens, diagnostics = lex(text)
    dump_tokens(tokens, diagnostics)

    if args.tree:
        print()
        print(dump_tree(parse(text).root))


if __name__ == "__main__":
    main()
