"""Command line entrypoint for the grammar formatter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from g4fmt.diagnostics import render_diagnostic
from g4fmt.format import FormatError, FormatOptions
from g4fmt.pipeline import FormatRunResult, run_format

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CHANGED = 1
EXIT_ERROR = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="g4fmt",
        description="Pretty print ANTLR v4 grammar files",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Grammar files or directories searched for *.g4 (default: read stdin)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-i", "--in-place", action="store_true", help="Rewrite files that would change")
    mode.add_argument(
        "--check",
        action="store_true",
        help="Write nothing; exit with 1 if any file would change",
    )
    parser.add_argument(
        "--indent-width",
        type=int,
        default=FormatOptions().indent_width,
        help="Spaces per indentation level (default: 3)",
    )
    parser.add_argument(
        "--flat-contexts",
        action="store_true",
        help="Keep the last entered category active instead of restoring enclosing ones",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the tqdm progress bar",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.indent_width < 0:
        parser.error("--indent-width cannot be negative")
    options = FormatOptions(indent_width=args.indent_width, scoped_contexts=not args.flat_contexts)

    if not args.paths:
        if args.in_place:
            parser.error("--in-place needs at least one path")
        return _format_stdin(options, check=args.check)

    files = _collect_grammar_files(args.paths)
    if not files:
        print("g4fmt: no grammar files found", file=sys.stderr)
        return EXIT_ERROR

    show_progress = (args.in_place or args.check) and len(files) > 1 and not args.no_progress
    iterator = tqdm(files, desc="g4fmt", unit="file") if show_progress else files

    status = EXIT_OK
    for path in iterator:
        file_status = _format_file(path, options, in_place=args.in_place, check=args.check)
        status = max(status, file_status)
    return status


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _collect_grammar_files(paths: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(candidate for candidate in path.rglob("*.g4") if candidate.is_file()))
        else:
            files.append(path)
    return files


def _format_stdin(options: FormatOptions, *, check: bool) -> int:
    text = sys.stdin.read()
    try:
        result = run_format(text, options)
    except FormatError as exc:
        print(f"<stdin>: error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    _report(result, "<stdin>")
    if not check:
        sys.stdout.write(result.formatted_text)
    return _status_for(result, check=check)


def _format_file(path: Path, options: FormatOptions, *, in_place: bool, check: bool) -> int:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"{path}: error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    try:
        result = run_format(text, options)
    except FormatError as exc:
        print(f"{path}: error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    _report(result, str(path))

    if check:
        if result.changed:
            print(f"would reformat {path}", file=sys.stderr)
        return _status_for(result, check=True)

    if in_place:
        if result.has_errors:
            logger.warning("Not rewriting %s because it has errors", path)
        elif result.changed:
            try:
                path.write_text(result.formatted_text, encoding="utf-8")
            except OSError as exc:
                print(f"{path}: error: {exc}", file=sys.stderr)
                return EXIT_ERROR
            logger.info("Reformatted %s", path)
        else:
            logger.info("Unchanged %s", path)
        return _status_for(result, check=False)

    sys.stdout.write(result.formatted_text)
    return _status_for(result, check=False)


def _report(result: FormatRunResult, path: str) -> None:
    for diagnostic in result.diagnostics:
        print(render_diagnostic(diagnostic, result.parse.source_text, path), file=sys.stderr)


def _status_for(result: FormatRunResult, *, check: bool) -> int:
    if result.has_errors:
        return EXIT_ERROR
    if check and result.changed:
        return EXIT_CHANGED
    return EXIT_OK
