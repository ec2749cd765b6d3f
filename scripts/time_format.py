#!/usr/bin/env python3
"""Quick perf benchmark for grammar parsing and formatting."""

from __future__ import annotations

import argparse
import cProfile
import io
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from g4fmt.pipeline import run_format


def _collect_grammar_files(root: Path) -> list[Path]:
    return [path for path in sorted(root.rglob("*.g4")) if path.is_file()]


def _run_once(
    sources: list[str],
    *,
    label: str,
    show_progress: bool,
) -> tuple[float, int, int, int]:
    start = time.perf_counter()
    total_changed = 0
    total_diagnostics = 0
    iterator = tqdm(sources, desc=label, unit="file") if show_progress else sources
    for text in iterator:
        result = run_format(text)
        total_changed += int(result.changed)
        total_diagnostics += len(result.diagnostics)
    duration = time.perf_counter() - start
    return duration, len(sources), total_changed, total_diagnostics


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark grammar formatting throughput")
    parser.add_argument("grammar_root", type=Path, help="Directory searched recursively for *.g4 files")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument("--profile", action="store_true", help="Run cProfile and print top hotspots")
    parser.add_argument(
        "--profile-top",
        type=int,
        default=30,
        help="Number of cProfile rows to print (default: 30)",
    )
    parser.add_argument(
        "--profile-sort",
        type=str,
        default="tottime",
        help="cProfile sort key (default: tottime, common: cumulative)",
    )
    args = parser.parse_args()

    root: Path = args.grammar_root
    if not root.is_dir():
        raise SystemExit(f"Invalid grammar root: {root}")

    files = _collect_grammar_files(root)
    if not files:
        raise SystemExit(f"No .g4 files found under {root}")
    sources = [path.read_text(encoding="utf-8") for path in files]
    total_chars = sum(len(text) for text in sources)

    show_progress = not args.no_progress
    warmups = max(args.warmups, 0)
    runs = max(args.runs, 1)

    def _benchmark() -> tuple[list[float], int, int, int]:
        for warmup_idx in range(warmups):
            _run_once(sources, label=f"warmup {warmup_idx + 1}/{warmups}", show_progress=show_progress)

        timings: list[float] = []
        files_count = changed_count = diagnostics_count = 0
        for run_idx in range(runs):
            duration, files_count, changed_count, diagnostics_count = _run_once(
                sources,
                label=f"run {run_idx + 1}/{runs}",
                show_progress=show_progress,
            )
            timings.append(duration)
        return timings, files_count, changed_count, diagnostics_count

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, files_count, changed_count, diagnostics_count = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, files_count, changed_count, diagnostics_count = _benchmark()

    mean = statistics.mean(timings)

    print(f"Dataset: {root}")
    print(f"Files: {files_count} ({total_chars} characters)")
    print(f"Would change: {changed_count}")
    print(f"Diagnostics: {diagnostics_count}")
    print(f"Runs: {len(timings)} (warmups={warmups})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"Files/s (mean): {files_count / mean:.1f}")
    print(f"Chars/s (mean): {total_chars / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
