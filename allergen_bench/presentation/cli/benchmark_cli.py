#!/usr/bin/env python3
"""
Benchmark CLI

Command-line interface for benchmarking allergen-detection models.

Subcommands:
- run: benchmark one model over one dataset, appending records to the store
- evaluate: print the leaderboard, badges and per-model metrics
- export: write the prediction CSV, metrics CSV and Markdown report

Usage:
    # Benchmark a model served by a local llama.cpp server
    python -m allergen_bench.presentation.cli.benchmark_cli run \\
        --dataset data/foods.csv \\
        --model models/qwen2.5-0.5b-instruct-q4.gguf

    # Rank every model benchmarked so far
    python -m allergen_bench.presentation.cli.benchmark_cli evaluate

    # Export reports for one model
    python -m allergen_bench.presentation.cli.benchmark_cli export \\
        --model qwen2.5-0.5b-instruct-q4.gguf \\
        --output-dir reports
"""

import argparse
import asyncio
import signal
import sys
from typing import List, Optional

from allergen_bench.application.dtos import (
    BenchmarkProgress,
    CancellationToken,
    ExportReportsRequest,
    RunBenchmarkRequest,
)
from allergen_bench.application.interfaces import IProgressObserver
from allergen_bench.infrastructure.factories import BenchmarkFactory


class ConsoleProgressObserver(IProgressObserver):
    """Prints one line per processed item."""

    def on_progress(self, progress: BenchmarkProgress) -> None:
        if progress.record is None:
            print(f"  [{progress.completed}/{progress.total}] FAILED")
            return
        record = progress.record
        print(
            f"  [{progress.completed}/{progress.total}] {record.food_name}: "
            f"{record.predicted_allergens} ({record.latency_ms} ms)"
        )


def _banner(title: str):
    print("=" * 60)
    print(title)
    print("=" * 60)


async def _run_cancellable(use_case, request: RunBenchmarkRequest):
    token = CancellationToken()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, token.cancel)
    except (NotImplementedError, RuntimeError):
        # no signal handlers on this platform/thread; Ctrl-C aborts instead
        pass
    return await use_case.execute(request, cancellation=token)


def cmd_run(args) -> int:
    request = RunBenchmarkRequest(
        dataset_path=args.dataset,
        model_ref=args.model,
        model_name=args.model_name,
    )

    _banner("Allergen Benchmark - Run")
    print(f"Dataset: {request.dataset_path}")
    print(f"Model: {request.resolved_model_name}")
    print(f"Record Store: {BenchmarkFactory.resolve_store_path(args.store)}")
    print("=" * 60)
    print()

    use_case = BenchmarkFactory.create_benchmark_use_case(
        inference_url=args.inference_url,
        store_path=args.store,
        observer=None if args.quiet else ConsoleProgressObserver(),
    )

    print("Running benchmark...")
    response = asyncio.run(_run_cancellable(use_case, request))

    print()
    _banner("BENCHMARK RESULTS")
    print(f"Run ID: {response.run_id}")
    print(f"State: {response.state.value}")
    print(f"Items: {response.completed_items}/{response.total_items} completed, "
          f"{response.failed_items} failed")

    if response.error:
        print(f"ERROR: {response.error}")
        print("=" * 60)
        print()
        print("Benchmark failed!")
        return 1

    q = response.quality
    print()
    print("Quality:")
    print(f"  Precision:   {q.precision:.2%}")
    print(f"  Recall:      {q.recall:.2%}")
    print(f"  Micro-F1:    {q.micro_f1:.3f}")
    print(f"  Macro-F1:    {q.macro_f1:.3f}")
    print(f"  Exact Match: {q.exact_match_rate:.2%}")
    print()
    print(f"Mean Latency: {response.mean_latency_ms:.1f} ms")
    print(f"Records Written: {response.records_written} ({response.write_failures} failed)")
    for error in response.errors:
        print(f"  ! {error}")
    print("=" * 60)
    print()

    if response.succeeded and response.failed_items == 0 and response.write_failures == 0:
        print("Benchmark completed successfully!")
        return 0
    print("Benchmark finished with problems.")
    return 1


def cmd_evaluate(args) -> int:
    use_case = BenchmarkFactory.create_evaluate_use_case(store_path=args.store)
    response = use_case.execute()

    _banner("LEADERBOARD")
    if not response.succeeded:
        print(f"ERROR: {response.error}")
        return 1
    if response.is_empty:
        print("No benchmark records found.")
        return 0

    print(f"{'#':>2}  {'Model':<40} {'Score':>7} {'Acc':>7} {'Lat(ms)':>9}")
    for entry in response.leaderboard:
        s = entry.summary
        print(f"{entry.position:>2}  {s.model:<40} {s.score:>7.3f} {s.accuracy:>7.1%} {s.avg_latency_ms:>9.1f}")

    for entry in response.leaderboard:
        s = entry.summary
        q = s.quality
        print()
        print(f"{entry.position}. {entry.model}")
        if entry.badges:
            print(f"  Badges: {', '.join(badge.label for badge in entry.badges)}")
        print(f"  Strengths: {entry.strengths.replace(chr(10), ', ')}")
        print(f"  Weaknesses: {entry.weaknesses.replace(chr(10), ', ')}")
        print(f"  Precision {q.precision:.2%}  Recall {q.recall:.2%}  "
              f"Micro-F1 {q.micro_f1:.3f}  Macro-F1 {q.macro_f1:.3f}")
        print(f"  Hallucination {s.hallucination_rate:.2%}  Over-Prediction {s.over_prediction_rate:.2%}  "
              f"Abstention {q.abstention_rate:.2%}")
        print(f"  TTFT {s.avg_ttft_ms:.0f} ms  Total Time {s.efficiency.total_time_ms:.0f} ms  "
              f"PSS {s.efficiency.pss_kb:.0f} KB")

    if response.defaulted_fields:
        print()
        print("Fields filled with defaults:")
        for name, count in sorted(response.defaulted_fields.items()):
            print(f"  {name}: {count}")
    print("=" * 60)
    return 0


def cmd_export(args) -> int:
    output_dir = BenchmarkFactory.resolve_export_dir(args.output_dir)
    use_case = BenchmarkFactory.create_export_use_case(store_path=args.store)
    response = use_case.execute(ExportReportsRequest(
        output_dir=output_dir,
        model_filter=args.model,
        include_markdown=not args.no_markdown,
    ))

    _banner("EXPORT")
    print(response.message)
    for path in (response.prediction_path, response.metrics_path, response.report_path):
        if path:
            print(f"  {path}")
    print("=" * 60)
    return 0 if response.succeeded else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="allergen-bench",
        description="Allergen Benchmark CLI - Benchmark, rank and report on allergen-detection models",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--store",
        help="Record store file (default: $RECORD_STORE_PATH or storage.path)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Benchmark one model over one dataset")
    run.add_argument("--dataset", required=True, help="Dataset CSV file")
    run.add_argument("--model", required=True, help="Model reference passed to the inference engine")
    run.add_argument("--model-name", help="Model name stored on records (default: file name of --model)")
    run.add_argument(
        "--inference-url",
        help="Completion server URL (default: $INFERENCE_URL or inference.url)"
    )
    run.add_argument("--quiet", action="store_true", help="Do not print per-item progress")
    run.set_defaults(func=cmd_run)

    evaluate = subparsers.add_parser("evaluate", help="Print the leaderboard")
    evaluate.set_defaults(func=cmd_evaluate)

    export = subparsers.add_parser("export", help="Export CSV and Markdown reports")
    export.add_argument("--model", help="Only export predictions of this model")
    export.add_argument("--output-dir", help="Output directory (default: $EXPORT_DIR or export.directory)")
    export.add_argument("--no-markdown", action="store_true", help="Skip the Markdown report")
    export.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)

    try:
        return args.func(args)
    except Exception as e:
        print()
        _banner("BENCHMARK FAILED")
        print(f"Error: {type(e).__name__}: {str(e)}")
        print("=" * 60)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
