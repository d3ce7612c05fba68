"""Main entry point: python -m blind_birthday"""

from __future__ import annotations

import argparse
import csv
import sys

from blind_birthday import __version__
from blind_birthday.analysis.benchmark import build_engine, run_benchmark
from blind_birthday.analysis.metrics import MetricExtractor
from blind_birthday.analysis.validation import Validator
from blind_birthday.core.errors import SearchExhausted
from blind_birthday.core.oracle import HMACOracle
from blind_birthday.core.engine import CollisionSearchEngine
from blind_birthday.utils.bits import expected_insertions
from blind_birthday.utils.constants import (
    DEFAULT_BENCHMARK_WIDTHS,
    DEFAULT_DIGEST_BITS,
    DEFAULT_TRIALS,
    MESSAGE_SIZE,
)
from blind_birthday.utils.types import AttackConfig, CollisionReport, ProgressEvent, TrialRecord


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blind-birthday",
        description="Blind birthday attack -- find HMAC collisions through a prefix-leaking oracle",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command")

    # attack
    atk = sub.add_parser("attack", help="Run one attack until a collision is found")
    atk.add_argument("--bits", type=int, default=DEFAULT_DIGEST_BITS,
                     help=f"Digest bits compared by the oracle (default {DEFAULT_DIGEST_BITS})")
    atk.add_argument("--message-size", type=int, default=MESSAGE_SIZE, help="Message length in bytes")
    atk.add_argument("--key", type=str, help="Oracle key (hex); random if omitted")
    atk.add_argument("--seed", type=int, help="Seed for a reproducible key and candidate stream")
    atk.add_argument("--max-insertions", type=int, help="Give up after this many insertions")
    atk.add_argument("--max-queries", type=int, help="Give up after this many oracle queries")
    atk.add_argument("--quiet", action="store_true", help="Suppress progress output")
    atk.add_argument("--csv", type=str, help="Write the collision report to this CSV file")
    atk.add_argument("--plot", type=str, metavar="DIR", help="Save progress and depth plots to DIR")

    # benchmark
    bench = sub.add_parser("benchmark", help="Measure attack cost across digest widths")
    bench.add_argument("--widths", type=int, nargs="+", default=list(DEFAULT_BENCHMARK_WIDTHS),
                       help="Digest widths to test")
    bench.add_argument("--trials", type=int, default=DEFAULT_TRIALS, help="Attacks per width")
    bench.add_argument("--seed", type=int, help="Base seed for reproducible trials")
    bench.add_argument("--csv", type=str, help="Write per-trial results to this CSV file")
    bench.add_argument("--plot", type=str, metavar="DIR", help="Save the scaling plot to DIR")

    return parser


def validate_benchmark_args(args: argparse.Namespace) -> None:
    """Reject widths and trial counts the benchmark cannot run."""
    for width in args.widths:
        AttackConfig(digest_bits=width)
    if args.trials <= 0:
        raise ValueError(f"trials must be positive, got {args.trials}")


def print_progress(event: ProgressEvent) -> None:
    print(f"Closest collision so far: {event.closest_match}")
    print(f"Tree size: {event.tree_size}")


def make_attack(args: argparse.Namespace) -> tuple[HMACOracle, CollisionSearchEngine, AttackConfig]:
    """Resolve oracle and engine from args."""
    config = AttackConfig(
        digest_bits=args.bits,
        message_size=args.message_size,
        seed=args.seed,
        max_insertions=args.max_insertions,
        max_queries=args.max_queries,
    )
    on_progress = None if args.quiet else print_progress
    key = bytes.fromhex(args.key) if args.key else None
    oracle, engine = build_engine(config, on_progress=on_progress, key=key)
    return oracle, engine, config


def run_attack(
    args: argparse.Namespace,
    oracle: HMACOracle,
    engine: CollisionSearchEngine,
    config: AttackConfig,
) -> int:
    """Single attack: search -> verify -> report."""
    print(f"Oracle: HMAC-SHA256 truncated to {config.digest_bits} bits")
    print(f"Expected insertions: ~{expected_insertions(config.digest_bits):,.0f}")
    print()

    try:
        report = engine.run(config.max_insertions, config.max_queries)
    except SearchExhausted as exc:
        print(f"No collision: {exc}")
        return 1

    validation = Validator(oracle, report).summary()

    print()
    print("=" * 50)
    print(" RESULTS")
    print("=" * 50)
    print(f"Found a collision amongst {report.tree_size} in {report.queries} queries!")
    print(f"  Message 1:         {report.message1.hex()}")
    print(f"  Message 2:         {report.message2.hex()}")
    print(f"  Shared digest:     {validation['digest']}")
    print(f"  Verified:          {validation['valid']}")
    print(f"  Tree depth:        {engine.depth()}")
    print(f"  Luck percentile:   {validation['luck_percentile']:.3f}")
    print("=" * 50)

    if args.csv:
        export_report_csv(args.csv, report, config)

    if args.plot:
        from blind_birthday.visualization.plots import PlotSuite

        plots = PlotSuite(save_dir=args.plot)
        plots.progress_timeline(engine.history, digest_bits=config.digest_bits)
        plots.depth_histogram(engine.depth_histogram())
        print(f"Plots saved to {args.plot}")

    return 0


def export_report_csv(path: str, report: CollisionReport, config: AttackConfig) -> None:
    """Write a single collision report as metric,value rows."""
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["metric", "value"])
        writer.writerow(["digest_bits", config.digest_bits])
        for k, v in report.as_dict().items():
            writer.writerow([k, v])

    print(f"Results exported to {path}")


def export_trials_csv(path: str, records: list[TrialRecord]) -> None:
    """Write one row per benchmark trial."""
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["digest_bits", "tree_size", "queries", "max_depth", "elapsed"])
        for r in records:
            writer.writerow([r.digest_bits, r.tree_size, r.queries, r.max_depth, f"{r.elapsed:.6f}"])

    print(f"Results exported to {path}")


def run_benchmark_cmd(args: argparse.Namespace) -> int:
    """Repeated attacks per width -> metrics table."""
    print(f"Widths: {args.widths} | Trials per width: {args.trials}")
    print()

    def on_trial(record: TrialRecord) -> None:
        print(f"  W={record.digest_bits:3d}  tree={record.tree_size:8d}  queries={record.queries:9d}")

    records = run_benchmark(args.widths, args.trials, seed=args.seed, on_trial=on_trial)
    report = MetricExtractor(records).full_report()

    print()
    print("=" * 78)
    print(f"  {'W':>4}  {'queries':>12}  {'tree size':>12}  {'expected':>12}  {'ratio':>6}  {'q/ins':>6}")
    print("-" * 78)
    for width, s in report.items():
        print(
            f"  {width:>4}  {s['queries_mean']:>12.1f}  {s['tree_size_mean']:>12.1f}  "
            f"{s['expected_insertions']:>12.1f}  {s['birthday_ratio']:>6.2f}  "
            f"{s['queries_per_insertion']:>6.2f}"
        )
    print("=" * 78)

    if args.csv:
        export_trials_csv(args.csv, records)

    if args.plot:
        from blind_birthday.visualization.plots import PlotSuite

        PlotSuite(save_dir=args.plot).query_scaling(report)
        print(f"Plots saved to {args.plot}")

    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Only argument validation maps to a usage error; failures during the
    # run propagate.
    if args.command == "attack":
        try:
            oracle, engine, config = make_attack(args)
        except ValueError as exc:
            parser.error(str(exc))
        return run_attack(args, oracle, engine, config)
    elif args.command == "benchmark":
        try:
            validate_benchmark_args(args)
        except ValueError as exc:
            parser.error(str(exc))
        return run_benchmark_cmd(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
