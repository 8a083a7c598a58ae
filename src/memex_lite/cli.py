"""memex-lite CLI entry point.

Usage: memex-lite [-v] profile [options]
"""
import argparse
import asyncio
import logging
import sys


def _add_profile_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "profile",
        help="Generate a synthetic history and time the search pipeline.",
    )
    p.add_argument(
        "--pages", type=int, default=500,
        help="Number of distinct pages (default: 500)",
    )
    p.add_argument(
        "--visits", type=int, default=10_000,
        help="Number of visits (default: 10000)",
    )
    p.add_argument(
        "--limit", type=int, default=50,
        help="How many recent visits to list (default: 50)",
    )
    p.add_argument(
        "--target-pages", type=int, default=10,
        help="Pages to search visits for (default: 10)",
    )
    p.add_argument(
        "--max-concurrency", type=int, default=8,
        help="Context fetches in flight at once, 0 for unbounded (default: 8)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible runs (default: 42)",
    )


def _run_profile(args: argparse.Namespace) -> None:
    from memex_lite.profiling.harness import run_queries
    from memex_lite.profiling.report import format_report
    from memex_lite.search.context import ContextSettings

    settings = ContextSettings(max_concurrency=args.max_concurrency or None)
    timings = asyncio.run(run_queries(
        num_pages=args.pages,
        num_visits=args.visits,
        limit=args.limit,
        target_pages=args.target_pages,
        seed=args.seed,
        settings=settings,
    ))
    print(format_report(timings))


def _enable_debug_logging() -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))
    logger = logging.getLogger("memex_lite")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="memex-lite",
        description="Browsing-history search over a time-keyed document store.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log store queries to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_profile_parser(subparsers)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        _enable_debug_logging()

    if args.command == "profile":
        _run_profile(args)
