"""Command-line interface for BANKRANK.

Runs the ranking pipeline once and prints the window around Aave.

Usage:
    bankrank rank
    bankrank rank --format json
    bankrank rank --radius 3
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

import pandas as pd

from bankrank import __version__
from bankrank.config import settings
from bankrank.pipeline.merger import RankMerger
from bankrank.pipeline.orchestrator import Orchestrator, RankingResult

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    """argparse type for counts that may be zero but not negative."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured ArgumentParser with all commands and arguments.
    """
    parser = argparse.ArgumentParser(
        prog="bankrank",
        description="BANKRANK: Aave net deposits vs. U.S. banks by consolidated assets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bankrank rank
  bankrank rank --format json
  bankrank rank --radius 3
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    rank_parser = subparsers.add_parser(
        "rank",
        help="Rank Aave among U.S. banks",
        description="Fetch both providers, merge and print the ranking window",
    )
    rank_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    rank_parser.add_argument(
        "--radius",
        type=non_negative_int,
        default=None,
        help=f"Ranks shown on each side of Aave (default: {settings.window_radius})",
    )

    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    return parser


def format_table(result: RankingResult) -> str:
    """Render the ranking window as a plain-text table."""
    df = pd.DataFrame(result.to_records())
    df["assets ($B)"] = (df["assets"] / 1000).round(1)
    df[""] = df.get("isAave", pd.Series(dtype=object)).map({True: "<--"}).fillna("")
    table = df[["rank", "name", "assets ($B)", ""]].to_string(index=False)

    lines = [table]
    if result.metric.is_fallback:
        lines.append(f"\nNet deposits: fallback value ({result.metric.reason})")
    if result.report.is_fallback:
        lines.append(f"Banks: curated dataset ({result.report.reason})")
    return "\n".join(lines)


def cmd_rank(args: argparse.Namespace) -> int:
    """Execute the rank command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        merger = RankMerger(radius=args.radius) if args.radius is not None else None
        orchestrator = Orchestrator(merger=merger)
        result = asyncio.run(orchestrator.run_with_provenance())

        if args.format == "json":
            print(json.dumps(result.to_records(), indent=2))
        else:
            print(format_table(result))

        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except Exception as e:
        logger.error("Ranking failed: %s", e, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_version(args: argparse.Namespace) -> int:
    """Execute the version command."""
    print(f"BANKRANK v{__version__}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "rank":
        return cmd_rank(args)
    elif args.command == "version":
        return cmd_version(args)
    else:
        parser.print_help()
        return 0


def cli_entry() -> None:
    """Console script entry point for setuptools."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
