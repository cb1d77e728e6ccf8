"""
Command-line interface for the medal standings engine.

Provides subcommands for fetching the current standings as JSON, printing
them as a table, validating a saved snapshot, and checking credentials.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import secrets
from .config.settings import VALID_SOURCES, load_standings_config
from .logging_config import configure_logging
from .pipeline import export
from .report import format_standings_table
from .standings.engine import ConfigurationError, build_fetcher, get_standings
from .standings.fallback import is_fallback


def _snapshot_from_args(args: argparse.Namespace):
    config = load_standings_config(args.config)
    if args.source:
        config["source"] = args.source
    fetcher = build_fetcher(config, timeout=args.timeout)
    return get_standings(fetcher)


def cmd_fetch(args: argparse.Namespace) -> int:
    """Fetch standings and emit the snapshot JSON."""
    try:
        snapshot = _snapshot_from_args(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        try:
            path = export.write_snapshot(snapshot, Path(args.output))
        except export.SnapshotValidationError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Snapshot written to {path}")
    else:
        print(json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False))

    if is_fallback(snapshot):
        print("(fallback data - live source unavailable)", file=sys.stderr)

    return 0


def cmd_table(args: argparse.Namespace) -> int:
    """Fetch standings and print them as a markdown table."""
    try:
        snapshot = _snapshot_from_args(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_standings_table(snapshot))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a saved snapshot JSON file."""
    try:
        with open(args.path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read {args.path}: {e}", file=sys.stderr)
        return 1

    try:
        export.validate_snapshot(data)
    except export.SnapshotValidationError as e:
        print(f"Invalid snapshot: {e}", file=sys.stderr)
        return 1

    print(f"{args.path}: valid ({len(data['medals'])} entries)")
    return 0


def cmd_check_keys(args: argparse.Namespace) -> int:
    """Report which credentials are configured."""
    return secrets._cli_check()


def main(argv: Optional[list] = None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="medal-standings",
        description="Weighted Olympic medal standings"
    )

    # Global options
    parser.add_argument(
        "--config",
        default=None,
        help="Path to standings config (default: config/standings.yaml)"
    )
    parser.add_argument(
        "--source",
        choices=list(VALID_SOURCES),
        help="Override the configured source adapter"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Fetch timeout in seconds (default: from config)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    fetch_parser = subparsers.add_parser("fetch", help="Fetch standings as JSON")
    fetch_parser.add_argument("--output", "-o", help="Output file (JSON)")
    fetch_parser.set_defaults(func=cmd_fetch)

    table_parser = subparsers.add_parser("table", help="Print standings as a markdown table")
    table_parser.set_defaults(func=cmd_table)

    validate_parser = subparsers.add_parser("validate", help="Validate a saved snapshot file")
    validate_parser.add_argument("path", help="Snapshot JSON file")
    validate_parser.set_defaults(func=cmd_validate)

    keys_parser = subparsers.add_parser("check-keys", help="Check API key configuration")
    keys_parser.set_defaults(func=cmd_check_keys)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
