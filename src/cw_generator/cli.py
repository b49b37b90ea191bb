"""
Command line entry point: generate a dataset and dump or push it.

Usage:
    # Dump a seeded dataset to JSON
    cw-generate --seed 42 dump dataset.json

    # Push into PostgreSQL (connection defaults come from DB_* variables)
    cw-generate --config shop.yaml push --username postgres --password secret

    # More output
    cw-generate -v dump dataset.json
"""

import argparse
import logging
import os
import sys
import time
from pathlib import Path

import psycopg2

from . import __version__
from .config import GenerationConfig, load_config
from .errors import GenerationError, PushError
from .models import Dataset
from .pipeline import dependency_groups, gen_full
from .sinks import PostgresStore, dump_dataset, push_dataset
from .sinks.push import DEFAULT_MAX_WORKERS

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="cw-generate",
        description="Generate synthetic data for the phone-repair shop database.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write a reproducible dump
  cw-generate --seed 42 dump dataset.json

  # Bigger shop from a config file, pushed into PostgreSQL
  cw-generate --config shop.yaml push --username postgres --password secret
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file overriding generation options (default: built-in defaults)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: unseeded)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )

    subparsers = parser.add_subparsers(dest="op", required=True)

    dump = subparsers.add_parser("dump", help="Write the dataset to a JSON file")
    dump.add_argument("output", type=Path, help="Output path for the JSON dump")

    push = subparsers.add_parser("push", help="Insert the dataset into PostgreSQL")
    push.add_argument(
        "--host",
        default=os.environ.get("DB_HOST", "localhost"),
        help="Database host (env DB_HOST, default: localhost)",
    )
    push.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("DB_PORT", "5432")),
        help="Database port (env DB_PORT, default: 5432)",
    )
    push.add_argument(
        "-u",
        "--username",
        default=os.environ.get("DB_USER"),
        help="Database username (env DB_USER)",
    )
    push.add_argument(
        "-p",
        "--password",
        default=os.environ.get("DB_PASS"),
        help="User password (env DB_PASS)",
    )
    push.add_argument(
        "-d",
        "--database",
        default=os.environ.get("DB_NAME", "cw1_db"),
        help="Database name (env DB_NAME, default: cw1_db)",
    )
    push.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_MAX_WORKERS,
        help=f"Concurrent inserts per dependency group (default: {DEFAULT_MAX_WORKERS})",
    )

    args = parser.parse_args(argv)
    if args.op == "push" and (args.username is None or args.password is None):
        parser.error("push requires --username and --password (or DB_USER / DB_PASS)")
    if args.op == "push" and args.workers < 1:
        parser.error(f"--workers must be at least 1, got {args.workers}")
    return args


def print_summary(dataset: Dataset, elapsed: float) -> None:
    print()
    print("=" * 60)
    print("Generation Summary")
    print("=" * 60)
    for index, group in enumerate(dependency_groups()):
        counts = ", ".join(f"{name}={len(dataset.get(name)):,}" for name in group)
        print(f"  Group {index}: {counts}")
    total_rows = dataset.total_rows()
    rows_per_sec = total_rows / elapsed if elapsed > 0 else 0
    print(f"Total rows: {total_rows:,}")
    print(f"Total time: {elapsed:.2f}s ({rows_per_sec:,.0f} rows/sec)")


def main(argv: list[str] | None = None) -> int:
    """
    Generate a dataset and dump or push it.

    Returns:
        0 on success, 1 on a generation or push failure
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else GenerationConfig()
    except (OSError, GenerationError) as e:
        print(f"Error: could not load config: {e}", file=sys.stderr)
        return 1
    logger.debug("Generation options: %s", config.to_dict())

    print("=" * 60)
    print("Phone Repair Shop - Dataset Generation")
    print("=" * 60)
    print(f"Seed: {args.seed if args.seed is not None else 'random'}")
    print(f"Persons: {config.person_count}, suppliers: {config.supplier_count}, "
          f"labor contracts: {config.labor_contract_count}")

    gen_start = time.time()
    try:
        dataset = gen_full(config, seed=args.seed)
    except GenerationError as e:
        print(f"Error: generation failed: {e}", file=sys.stderr)
        return 1
    print_summary(dataset, time.time() - gen_start)

    if args.op == "dump":
        try:
            path = dump_dataset(dataset, args.output)
        except OSError as e:
            print(f"Error: could not write dump: {e}", file=sys.stderr)
            return 1
        print(f"\nOutput: {path}")
    else:
        print(f"\nPushing to {args.host}:{args.port}/{args.database}...")
        try:
            store = PostgresStore.connect(
                host=args.host,
                port=args.port,
                user=args.username,
                password=args.password,
                database=args.database,
                max_connections=args.workers,
            )
        except psycopg2.Error as e:
            print(f"Error: could not connect: {e}", file=sys.stderr)
            return 1
        try:
            inserted = push_dataset(dataset, store, max_workers=args.workers)
        except PushError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        finally:
            store.close()
        print(f"Inserted {inserted:,} records")

    print("\nSuccess!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
