"""
Application Entry Point
=======================
Runs a discovery pass over the math library and writes the equation database.

Why is this file needed?
------------------------
It acts as the wiring root. It:
1. Parses the command line.
2. Sets up logging (console + optional file).
3. Builds the DiscoveryEngine and runs it.
4. Hands the resulting database to the IOManager.
"""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from equationdiscovery.config import DEFAULT_DATABASE_PATH, DEFAULT_MAX_ARITY
from equationdiscovery.controller.engine import DEFAULT_OWNER_TYPES, DiscoveryEngine
from equationdiscovery.logging_config import setup_logging
from equationdiscovery.model.io import IOManager
from equationdiscovery.model.value_types import ValueTypeTag

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="equationdiscovery",
        description="Discover the operation signatures of the math library by black-box A/B testing.",
    )
    parser.add_argument(
        "--max-arity",
        type=_non_negative_int,
        default=DEFAULT_MAX_ARITY,
        help=f"largest number of parameters tried per operation (default: {DEFAULT_MAX_ARITY})",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_DATABASE_PATH,
        help="database file to write, .json or .h5 (default: %(default)s)",
    )
    parser.add_argument(
        "--owner",
        action="append",
        choices=[t.value for t in DEFAULT_OWNER_TYPES],
        help="owner type to analyze; repeat for several (default: all)",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="INFO",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="also write the log to this file",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="print the discovered signatures after the run",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    owner_types: List[ValueTypeTag] = (
        [ValueTypeTag(o) for o in args.owner] if args.owner else list(DEFAULT_OWNER_TYPES)
    )
    engine = DiscoveryEngine(max_arity=args.max_arity, owner_types=owner_types)
    database = engine.run()

    IOManager.save_database(database, args.output)

    if args.summary:
        for signature in database.methods:
            print(signature)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
