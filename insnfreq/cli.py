"""Command-line entry point: print the instruction frequency report of a file."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from .api import load_bytecode_file
from .errors import BytecodeError
from .run import analyse
from .run_types import AnalysisConfig
from . import constants

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="insnfreq",
        description="Count distinct instructions in a bytecode file",
    )
    parser.add_argument("file", help="Bytecode file to disassemble")
    parser.add_argument(
        "--listing",
        action="store_true",
        help="Print the full disassembly before the frequency report",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print size and timing statistics to stderr",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log pipeline progress to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    # Report text is UTF-8; undecodable string-table bytes go out as raw bytes
    sys.stdout.reconfigure(
        encoding=constants.STRING_ENCODING, errors=constants.STRING_ERRORS
    )
    config = AnalysisConfig(
        listing=args.listing, stats=args.stats, verbose=args.verbose
    )
    if config.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    try:
        t0 = time.perf_counter()
        bytecode = load_bytecode_file(args.file)
        result = analyse(bytecode, config, load_time=time.perf_counter() - t0)
    except (BytecodeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if config.listing:
        print("═══ Listing ═══")
        for line in result.listing:
            print(line)
        print()
        print("═══ Frequencies ═══")
    for line in result.report:
        print(line)
    if config.stats:
        print(result.stats.report(), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
