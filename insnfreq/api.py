"""Composable API functions for the disassembly pipelines.

Each function corresponds to a CLI workflow (report, --listing, --stats)
but is callable programmatically without argparse.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .bytecode_file import BytecodeFile, load
from .disassembler import disassemble, walk_code
from .insn_stats import count_instructions, format_report, sort_frequencies

logger = logging.getLogger(__name__)


def load_bytecode_file(path: str | Path) -> BytecodeFile:
    """Read *path* in binary mode and load it as a bytecode file."""
    logger.info("Reading bytecode file %s", path)
    with open(path, "rb") as f:
        return load(f)


def dump_listing(bytecode: BytecodeFile) -> str:
    """Return the full disassembly, one ``offset: text`` line per instruction."""
    return "\n".join(disassemble(bytecode))


def instruction_frequencies(bytecode: BytecodeFile) -> list[tuple[str, int]]:
    """Return (canonical text, count) pairs in report order.

    Args:
        bytecode: A loaded bytecode file.

    Returns:
        Pairs sorted by count descending, ties broken by text ascending.
    """
    return sort_frequencies(count_instructions(walk_code(bytecode)))


def frequency_report(bytecode: BytecodeFile) -> str:
    """Return the report text, one ``"<count> x <text>"`` line per instruction."""
    return "\n".join(format_report(instruction_frequencies(bytecode)))
