"""End-to-end pipeline: walk the code region, count, order, format."""

from __future__ import annotations

import logging
import time
from typing import Iterable, Iterator

from .bytecode_file import BytecodeFile
from .disassembler import render_listing_line, walk_code
from .instruction import Instruction
from .insn_stats import count_instructions, format_report, sort_frequencies
from .run_types import AnalysisConfig, AnalysisResult, DisassemblyStats

logger = logging.getLogger(__name__)


def analyse(
    bytecode: BytecodeFile,
    config: AnalysisConfig = AnalysisConfig(),
    load_time: float = 0.0,
) -> AnalysisResult:
    """Decode the code region once and build the frequency report.

    Args:
        bytecode: A loaded bytecode file.
        config: Run configuration; ``listing`` also keeps the listing lines.
        load_time: Seconds spent loading, carried into the stats.

    Returns:
        An AnalysisResult. Any decode error propagates; there is no
        partial result.
    """
    stats = DisassemblyStats(
        code_bytes=bytecode.code_size,
        stringtab_bytes=bytecode.stringtab_size,
        global_area_size=bytecode.global_area_size,
        public_symbols=bytecode.public_symbols_number,
        load_time=load_time,
    )
    result = AnalysisResult(stats=stats)

    def observe(instructions: Iterable[Instruction]) -> Iterator[Instruction]:
        for inst in instructions:
            if config.listing:
                result.listing.append(render_listing_line(inst))
            if inst.is_halt():
                stats.halted = True
            yield inst

    # 1. Decode and count in a single pass
    t0 = time.perf_counter()
    counts = count_instructions(observe(walk_code(bytecode)))
    stats.instructions_decoded = sum(counts.values())
    stats.decode_time = time.perf_counter() - t0

    # 2. Order and format
    t0 = time.perf_counter()
    result.report = format_report(sort_frequencies(counts))
    stats.aggregate_time = time.perf_counter() - t0
    stats.distinct_instructions = len(counts)

    logger.info(
        "Decoded %d instructions (%d distinct) in %.1fms",
        stats.instructions_decoded,
        stats.distinct_instructions,
        stats.decode_time * 1000,
    )
    return result


def run(bytecode: BytecodeFile) -> list[str]:
    """Return the sorted ``"<count> x <text>"`` report lines for *bytecode*."""
    return analyse(bytecode).report
