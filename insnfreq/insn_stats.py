"""Pure functions for counting decoded instructions and ordering the counts."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .instruction import Instruction
from . import constants


def count_instructions(instructions: Iterable[Instruction]) -> Counter[str]:
    """Return a frequency map keyed by canonical instruction text.

    The halt marker is not counted.

    Args:
        instructions: Decoded instructions, in any order.

    Returns:
        A Counter mapping canonical text to occurrence count.
        Empty for an empty input.
    """
    return Counter(str(inst) for inst in instructions if not inst.is_halt())


def _sort_key(item: tuple[str, int]) -> tuple[int, bytes]:
    text, count = item
    return -count, text.encode(
        constants.STRING_ENCODING, constants.STRING_ERRORS
    )


def sort_frequencies(counts: Counter[str] | dict[str, int]) -> list[tuple[str, int]]:
    """Order (text, count) pairs by count descending, then text byte-wise ascending."""
    return sorted(counts.items(), key=_sort_key)


def format_report(frequencies: list[tuple[str, int]]) -> list[str]:
    return [
        constants.REPORT_LINE_TEMPLATE.format(count=count, text=text)
        for text, count in frequencies
    ]
