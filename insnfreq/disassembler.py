"""Linear disassembler over the code region."""

from __future__ import annotations

import logging
from typing import Iterator

from .bytecode_file import BytecodeFile
from .decoder import decode_at
from .instruction import Instruction
from . import constants

logger = logging.getLogger(__name__)


def walk_code(bytecode: BytecodeFile) -> Iterator[Instruction]:
    """Yield instructions from code offset 0 up to and including the halt marker.

    The walk also ends quietly if the cursor lands exactly on the end of the
    code region. Any decode error propagates and ends the walk.
    """
    offset = 0
    while offset < bytecode.code_size:
        instruction, offset = decode_at(bytecode, offset)
        logger.debug("%08x: %s", instruction.offset, instruction)
        yield instruction
        if instruction.is_halt():
            return
    logger.info("Code region ended at 0x%08x without a halt marker", offset)


def render_listing_line(instruction: Instruction) -> str:
    return constants.LISTING_LINE_TEMPLATE.format(
        offset=instruction.offset, text=str(instruction)
    )


def disassemble(bytecode: BytecodeFile) -> list[str]:
    """Return the offset-annotated listing of the whole code region."""
    return [render_listing_line(inst) for inst in walk_code(bytecode)]
