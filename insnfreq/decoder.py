"""Instruction decoder — turns the byte at an offset into an Instruction."""

from __future__ import annotations

import logging

from .bytecode_file import BytecodeFile
from .errors import InvalidCaptureKind, InvalidOpcode, UnexpectedEof
from .instruction import Capture, Instruction, Operand
from .opcodes import DecodeRule, OperandKind, rule_for
from . import constants

logger = logging.getLogger(__name__)


def _read_operand(bytecode: BytecodeFile, kind: OperandKind, offset: int) -> Operand:
    raw = bytecode.get_int(offset)
    if kind == OperandKind.STR:
        return Operand(kind=kind, value=bytecode.get_str(raw))
    if kind == OperandKind.STR_OFFSET:
        bytecode.get_str(raw)
    return Operand(kind=kind, value=raw)


def _read_captures(
    bytecode: BytecodeFile, offset: int, count: int
) -> list[Capture]:
    captures: list[Capture] = []
    for i in range(count):
        entry = offset + constants.CAPTURE_ENTRY_SIZE * i
        kind_byte = bytecode.get_byte(entry)
        if kind_byte >= len(constants.LOCATION_KINDS):
            raise InvalidCaptureKind(
                f"CLOSURE capture {i} has kind byte 0x{kind_byte:02x}", entry
            )
        captures.append(
            Capture(
                kind=constants.LOCATION_KINDS[kind_byte],
                index=bytecode.get_int(entry + constants.OPCODE_SIZE),
            )
        )
    return captures


def _instruction_size(bytecode: BytecodeFile, rule: DecodeRule, offset: int) -> int:
    """Compute the total size of the instruction at *offset*.

    For CLOSURE this is a two-phase read: the fixed prefix must fit before
    the capture count is trusted, and the whole capture list must fit before
    any entry is read.
    """
    size = rule.fixed_size
    if not bytecode.fits(offset, size):
        raise UnexpectedEof(f"{rule.opcode.value} needs {size} bytes", offset)
    if not rule.has_captures:
        return size

    count = bytecode.get_uint(offset + size - constants.INT_SIZE)
    size += constants.CAPTURE_ENTRY_SIZE * count
    if not bytecode.fits(offset, size):
        raise UnexpectedEof(
            f"{rule.opcode.value} declares {count} captures ({size} bytes)", offset
        )
    return size


def decode_at(bytecode: BytecodeFile, offset: int) -> tuple[Instruction, int]:
    """Decode the instruction starting at code offset *offset*.

    Returns:
        The decoded instruction and the offset of the instruction after it.

    Raises:
        UnexpectedEof: the instruction does not fit inside the code region.
        InvalidOpcode: the opcode byte (or a capture kind) is not recognised.
        StringOutOfBounds: a string operand points outside the string table.
    """
    code = bytecode.get_byte(offset)
    rule = rule_for(code)
    if rule is None:
        raise InvalidOpcode(f"unknown opcode 0x{code:02x}", offset)

    size = _instruction_size(bytecode, rule, offset)

    operand_offset = offset + constants.OPCODE_SIZE
    operands = []
    for kind in rule.operands:
        operands.append(_read_operand(bytecode, kind, operand_offset))
        operand_offset += constants.INT_SIZE

    captures: list[Capture] = []
    if rule.has_captures:
        count = bytecode.get_uint(operand_offset)
        captures = _read_captures(
            bytecode, operand_offset + constants.INT_SIZE, count
        )

    instruction = Instruction(
        opcode=rule.opcode,
        offset=offset,
        size=size,
        variant=rule.variant,
        operands=operands,
        captures=captures,
    )
    return instruction, instruction.next_offset
