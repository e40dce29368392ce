"""Opcode taxonomy — one decode rule per valid opcode byte."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import constants


class Opcode(str, Enum):
    # Terminal
    STOP = "STOP"
    # Arithmetic / logic
    BINOP = "BINOP"
    # Constants and data construction
    CONST = "CONST"
    STRING = "STRING"
    SEXP = "SEXP"
    # Stack and memory
    STI = "STI"
    STA = "STA"
    END = "END"
    RET = "RET"
    DROP = "DROP"
    DUP = "DUP"
    SWAP = "SWAP"
    ELEM = "ELEM"
    LD = "LD"
    LDA = "LDA"
    ST = "ST"
    # Control flow
    JMP = "JMP"
    CJMPZ = "CJMPz"
    CJMPNZ = "CJMPnz"
    BEGIN = "BEGIN"
    CBEGIN = "CBEGIN"
    CLOSURE = "CLOSURE"
    CALLC = "CALLC"
    CALL = "CALL"
    TAG = "TAG"
    ARRAY = "ARRAY"
    FAIL = "FAIL"
    LINE = "LINE"
    # Pattern tests
    PATT = "PATT"
    # Runtime builtins
    BUILTIN = "BUILTIN"
    BARRAY = "BARRAY"


class OperandKind(str, Enum):
    INT = "INT"  # signed 32-bit value, rendered in decimal
    ADDR = "ADDR"  # absolute code offset, rendered as 0x%08x
    STR = "STR"  # string-table offset, rendered as the string itself
    STR_OFFSET = "STR_OFFSET"  # string-table offset, rendered as the number


@dataclass(frozen=True)
class DecodeRule:
    """How to decode one opcode byte.

    ``operands`` lists the fixed 32-bit operands following the opcode byte.
    Rules with ``has_captures`` are followed by a 32-bit capture count and
    that many (kind byte, 32-bit index) entries.
    """

    opcode: Opcode
    operands: tuple[OperandKind, ...] = ()
    variant: str | None = None
    has_captures: bool = False

    @property
    def fixed_size(self) -> int:
        ints = len(self.operands) + (1 if self.has_captures else 0)
        return constants.OPCODE_SIZE + constants.INT_SIZE * ints


_INT = (OperandKind.INT,)
_INT_INT = (OperandKind.INT, OperandKind.INT)
_ADDR = (OperandKind.ADDR,)
_STR_INT = (OperandKind.STR, OperandKind.INT)

_MEMORY_CLASSES: dict[int, Opcode] = {0x2: Opcode.LD, 0x3: Opcode.LDA, 0x4: Opcode.ST}

_FIXED_RULES: dict[int, DecodeRule] = {
    0x10: DecodeRule(Opcode.CONST, _INT),
    0x11: DecodeRule(Opcode.STRING, (OperandKind.STR_OFFSET,)),
    0x12: DecodeRule(Opcode.SEXP, _STR_INT),
    0x13: DecodeRule(Opcode.STI),
    0x14: DecodeRule(Opcode.STA),
    0x15: DecodeRule(Opcode.JMP, _ADDR),
    0x16: DecodeRule(Opcode.END),
    0x17: DecodeRule(Opcode.RET),
    0x18: DecodeRule(Opcode.DROP),
    0x19: DecodeRule(Opcode.DUP),
    0x1A: DecodeRule(Opcode.SWAP),
    0x1B: DecodeRule(Opcode.ELEM),
    0x50: DecodeRule(Opcode.CJMPZ, _ADDR),
    0x51: DecodeRule(Opcode.CJMPNZ, _ADDR),
    0x52: DecodeRule(Opcode.BEGIN, _INT_INT),
    0x53: DecodeRule(Opcode.CBEGIN, _INT_INT),
    0x54: DecodeRule(Opcode.CLOSURE, _ADDR, has_captures=True),
    0x55: DecodeRule(Opcode.CALLC, _INT),
    0x56: DecodeRule(Opcode.CALL, (OperandKind.ADDR, OperandKind.INT)),
    0x57: DecodeRule(Opcode.TAG, _STR_INT),
    0x58: DecodeRule(Opcode.ARRAY, _INT),
    0x59: DecodeRule(Opcode.FAIL, _INT_INT),
    0x5A: DecodeRule(Opcode.LINE, _INT),
    0x74: DecodeRule(Opcode.BARRAY, _INT, variant=constants.BARRAY_BUILTIN),
}


def _build_decode_table() -> dict[int, DecodeRule]:
    """Map every valid opcode byte to its rule; absent bytes are invalid."""
    table: dict[int, DecodeRule] = {}

    for lo in range(16):
        table[(constants.HALT_CLASS << 4) | lo] = DecodeRule(Opcode.STOP)

    for i, symbol in enumerate(constants.BINOP_SYMBOLS):
        table[i + 1] = DecodeRule(Opcode.BINOP, variant=symbol)

    for hi, opcode in _MEMORY_CLASSES.items():
        for lo, kind in enumerate(constants.LOCATION_KINDS):
            table[(hi << 4) | lo] = DecodeRule(opcode, _INT, variant=kind)

    for lo, name in enumerate(constants.PATTERN_NAMES):
        table[0x60 | lo] = DecodeRule(Opcode.PATT, variant=name)

    for lo, name in enumerate(constants.BUILTIN_NAMES):
        table[0x70 | lo] = DecodeRule(Opcode.BUILTIN, variant=name)

    table.update(_FIXED_RULES)
    return table


DECODE_TABLE: dict[int, DecodeRule] = _build_decode_table()


def rule_for(code: int) -> DecodeRule | None:
    """Return the decode rule for opcode byte *code*, or None if invalid."""
    return DECODE_TABLE.get(code)
