"""Decoded instruction model and its canonical text rendering."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .opcodes import Opcode, OperandKind
from . import constants


def _hex32(value: int) -> str:
    return f"{value & constants.UINT32_MASK:0{constants.HEX_WIDTH}x}"


class Operand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: OperandKind
    value: int | str

    def __str__(self) -> str:
        if self.kind == OperandKind.ADDR:
            return f"0x{_hex32(self.value)}"
        return str(self.value)


class Capture(BaseModel):
    """One variable captured by a CLOSURE, e.g. ``L(2)``."""

    model_config = ConfigDict(frozen=True)

    kind: str
    index: int

    def __str__(self) -> str:
        return f"{self.kind}({self.index})"


# Opcodes whose first operand follows the mnemonic after a space, not a tab
_SPACE_SEPARATED: frozenset[Opcode] = frozenset(
    {Opcode.BINOP, Opcode.CONST, Opcode.STRING}
)

_DISPLAY_MNEMONICS: dict[Opcode, str] = {
    Opcode.BUILTIN: "CALL",
    Opcode.BARRAY: "CALL",
}


class Instruction(BaseModel):
    """A single decoded instruction.

    ``offset`` and ``size`` locate it inside the code region. ``str()`` of
    an instruction is its canonical text: the display form and, at the same
    time, the identity used when counting instructions.
    """

    model_config = ConfigDict(frozen=True)

    opcode: Opcode
    offset: int
    size: int
    variant: str | None = None
    operands: list[Operand] = []
    captures: list[Capture] = []

    @property
    def next_offset(self) -> int:
        return self.offset + self.size

    def is_halt(self) -> bool:
        return self.opcode == Opcode.STOP

    def __str__(self) -> str:
        if self.opcode == Opcode.STOP:
            return constants.HALT_TEXT

        mnemonic = _DISPLAY_MNEMONICS.get(self.opcode, self.opcode.value)
        operands = " ".join(str(op) for op in self.operands)

        if self.opcode == Opcode.BINOP:
            return f"{mnemonic} {self.variant}"
        if self.opcode in _SPACE_SEPARATED:
            return f"{mnemonic} {operands}"
        if self.opcode in (Opcode.LD, Opcode.LDA, Opcode.ST):
            return f"{mnemonic}\t{self.variant}({operands})"
        if self.opcode == Opcode.CLOSURE:
            target = _hex32(self.operands[0].value)
            captures = "".join(f" {capture}" for capture in self.captures)
            return f"{mnemonic}\t{target}{captures}"

        parts = [mnemonic]
        if self.variant is not None:
            parts.append(self.variant)
        if operands:
            parts.append(operands)
        return "\t".join(parts)
