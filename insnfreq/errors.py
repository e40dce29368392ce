"""Error taxonomy for loading and decoding bytecode files.

Every error is fatal: nothing in the package recovers from one locally.
"""

from __future__ import annotations


class BytecodeError(Exception):
    """Base class for every load or decode failure."""

    kind = "BytecodeError"

    def __init__(self, message: str, offset: int | None = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (offset 0x{offset:08x})"
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.kind}: {super().__str__()}"


class LoadError(BytecodeError):
    """Raised when the file header or region layout is malformed."""

    pass


class DecodeError(BytecodeError):
    """Raised when the instruction stream cannot be decoded."""

    pass


class TruncatedHeader(LoadError):
    kind = "TruncatedHeader"


class InvalidMetadata(LoadError):
    kind = "InvalidMetadata"


class UnterminatedStringTable(LoadError):
    kind = "UnterminatedStringTable"


class UnexpectedEof(DecodeError):
    kind = "UnexpectedEof"


class StringOutOfBounds(DecodeError):
    kind = "StringOutOfBounds"


class InvalidOpcode(DecodeError):
    kind = "InvalidOpcode"


class InvalidCaptureKind(InvalidOpcode):
    """A CLOSURE capture entry names a storage kind outside G/L/A/C."""

    kind = "InvalidCaptureKind"
