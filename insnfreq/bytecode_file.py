"""Bytecode container — header parsing and bounds-checked region access."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import BinaryIO

from .errors import (
    InvalidMetadata,
    StringOutOfBounds,
    TruncatedHeader,
    UnexpectedEof,
    UnterminatedStringTable,
)
from . import constants

logger = logging.getLogger(__name__)

_INT32 = struct.Struct("<i")
_UINT32 = struct.Struct("<I")


@dataclass(frozen=True)
class BytecodeFile:
    """An immutable, loaded bytecode file.

    ``raw`` holds everything after the 12-byte header. The three regions
    (public symbols, string table, code) are addressed by offsets into it;
    nothing is copied out of ``raw`` until a string is materialized.
    """

    stringtab_size: int
    global_area_size: int
    public_symbols_number: int
    raw: bytes

    @property
    def public_symbols_start(self) -> int:
        return 0

    @property
    def stringtab_start(self) -> int:
        return (
            self.public_symbols_start
            + constants.PUBLIC_SYMBOL_ENTRY_SIZE * self.public_symbols_number
        )

    @property
    def code_start(self) -> int:
        return self.stringtab_start + self.stringtab_size

    @property
    def code_size(self) -> int:
        return len(self.raw) - self.code_start

    def get_byte(self, offset: int) -> int:
        """Return the code byte at *offset* (relative to the code region)."""
        if offset < 0 or offset >= self.code_size:
            raise UnexpectedEof("byte read past end of code", offset)
        return self.raw[self.code_start + offset]

    def get_int(self, offset: int) -> int:
        """Return the signed little-endian 32-bit integer at *offset*."""
        self._check_int_window(offset)
        return _INT32.unpack_from(self.raw, self.code_start + offset)[0]

    def get_uint(self, offset: int) -> int:
        """Return the unsigned little-endian 32-bit integer at *offset*."""
        self._check_int_window(offset)
        return _UINT32.unpack_from(self.raw, self.code_start + offset)[0]

    def get_str(self, offset: int) -> str:
        """Return the null-terminated string at string-table *offset*.

        Any offset inside the table is accepted, including one that points
        into the middle of a string.
        """
        if offset < 0 or offset >= self.stringtab_size:
            raise StringOutOfBounds(
                f"string offset {offset} outside table of {self.stringtab_size} bytes",
                offset,
            )
        start = self.stringtab_start + offset
        end = self.raw.index(
            constants.STRING_TERMINATOR, start, self.code_start
        )
        return self.raw[start:end].decode(
            constants.STRING_ENCODING, errors=constants.STRING_ERRORS
        )

    def fits(self, offset: int, size: int) -> bool:
        """Whether ``[offset, offset + size)`` lies inside the code region."""
        return 0 <= offset and offset + size <= self.code_size

    def _check_int_window(self, offset: int) -> None:
        if not self.fits(offset, constants.INT_SIZE):
            raise UnexpectedEof("integer read past end of code", offset)


def _read_source(byte_source: bytes | bytearray | memoryview | BinaryIO) -> bytes:
    if isinstance(byte_source, (bytes, bytearray, memoryview)):
        return bytes(byte_source)
    return byte_source.read()


def load(byte_source: bytes | bytearray | memoryview | BinaryIO) -> BytecodeFile:
    """Parse a bytecode file from raw bytes or a readable binary stream.

    Raises:
        TruncatedHeader: fewer than 12 header bytes are available.
        InvalidMetadata: the declared sizes leave no room for the code region.
        UnterminatedStringTable: the string table does not end with a 0 byte.
    """
    data = _read_source(byte_source)
    if len(data) < constants.HEADER_SIZE:
        raise TruncatedHeader(
            f"expected {constants.HEADER_SIZE} header bytes, got {len(data)}"
        )

    stringtab_size, global_area_size, public_symbols_number = struct.unpack_from(
        constants.HEADER_FORMAT, data
    )
    bytecode = BytecodeFile(
        stringtab_size=stringtab_size,
        global_area_size=global_area_size,
        public_symbols_number=public_symbols_number,
        raw=data[constants.HEADER_SIZE :],
    )

    if bytecode.stringtab_start >= len(bytecode.raw):
        raise InvalidMetadata(
            f"public symbol table ({public_symbols_number} entries) "
            f"runs past the end of the file"
        )
    if bytecode.code_start >= len(bytecode.raw):
        raise InvalidMetadata(
            f"string table ({stringtab_size} bytes) leaves no code region"
        )
    if stringtab_size != 0 and bytecode.raw[bytecode.code_start - 1] != 0:
        raise UnterminatedStringTable("last string in table is not null-terminated")

    logger.info(
        "Loaded bytecode: %d public symbols, %d-byte string table, "
        "%d-byte global area, %d bytes of code",
        public_symbols_number,
        stringtab_size,
        global_area_size,
        bytecode.code_size,
    )
    return bytecode
