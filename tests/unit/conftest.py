"""Shared helpers for building bytecode files byte by byte."""

import struct

from insnfreq.bytecode_file import BytecodeFile, load


def i32(value: int) -> bytes:
    """Little-endian signed 32-bit encoding of *value*."""
    return struct.pack("<i", value)


def string_table(*strings: str) -> bytes:
    """Concatenate *strings* as null-terminated UTF-8."""
    return b"".join(s.encode("utf-8") + b"\x00" for s in strings)


def build_file(
    code: bytes,
    strings: bytes = b"",
    public_symbols: bytes = b"",
    global_area_size: int = 0,
) -> bytes:
    """Assemble a complete bytecode file: header, symbols, strings, code."""
    header = struct.pack(
        "<III", len(strings), global_area_size, len(public_symbols) // 8
    )
    return header + public_symbols + strings + code


def make_bytecode(code: bytes, strings: bytes = b"", **kwargs) -> BytecodeFile:
    return load(build_file(code, strings, **kwargs))
