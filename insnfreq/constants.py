"""Named constants — eliminates magic numbers across the codebase."""

from __future__ import annotations

HEADER_SIZE = 12
HEADER_FORMAT = "<III"
PUBLIC_SYMBOL_ENTRY_SIZE = 8

INT_SIZE = 4
OPCODE_SIZE = 1
CAPTURE_ENTRY_SIZE = OPCODE_SIZE + INT_SIZE
CLOSURE_PREFIX_SIZE = OPCODE_SIZE + 2 * INT_SIZE

STRING_ENCODING = "utf-8"
# Undecodable bytes round-trip as lone surrogates, keeping distinct byte strings distinct
STRING_ERRORS = "surrogateescape"
STRING_TERMINATOR = b"\x00"

HALT_CLASS = 0xF
HALT_TEXT = "<end>"

# Index is the opcode low nibble minus one
BINOP_SYMBOLS: tuple[str, ...] = (
    "+",
    "-",
    "*",
    "/",
    "%",
    "<",
    "<=",
    ">",
    ">=",
    "==",
    "!=",
    "&&",
    "!!",
)

# Shared by LD/LDA/ST low nibbles and CLOSURE capture-kind bytes
LOCATION_KINDS: tuple[str, ...] = ("G", "L", "A", "C")

PATTERN_NAMES: tuple[str, ...] = (
    "=str",
    "#string",
    "#array",
    "#sexp",
    "#ref",
    "#val",
    "#fun",
)

BUILTIN_NAMES: tuple[str, ...] = ("Lread", "Lwrite", "Llength", "Lstring")
BARRAY_BUILTIN = "Barray"

HEX_WIDTH = 8
UINT32_MASK = 0xFFFFFFFF

REPORT_LINE_TEMPLATE = "{count} x {text}"
LISTING_LINE_TEMPLATE = "{offset:08x}: {text}"
