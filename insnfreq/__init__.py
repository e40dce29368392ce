"""Bytecode instruction frequency analyser package."""

from .run import run  # noqa: F401
from .bytecode_file import BytecodeFile, load  # noqa: F401
from .decoder import decode_at  # noqa: F401
from .api import (  # noqa: F401
    load_bytecode_file,
    dump_listing,
    instruction_frequencies,
    frequency_report,
)
