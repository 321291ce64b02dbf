"""Instruction fetch and field extraction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .constants import MEMORY_SIZE
from .errors import MemoryAccessError


class OpcodeClass(IntEnum):
    """Top nibble of an instruction word."""

    SYSTEM = 0x0
    JUMP = 0x1
    CALL = 0x2
    SKIP_EQ_IMM = 0x3
    SKIP_NE_IMM = 0x4
    SKIP_EQ_REG = 0x5
    LOAD_IMM = 0x6
    ADD_IMM = 0x7
    ALU = 0x8
    SKIP_NE_REG = 0x9
    LOAD_INDEX = 0xA
    JUMP_OFFSET = 0xB
    RANDOM = 0xC
    DRAW = 0xD
    KEY = 0xE
    MISC = 0xF


@dataclass(frozen=True)
class DecodedInstr:
    """A 16-bit instruction word split into its operand fields."""

    raw: int
    kind: OpcodeClass
    x: int  # second nibble, register index
    y: int  # third nibble, register index
    n: int  # low nibble
    nn: int  # low byte
    nnn: int  # low 12 bits, address


def decode(word: int) -> DecodedInstr:
    """Decode a 16-bit word. Total: every value yields a field tuple."""
    word &= 0xFFFF
    return DecodedInstr(
        raw=word,
        kind=OpcodeClass(word >> 12),
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        nn=word & 0xFF,
        nnn=word & 0xFFF,
    )


def fetch(memory: bytes, pc: int) -> int:
    """Read the big-endian instruction word at ``pc``."""
    if pc < 0 or pc + 1 >= MEMORY_SIZE:
        raise MemoryAccessError(f"Instruction fetch outside memory at 0x{pc:04X}", pc=pc)
    return (memory[pc] << 8) | memory[pc + 1]


__all__ = ["OpcodeClass", "DecodedInstr", "decode", "fetch"]
