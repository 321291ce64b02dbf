"""Exception types raised by the CHIP-8 core."""

from __future__ import annotations

from typing import Optional


class MachineError(Exception):
    """An instruction's preconditions were violated; the machine must halt.

    ``pc`` and ``opcode`` identify the faulting instruction. They are filled
    in by the scheduler when the executor raises without them.
    """

    def __init__(
        self, message: str, *, pc: Optional[int] = None, opcode: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.opcode = opcode

    def attach(self, pc: int, opcode: Optional[int]) -> "MachineError":
        if self.pc is None:
            self.pc = pc
        if self.opcode is None:
            self.opcode = opcode
        return self

    def __str__(self) -> str:
        parts = [self.message]
        if self.pc is not None:
            parts.append(f"pc=0x{self.pc:03X}")
        if self.opcode is not None:
            parts.append(f"opcode=0x{self.opcode:04X}")
        return " ".join(parts)


class StackOverflowError(MachineError):
    pass


class StackUnderflowError(MachineError):
    pass


class MemoryAccessError(MachineError):
    pass


class RegisterIndexError(MachineError):
    pass


class UnknownOpcodeError(MachineError):
    pass


class InfiniteLoopError(MachineError):
    """Raised for a jump whose target is the jump instruction itself."""


class InvalidSpriteError(MachineError):
    pass


class InvalidKeyError(MachineError):
    pass


class ConfigError(ValueError):
    """Invalid startup configuration (rate, coordinate policy, ROM path)."""


class ProgramTooLargeError(ValueError):
    pass


__all__ = [
    "MachineError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
    "RegisterIndexError",
    "UnknownOpcodeError",
    "InfiniteLoopError",
    "InvalidSpriteError",
    "InvalidKeyError",
    "ConfigError",
    "ProgramTooLargeError",
]
