"""Mutable machine state owned by the interpreter."""

from __future__ import annotations

from typing import Iterator, List

import numpy as np

from .constants import (
    DISPLAY_HEIGHT,
    DISPLAY_WIDTH,
    FONT_SPRITES,
    FONT_START,
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
    REGISTER_COUNT,
    STACK_DEPTH,
)
from .errors import (
    MemoryAccessError,
    ProgramTooLargeError,
    RegisterIndexError,
    StackOverflowError,
    StackUnderflowError,
)


class CallStack:
    """Bounded stack of return addresses."""

    def __init__(self, depth: int = STACK_DEPTH):
        self.depth = depth
        self._frames: List[int] = []

    def push(self, address: int) -> None:
        if len(self._frames) >= self.depth:
            raise StackOverflowError(
                f"Call stack overflow (depth {self.depth})"
            )
        self._frames.append(address & 0xFFFF)

    def pop(self) -> int:
        if not self._frames:
            raise StackUnderflowError("Return with empty call stack")
        return self._frames.pop()

    def clear(self) -> None:
        self._frames.clear()

    def frames(self) -> tuple[int, ...]:
        return tuple(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[int]:
        return iter(self._frames)


class MachineState:
    """Memory, registers, timers, call stack and display of one machine.

    Only the executor mutates an instance during a run; the scheduler owns the
    executor, so a state object is never shared between machines.
    """

    def __init__(self) -> None:
        self.memory = bytearray(MEMORY_SIZE)
        self.registers = bytearray(REGISTER_COUNT)
        self.stack = CallStack()
        self.display = np.zeros((DISPLAY_HEIGHT, DISPLAY_WIDTH), dtype=np.uint8)
        self.pc = PROGRAM_START
        self.i = 0
        self.delay_timer = 0
        self.sound_timer = 0
        self.program_size = 0
        self.load_font()

    def reset(self) -> None:
        """Return to power-on state: zeroed memory with the font loaded."""
        self.memory[:] = bytes(MEMORY_SIZE)
        self.registers[:] = bytes(REGISTER_COUNT)
        self.stack.clear()
        self.display.fill(0)
        self.pc = PROGRAM_START
        self.i = 0
        self.delay_timer = 0
        self.sound_timer = 0
        self.program_size = 0
        self.load_font()

    def load_font(self) -> None:
        self.memory[FONT_START : FONT_START + len(FONT_SPRITES)] = FONT_SPRITES

    def load_program(self, program: bytes) -> None:
        """Copy ``program`` verbatim to the program area and point PC at it."""
        if len(program) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(
                f"Program size {len(program)} exceeds maximum {MAX_PROGRAM_SIZE}"
            )
        self.memory[PROGRAM_START : PROGRAM_START + len(program)] = program
        self.program_size = len(program)
        self.pc = PROGRAM_START

    # Bounds-checked memory access used by memory-indexed instructions.

    def check_range(self, address: int, length: int = 1) -> None:
        if address < 0 or address + length > MEMORY_SIZE:
            raise MemoryAccessError(
                f"Memory access 0x{address:04X}+{length} outside 0x000-0x{MEMORY_SIZE - 1:03X}"
            )

    def read_byte(self, address: int) -> int:
        self.check_range(address)
        return self.memory[address]

    def write_byte(self, address: int, value: int) -> None:
        self.check_range(address)
        self.memory[address] = value & 0xFF

    def read_block(self, address: int, length: int) -> bytes:
        self.check_range(address, length)
        return bytes(self.memory[address : address + length])

    def write_block(self, address: int, data: bytes) -> None:
        self.check_range(address, len(data))
        self.memory[address : address + len(data)] = data

    def check_register(self, index: int) -> None:
        if not 0 <= index < REGISTER_COUNT:
            raise RegisterIndexError(f"Register index {index} out of range")

    @property
    def vf(self) -> int:
        return self.registers[0xF]

    def clear_display(self) -> None:
        self.display.fill(0)
