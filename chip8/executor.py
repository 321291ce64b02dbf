"""Opcode semantics for the CHIP-8 instruction set."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from .config import CoordinatePolicy, MachineConfig
from .constants import (
    ADDRESS_MASK,
    DISPLAY_HEIGHT,
    DISPLAY_WIDTH,
    FLAG_REGISTER,
    FONT_GLYPH_SIZE,
    FONT_START,
    KEY_COUNT,
    OPCODE_SIZE,
)
from .decoder import DecodedInstr, OpcodeClass
from .errors import (
    InfiniteLoopError,
    InvalidKeyError,
    InvalidSpriteError,
    UnknownOpcodeError,
)
from .keypad import Keypad
from .state import MachineState

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Externally visible effects of one instruction."""

    display_changed: bool = False
    # Register that should receive the next asserted input line (FX0A).
    wait_register: Optional[int] = None
    # Sound timer went from zero to non-zero.
    audio_cue: bool = False


class Executor:
    """Executes decoded instructions against a :class:`MachineState`.

    ``execute`` expects the program counter to already point past the
    instruction (post-fetch); skips and jumps adjust it from there.
    """

    def __init__(
        self,
        state: MachineState,
        keypad: Keypad,
        config: Optional[MachineConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.state = state
        self.keypad = keypad
        self.config = config or MachineConfig()
        self.rng = rng or random.Random(self.config.seed)

    def execute(self, instr: DecodedInstr) -> ExecutionResult:
        result = ExecutionResult()
        x, y = instr.x, instr.y

        match instr.kind:
            case OpcodeClass.SYSTEM:
                match instr.raw:
                    case 0x00E0:
                        self.state.clear_display()
                        result.display_changed = True
                    case 0x00EE:
                        self.state.pc = self.state.stack.pop()
                    case _:
                        # Machine-code routine on the original hardware; ignored.
                        logger.debug("SYS 0x%03X ignored", instr.nnn)
            case OpcodeClass.JUMP:
                self._jump(instr.nnn)
            case OpcodeClass.CALL:
                self.state.stack.push(self.state.pc)
                self.state.pc = instr.nnn
            case OpcodeClass.SKIP_EQ_IMM:
                self._skip_if(self.state.registers[x] == instr.nn)
            case OpcodeClass.SKIP_NE_IMM:
                self._skip_if(self.state.registers[x] != instr.nn)
            case OpcodeClass.SKIP_EQ_REG:
                self._require_zero_nibble(instr)
                self._skip_if(self.state.registers[x] == self.state.registers[y])
            case OpcodeClass.LOAD_IMM:
                self.state.registers[x] = instr.nn
            case OpcodeClass.ADD_IMM:
                self.state.registers[x] = (self.state.registers[x] + instr.nn) & 0xFF
            case OpcodeClass.ALU:
                self._alu(instr)
            case OpcodeClass.SKIP_NE_REG:
                self._require_zero_nibble(instr)
                self._skip_if(self.state.registers[x] != self.state.registers[y])
            case OpcodeClass.LOAD_INDEX:
                self.state.i = instr.nnn
            case OpcodeClass.JUMP_OFFSET:
                self.state.pc = self.state.registers[0] + instr.nnn
            case OpcodeClass.RANDOM:
                self.state.registers[x] = self.rng.randrange(0x100) & instr.nn
            case OpcodeClass.DRAW:
                self._draw(instr)
                result.display_changed = True
            case OpcodeClass.KEY:
                match instr.nn:
                    case 0x9E:
                        self._skip_if(self.keypad.is_pressed(self._key_line(x)))
                    case 0xA1:
                        self._skip_if(not self.keypad.is_pressed(self._key_line(x)))
                    case _:
                        self._unknown(instr)
            case OpcodeClass.MISC:
                self._misc(instr, result)
            case _:
                self._unknown(instr)

        return result

    # Control flow

    def _jump(self, address: int) -> None:
        if address == self.state.pc - OPCODE_SIZE:
            raise InfiniteLoopError(f"Jump to itself at 0x{address:03X}")
        self.state.pc = address

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self.state.pc += OPCODE_SIZE

    # Register arithmetic (8XYN)

    def _alu(self, instr: DecodedInstr) -> None:
        regs = self.state.registers
        x, y = instr.x, instr.y

        match instr.n:
            case 0x0:
                regs[x] = regs[y]
            case 0x1:
                regs[x] |= regs[y]
            case 0x2:
                regs[x] &= regs[y]
            case 0x3:
                regs[x] ^= regs[y]
            case 0x4:
                total = regs[x] + regs[y]
                regs[x] = total & 0xFF
                regs[FLAG_REGISTER] = 1 if total > 0xFF else 0
            case 0x5:
                flag = regs[x] > regs[y]
                regs[x] = (regs[x] - regs[y]) & 0xFF
                regs[FLAG_REGISTER] = 1 if flag else 0
            case 0x6:
                source = regs[y] if self.config.shift_uses_vy else regs[x]
                regs[x] = source >> 1
                regs[FLAG_REGISTER] = source & 0x1
            case 0x7:
                flag = regs[y] > regs[x]
                regs[x] = (regs[y] - regs[x]) & 0xFF
                regs[FLAG_REGISTER] = 1 if flag else 0
            case 0xE:
                source = regs[y] if self.config.shift_uses_vy else regs[x]
                regs[x] = (source << 1) & 0xFF
                regs[FLAG_REGISTER] = source >> 7
            case _:
                self._unknown(instr)

    # Display

    def _draw(self, instr: DecodedInstr) -> None:
        state = self.state
        x0 = state.registers[instr.x]
        y0 = state.registers[instr.y]
        rows = state.read_block(state.i, instr.n)
        wrap = self.config.coordinate_policy is CoordinatePolicy.WRAP
        display = state.display

        collision = 0
        for row, bits in enumerate(rows):
            for col in range(8):
                if not bits & (0x80 >> col):
                    continue
                px = x0 + col
                py = y0 + row
                if wrap:
                    px %= DISPLAY_WIDTH
                    py %= DISPLAY_HEIGHT
                elif px >= DISPLAY_WIDTH or py >= DISPLAY_HEIGHT:
                    continue
                if display[py, px]:
                    collision = 1
                display[py, px] ^= 1

        state.registers[FLAG_REGISTER] = collision

    # Input

    def _key_line(self, register: int) -> int:
        line = self.state.registers[register]
        if line >= KEY_COUNT:
            raise InvalidKeyError(f"V{register:X} holds {line}, not an input line 0-15")
        return line

    # Timers, index register and memory transfers (FXNN)

    def _misc(self, instr: DecodedInstr, result: ExecutionResult) -> None:
        state = self.state
        regs = state.registers
        x = instr.x

        match instr.nn:
            case 0x07:
                regs[x] = state.delay_timer
            case 0x0A:
                line = self.keypad.first_pressed()
                if line is None:
                    result.wait_register = x
                else:
                    regs[x] = line
            case 0x15:
                state.delay_timer = regs[x]
            case 0x18:
                previous = state.sound_timer
                state.sound_timer = regs[x]
                result.audio_cue = previous == 0 and state.sound_timer != 0
            case 0x1E:
                total = state.i + regs[x]
                state.i = total & 0xFFFF
                regs[FLAG_REGISTER] = 1 if total > ADDRESS_MASK else 0
            case 0x29:
                digit = regs[x]
                if digit > 0xF:
                    raise InvalidSpriteError(f"V{x:X} holds {digit}, no font glyph")
                state.i = FONT_START + digit * FONT_GLYPH_SIZE
            case 0x33:
                value = regs[x]
                state.write_block(
                    state.i, bytes((value // 100, (value // 10) % 10, value % 10))
                )
            case 0x55:
                state.check_register(x)
                state.write_block(state.i, bytes(regs[: x + 1]))
                if self.config.increment_index_on_transfer:
                    state.i = (state.i + x + 1) & 0xFFFF
            case 0x65:
                state.check_register(x)
                regs[: x + 1] = state.read_block(state.i, x + 1)
                if self.config.increment_index_on_transfer:
                    state.i = (state.i + x + 1) & 0xFFFF
            case _:
                self._unknown(instr)

    def _require_zero_nibble(self, instr: DecodedInstr) -> None:
        if instr.n != 0:
            self._unknown(instr)

    def _unknown(self, instr: DecodedInstr) -> None:
        raise UnknownOpcodeError(
            f"Unknown operation 0x{instr.raw:04X}", opcode=instr.raw
        )


__all__ = ["Executor", "ExecutionResult"]
