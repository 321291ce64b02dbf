"""Memory and state inspection utilities for the CHIP-8 interpreter."""

from typing import List, Optional

from ..constants import MEMORY_SIZE, OPCODE_SIZE, PROGRAM_START
from ..state import MachineState
from .disasm import disassemble


class MemoryInspector:
    """Diagnostic dumps of a machine, used when a run ends."""

    def __init__(self, state: MachineState):
        self.state = state

    def dump_memory(self, start: int = 0, length: int = MEMORY_SIZE, width: int = 16) -> str:
        """Dump memory in hex format."""
        memory = self.state.memory
        end = min(start + length, MEMORY_SIZE)
        lines = []

        for addr in range(start, end, width):
            chunk = memory[addr:min(addr + width, end)]
            hex_part = " ".join(f"{byte:02X}" for byte in chunk)
            ascii_part = "".join(chr(byte) if 0x20 <= byte <= 0x7E else "." for byte in chunk)
            lines.append(f"{addr:03X}: " + hex_part.ljust(width * 3) + "|" + ascii_part + "|")

        return "\n".join(lines)

    def dump_opcodes(self, start: int = 0, length: int = MEMORY_SIZE,
                     disassemble_words: bool = False, skip_zero: bool = False) -> str:
        """Dump memory as big-endian instruction words."""
        memory = self.state.memory
        end = min(start + length, MEMORY_SIZE) & ~1
        lines = []

        for addr in range(start, end, OPCODE_SIZE):
            word = (memory[addr] << 8) | memory[addr + 1]
            if skip_zero and word == 0:
                continue
            line = f"{addr:03X}: {word:04X}"
            if disassemble_words:
                line += f"  {disassemble(word)}"
            lines.append(line)

        return "\n".join(lines)

    def dump_registers(self, fault: Optional[Exception] = None) -> str:
        """Dump PC, I, stack, timers and V0-VF."""
        state = self.state
        lines: List[str] = [
            f"PC: 0x{state.pc:03X}",
            f"I:  0x{state.i:03X}",
            f"SP: {len(state.stack)} [{' '.join(f'{addr:03X}' for addr in state.stack)}]",
            f"DT: {state.delay_timer}  ST: {state.sound_timer}",
        ]
        for index, value in enumerate(state.registers):
            lines.append(f"V{index:X}: 0x{value:02X} ({value})")
        if fault is not None:
            lines.append(f"Fault: {fault}")
        return "\n".join(lines)

    def program_listing(self) -> str:
        """Disassemble the loaded program region."""
        size = self.state.program_size
        return self.dump_opcodes(PROGRAM_START, size + (size & 1), disassemble_words=True)
