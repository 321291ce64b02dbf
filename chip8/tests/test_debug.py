"""Tests for the diagnostic dump helpers."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from chip8.debug import DisplayRenderer, MemoryInspector, disassemble
from chip8.errors import UnknownOpcodeError
from chip8.state import MachineState


@pytest.mark.parametrize(
    "word, text",
    [
        (0x00E0, "CLS"),
        (0x00EE, "RET"),
        (0x0123, "SYS 0x123"),
        (0x1ABC, "JP 0xABC"),
        (0x2300, "CALL 0x300"),
        (0x3A42, "SE VA, 0x42"),
        (0x5120, "SE V1, V2"),
        (0x8AB4, "ADD VA, VB"),
        (0x810E, "SHL V1, V0"),
        (0xB200, "JP V0, 0x200"),
        (0xD125, "DRW V1, V2, 5"),
        (0xE59E, "SKP V5"),
        (0xF40A, "LD V4, K"),
        (0xF265, "LD V2, [I]"),
        (0x5121, "DW 0x5121"),
        (0x8128, "DW 0x8128"),
        (0xFFFF, "DW 0xFFFF"),
    ],
)
def test_disassemble(word: int, text: str) -> None:
    assert disassemble(word) == text


def test_dump_memory_formats_rows() -> None:
    state = MachineState()
    state.memory[0x200:0x203] = b"ABC"
    dump = MemoryInspector(state).dump_memory(0x200, 16)
    assert dump.startswith("200: 41 42 43 00")
    assert dump.endswith("|ABC.............|")


def test_dump_opcodes_reads_big_endian_words() -> None:
    state = MachineState()
    state.load_program(b"\x00\xe0\x12\x00")
    inspector = MemoryInspector(state)
    dump = inspector.dump_opcodes(0x200, 4, disassemble_words=True)
    assert dump.splitlines() == ["200: 00E0  CLS", "202: 1200  JP 0x200"]
    assert inspector.program_listing() == dump


def test_dump_opcodes_can_skip_empty_words() -> None:
    state = MachineState()
    state.load_program(b"\x00\xe0")
    lines = MemoryInspector(state).dump_opcodes(skip_zero=True).splitlines()
    assert "200: 00E0" in lines
    assert all(not line.endswith(": 0000") for line in lines)


def test_dump_registers_includes_fault() -> None:
    state = MachineState()
    state.registers[0xA] = 0x2C
    state.stack.push(0x204)
    fault = UnknownOpcodeError("Unknown operation 0xFFFF", pc=0x202, opcode=0xFFFF)
    dump = MemoryInspector(state).dump_registers(fault)
    assert "VA: 0x2C (44)" in dump
    assert "SP: 1 [204]" in dump
    assert dump.splitlines()[-1] == "Fault: Unknown operation 0xFFFF pc=0x202 opcode=0xFFFF"


def test_render_text_and_image(tmp_path) -> None:
    buffer = np.zeros((32, 64), dtype=np.uint8)
    buffer[0, 0] = 1
    buffer[31, 63] = 1
    renderer = DisplayRenderer(scale=2)

    lines = renderer.render_text(buffer).splitlines()
    assert len(lines) == 32
    assert lines[0] == "O" + "." * 63
    assert lines[31] == "." * 63 + "O"

    path = tmp_path / "display.png"
    renderer.save_display(buffer, str(path))
    with Image.open(path) as img:
        assert img.size == (128, 64)
        assert img.getpixel((0, 0)) == (255, 255, 255)
        assert img.getpixel((2, 0)) == (0, 0, 0)
