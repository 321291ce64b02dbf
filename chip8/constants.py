"""Shared architecture constants for the CHIP-8 interpreter.

This module centralizes the fixed machine parameters used across the
decoder, executor, scheduler and tests.
"""

# 4 KB of byte-addressable memory (0x000-0xFFF).
MEMORY_SIZE = 0x1000

# Programs are copied verbatim starting here; the region below holds the
# interpreter's font table.
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

# Highest address reachable by a 12-bit operand; FX1E reports overflow past it.
ADDRESS_MASK = 0x0FFF

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF

# Maximum number of nested calls.
STACK_DEPTH = 24

# Instruction width in bytes.
OPCODE_SIZE = 2

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# Delay/sound timers count down at this rate regardless of throughput.
TIMER_RATE_HZ = 60

DEFAULT_IPS = 200

KEY_COUNT = 16

FONT_START = 0x000
FONT_GLYPH_SIZE = 5

# Sixteen 4x5 hex digit glyphs, 0-F, one byte per row (high nibble used).
FONT_SPRITES = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)
