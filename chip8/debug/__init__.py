"""Debug utilities for the CHIP-8 interpreter."""

from .disasm import disassemble
from .inspector import MemoryInspector
from .renderer import DisplayRenderer

__all__ = ["DisplayRenderer", "MemoryInspector", "disassemble"]
