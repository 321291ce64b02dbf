"""Configuration system for the CHIP-8 interpreter."""

from .machine_config import CoordinatePolicy, MachineConfig

__all__ = ["CoordinatePolicy", "MachineConfig"]
