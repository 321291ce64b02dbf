"""CHIP-8 interpreter package."""

from .config import CoordinatePolicy, MachineConfig
from .decoder import DecodedInstr, OpcodeClass, decode, fetch
from .emulator import Chip8Emulator
from .errors import ConfigError, MachineError
from .executor import ExecutionResult, Executor
from .keypad import Keypad
from .scheduler import CycleScheduler, SchedulerState, TickResult
from .state import CallStack, MachineState
from .state_model import (
    CPUState,
    EmulatorState,
    FieldDiff,
    StateDiff,
    TimerState,
    capture_state,
    diff_states,
    empty_state_diff,
)
from .timers import TimerDriver

__all__ = [
    "Chip8Emulator",
    "MachineConfig",
    "CoordinatePolicy",
    "MachineState",
    "CallStack",
    "OpcodeClass",
    "DecodedInstr",
    "decode",
    "fetch",
    "Executor",
    "ExecutionResult",
    "Keypad",
    "TimerDriver",
    "CycleScheduler",
    "SchedulerState",
    "TickResult",
    "MachineError",
    "ConfigError",
    "CPUState",
    "TimerState",
    "EmulatorState",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "diff_states",
    "empty_state_diff",
]
