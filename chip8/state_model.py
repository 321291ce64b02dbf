"""Canonical emulator state snapshots and diff utilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from .emulator import Chip8Emulator


@dataclass(frozen=True)
class CPUState:
    """Registers, call stack and execution counters."""

    registers: Dict[str, int]
    stack: Tuple[int, ...]
    instruction_count: int
    status: str


@dataclass(frozen=True)
class TimerState:
    """Delay/sound timer values."""

    delay: int
    sound: int


@dataclass(frozen=True)
class EmulatorState:
    """Composite immutable snapshot of one machine."""

    cpu: CPUState
    timers: TimerState
    memory: bytes
    display: bytes
    pressed_lines: Tuple[int, ...]


@dataclass(frozen=True)
class FieldDiff:
    """Difference for a single named field."""

    name: str
    before: object
    after: object


@dataclass(frozen=True)
class StateDiff:
    """Aggregated differences between two emulator states."""

    cpu: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    timers: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    memory_addresses: Tuple[int, ...] = field(default_factory=tuple)
    display_changed: bool = False

    def is_empty(self) -> bool:
        """Return True when no differences were recorded."""

        return (
            not self.cpu
            and not self.timers
            and not self.memory_addresses
            and not self.display_changed
        )


def empty_state_diff() -> StateDiff:
    """Return a reusable empty diff instance."""

    return StateDiff()


def capture_state(emulator: Chip8Emulator) -> EmulatorState:
    """Capture the current emulator state as canonical snapshot."""

    state = emulator.state
    registers = {f"v{index:x}": value for index, value in enumerate(state.registers)}
    registers["pc"] = state.pc
    registers["i"] = state.i
    cpu = CPUState(
        registers=registers,
        stack=state.stack.frames(),
        instruction_count=emulator.instruction_count,
        status=emulator.status.name,
    )
    return EmulatorState(
        cpu=cpu,
        timers=TimerState(delay=state.delay_timer, sound=state.sound_timer),
        memory=bytes(state.memory),
        display=state.display.tobytes(),
        pressed_lines=emulator.keypad.pressed_lines(),
    )


def diff_states(before: Optional[EmulatorState], after: EmulatorState) -> StateDiff:
    """Compute structured differences between two emulator states."""

    if before is None:
        return empty_state_diff()

    return StateDiff(
        cpu=_diff_cpu(before.cpu, after.cpu),
        timers=_diff_timers(before.timers, after.timers),
        memory_addresses=tuple(
            address
            for address, (old, new) in enumerate(zip(before.memory, after.memory))
            if old != new
        ),
        display_changed=before.display != after.display,
    )


def _diff_cpu(before: CPUState, after: CPUState) -> Tuple[FieldDiff, ...]:
    diffs: list[FieldDiff] = []
    diffs.extend(_diff_mapping("registers", before.registers, after.registers))
    if before.stack != after.stack:
        diffs.append(FieldDiff("stack", before.stack, after.stack))
    if before.instruction_count != after.instruction_count:
        diffs.append(
            FieldDiff(
                "instruction_count",
                before.instruction_count,
                after.instruction_count,
            )
        )
    if before.status != after.status:
        diffs.append(FieldDiff("status", before.status, after.status))
    return tuple(diffs)


def _diff_timers(before: TimerState, after: TimerState) -> Tuple[FieldDiff, ...]:
    diffs: list[FieldDiff] = []
    if before.delay != after.delay:
        diffs.append(FieldDiff("delay", before.delay, after.delay))
    if before.sound != after.sound:
        diffs.append(FieldDiff("sound", before.sound, after.sound))
    return tuple(diffs)


def _diff_mapping(
    prefix: str, before: Dict[str, int], after: Dict[str, int]
) -> Iterable[FieldDiff]:
    for key in sorted(set(before.keys()) | set(after.keys())):
        previous = before.get(key)
        current = after.get(key)
        if previous != current:
            yield FieldDiff(f"{prefix}.{key}", previous, current)


__all__ = [
    "CPUState",
    "TimerState",
    "EmulatorState",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "diff_states",
    "empty_state_diff",
]
