"""CHIP-8 emulator facade wiring state, executor, keypad and scheduler."""

from __future__ import annotations

import logging
import random
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import numpy as np

from .config import MachineConfig
from .errors import ConfigError, MachineError
from .executor import Executor
from .keypad import Keypad
from .scheduler import CycleScheduler, SchedulerState, TickResult
from .state import MachineState
from .timers import Clock, TimerDriver

logger = logging.getLogger(__name__)


class Chip8Emulator:
    """One independent CHIP-8 machine.

    The host loads a program, then calls :meth:`step` (or :meth:`run`) and
    reads :meth:`get_display_buffer` whenever a tick reports ``frame_ready``.
    """

    def __init__(
        self,
        config: Optional[MachineConfig] = None,
        *,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
        audio_callback: Optional[Callable[[], None]] = None,
    ):
        self.config = (config or MachineConfig()).validate()
        self.state = MachineState()
        self.keypad = Keypad()
        self.executor = Executor(self.state, self.keypad, self.config, rng=rng)
        self.timers = TimerDriver(clock=clock)
        self.scheduler = CycleScheduler(
            self.state,
            self.executor,
            self.keypad,
            ips=self.config.ips,
            timers=self.timers,
            clock=clock,
            sleep=sleep,
        )
        self.audio_callback = audio_callback
        self._program = b""

    # Program loading

    def load_program(self, program: bytes) -> None:
        self.state.load_program(bytes(program))
        self._program = bytes(program)
        logger.info("Loaded %d byte program", len(program))

    def load_rom(self, path: Union[str, Path]) -> None:
        rom_path = Path(path)
        if not rom_path.is_file():
            raise ConfigError(f"ROM not found: {rom_path}")
        self.load_program(rom_path.read_bytes())

    def reset(self) -> None:
        """Power-cycle the machine and reload the last program."""
        self.state.reset()
        self.keypad.release_all()
        self.scheduler.reset()
        if self._program:
            self.state.load_program(self._program)

    # Execution

    def step(self) -> TickResult:
        result = self.scheduler.tick()
        if result.audio_cue:
            logger.info("Beep (sound timer=%d)", self.state.sound_timer)
            if self.audio_callback is not None:
                self.audio_callback()
        return result

    def run(
        self,
        max_ticks: Optional[int] = None,
        on_tick: Optional[Callable[[TickResult], None]] = None,
    ) -> int:
        count = 0
        while self.running and (max_ticks is None or count < max_ticks):
            result = self.step()
            count += 1
            if on_tick is not None:
                on_tick(result)
        return count

    def stop(self) -> None:
        self.scheduler.stop()

    @property
    def status(self) -> SchedulerState:
        return self.scheduler.status

    @property
    def running(self) -> bool:
        return self.scheduler.running

    @property
    def fault(self) -> Optional[MachineError]:
        return self.scheduler.fault

    @property
    def instruction_count(self) -> int:
        return self.scheduler.instruction_count

    # Host views

    def get_display_buffer(self) -> np.ndarray:
        return self.state.display.copy()

    def get_cpu_state(self) -> Dict[str, Any]:
        return {
            "pc": self.state.pc,
            "i": self.state.i,
            "v": list(self.state.registers),
            "stack": list(self.state.stack.frames()),
            "delay_timer": self.state.delay_timer,
            "sound_timer": self.state.sound_timer,
            "status": self.status.name,
            "instructions": self.instruction_count,
        }


__all__ = ["Chip8Emulator"]
