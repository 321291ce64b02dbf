"""Fetch-execute loop with throughput cap and input-wait sub-state."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from .constants import DEFAULT_IPS, OPCODE_SIZE
from .decoder import decode, fetch
from .errors import ConfigError, MachineError
from .executor import Executor
from .keypad import Keypad
from .state import MachineState
from .timers import Clock, TimerDriver

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    """Interpreter run states."""

    RUNNING = auto()
    # Sub-state of RUNNING: FX0A is blocked until an input line is asserted.
    AWAITING_INPUT = auto()
    HALTED = auto()


@dataclass(frozen=True)
class TickResult:
    """Host-visible outcome of one scheduler tick."""

    frame_ready: bool
    running: bool
    awaiting_input: bool = False
    audio_cue: bool = False
    sound_active: bool = False
    timer_ticks: int = 0
    pc: int = 0

    @property
    def halted(self) -> bool:
        return not self.running


class CycleScheduler:
    """Drives timers and executes one instruction per tick at ``ips``."""

    def __init__(
        self,
        state: MachineState,
        executor: Executor,
        keypad: Keypad,
        *,
        ips: int = DEFAULT_IPS,
        timers: Optional[TimerDriver] = None,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if isinstance(ips, bool) or not isinstance(ips, int) or ips <= 0:
            raise ConfigError(f"Instructions per second must be a positive integer, got {ips!r}")
        self.state = state
        self.executor = executor
        self.keypad = keypad
        self.ips = ips
        self.clock = clock
        self.sleep = sleep
        self.timers = timers if timers is not None else TimerDriver(clock=clock)

        self.status = SchedulerState.RUNNING
        self.fault: Optional[MachineError] = None
        self.pending_register: Optional[int] = None
        self.tick_count = 0
        self.instruction_count = 0

    @property
    def running(self) -> bool:
        return self.status is not SchedulerState.HALTED

    @property
    def awaiting_input(self) -> bool:
        return self.status is SchedulerState.AWAITING_INPUT

    def reset(self) -> None:
        self.status = SchedulerState.RUNNING
        self.fault = None
        self.pending_register = None
        self.tick_count = 0
        self.instruction_count = 0
        self.timers.reset()

    def stop(self) -> None:
        """Host-requested halt."""

        if self.status is not SchedulerState.HALTED:
            logger.info("Stop requested at pc=0x%03X", self.state.pc)
        self.status = SchedulerState.HALTED
        self.pending_register = None

    def tick(self) -> TickResult:
        if self.status is SchedulerState.HALTED:
            return self._result(frame_ready=False)

        tick_start = self.clock()
        timer_ticks = self.timers.advance(self.state, tick_start)

        frame_ready = False
        audio_cue = False
        try:
            if self.status is SchedulerState.AWAITING_INPUT:
                self._poll_input()
            else:
                frame_ready, audio_cue = self._execute_next()
        except MachineError as exc:
            self._halt(exc)

        self._throttle(tick_start)
        self.tick_count += 1
        return self._result(
            frame_ready=frame_ready, audio_cue=audio_cue, timer_ticks=timer_ticks
        )

    def run(
        self,
        max_ticks: Optional[int] = None,
        on_tick: Optional[Callable[[TickResult], None]] = None,
    ) -> int:
        """Tick until halted or ``max_ticks`` is reached; return ticks run."""

        count = 0
        while self.running and (max_ticks is None or count < max_ticks):
            result = self.tick()
            count += 1
            if on_tick is not None:
                on_tick(result)
        return count

    def _execute_next(self) -> tuple[bool, bool]:
        state = self.state
        pc = state.pc
        opcode: Optional[int] = None
        try:
            opcode = fetch(state.memory, pc)
            instr = decode(opcode)
            state.pc = (pc + OPCODE_SIZE) & 0xFFFF
            logger.debug("0x%03X: %04X %s", pc, opcode, instr.kind.name)
            result = self.executor.execute(instr)
        except MachineError as exc:
            raise exc.attach(pc, opcode)

        self.instruction_count += 1
        if result.wait_register is not None:
            self.status = SchedulerState.AWAITING_INPUT
            self.pending_register = result.wait_register
            logger.debug("Waiting for input into V%X", result.wait_register)
        return result.display_changed, result.audio_cue

    def _poll_input(self) -> None:
        if self.pending_register is None:
            raise MachineError(
                "Awaiting input with no target register", pc=self.state.pc
            )
        line = self.keypad.first_pressed()
        if line is None:
            return
        self.state.registers[self.pending_register] = line
        logger.debug("Input line %X latched into V%X", line, self.pending_register)
        self.pending_register = None
        self.status = SchedulerState.RUNNING

    def _halt(self, exc: MachineError) -> None:
        self.fault = exc
        self.status = SchedulerState.HALTED
        self.pending_register = None
        logger.error("Halted: %s", exc)

    def _throttle(self, tick_start: float) -> None:
        budget = 1.0 / self.ips
        elapsed = self.clock() - tick_start
        if elapsed < budget:
            self.sleep(budget - elapsed)

    def _result(
        self, *, frame_ready: bool, audio_cue: bool = False, timer_ticks: int = 0
    ) -> TickResult:
        return TickResult(
            frame_ready=frame_ready,
            running=self.running,
            awaiting_input=self.awaiting_input,
            audio_cue=audio_cue,
            sound_active=self.state.sound_timer > 0,
            timer_ticks=timer_ticks,
            pc=self.state.pc,
        )


__all__ = ["CycleScheduler", "SchedulerState", "TickResult"]
