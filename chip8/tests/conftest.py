"""Shared pytest fixtures for CHIP-8 core tests."""

from __future__ import annotations

import pytest

from chip8 import Chip8Emulator, MachineConfig


class FakeClock:
    """Deterministic clock counted in whole microseconds.

    ``sleep`` advances the clock instead of blocking, so the scheduler's
    throughput cap drives simulated wall-clock time.
    """

    def __init__(self) -> None:
        self.micros = 0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.micros / 1_000_000

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.micros += round(seconds * 1_000_000)

    def advance(self, seconds: float) -> None:
        self.micros += round(seconds * 1_000_000)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_emulator(fake_clock: FakeClock):
    def _make(program: bytes = b"", **config) -> Chip8Emulator:
        emu = Chip8Emulator(
            MachineConfig(**config), clock=fake_clock, sleep=fake_clock.sleep
        )
        emu.load_program(program)
        return emu

    return _make
