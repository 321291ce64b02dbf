"""Tests for the canonical state snapshot and diff utilities."""

from __future__ import annotations

from chip8.state_model import (
    FieldDiff,
    capture_state,
    diff_states,
    empty_state_diff,
)


def test_capture_state_contains_core_components(make_emulator) -> None:
    emu = make_emulator(b"\x60\x2a")
    state = capture_state(emu)

    assert state.cpu.registers["pc"] == 0x200
    assert state.cpu.status == "RUNNING"
    assert state.timers.delay == 0
    assert len(state.memory) == 0x1000
    assert state.pressed_lines == ()


def test_diff_states_detects_register_and_memory_change(make_emulator) -> None:
    emu = make_emulator(b"\x60\x2a\xa3\x00\xf0\x55")
    before = capture_state(emu)

    emu.run(max_ticks=3)
    after = capture_state(emu)

    diff = diff_states(before, after)
    assert not diff.is_empty()
    assert FieldDiff("registers.v0", 0, 0x2A) in diff.cpu
    assert FieldDiff("registers.i", 0, 0x300) in diff.cpu
    assert diff.memory_addresses == (0x300,)
    assert not diff.display_changed


def test_diff_states_detects_display_change(make_emulator) -> None:
    emu = make_emulator(b"\xd0\x15")
    before = capture_state(emu)
    emu.step()
    diff = diff_states(before, capture_state(emu))
    assert diff.display_changed


def test_empty_state_diff_reports_no_changes(make_emulator) -> None:
    assert empty_state_diff().is_empty()
    emu = make_emulator()
    assert diff_states(None, capture_state(emu)).is_empty()
    assert diff_states(capture_state(emu), capture_state(emu)).is_empty()
