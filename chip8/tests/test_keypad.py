from __future__ import annotations

import pytest

from chip8.keypad import HOST_KEYS, Keypad, line_for_key


def test_press_release_and_first_pressed() -> None:
    keypad = Keypad()
    assert keypad.first_pressed() is None
    keypad.press(0xC)
    keypad.press(0x3)
    assert keypad.is_pressed(0xC)
    assert keypad.first_pressed() == 0x3
    keypad.release(0x3)
    assert keypad.first_pressed() == 0xC
    keypad.release_all()
    assert keypad.pressed_lines() == ()


def test_set_pressed_replaces_state() -> None:
    keypad = Keypad()
    keypad.press(1)
    keypad.set_pressed([4, 9])
    assert keypad.pressed_lines() == (4, 9)


def test_out_of_range_lines_are_rejected() -> None:
    keypad = Keypad()
    with pytest.raises(ValueError):
        keypad.press(16)
    with pytest.raises(ValueError):
        keypad.is_pressed(-1)


def test_host_layout_covers_every_line_once() -> None:
    assert sorted(HOST_KEYS.values()) == list(range(16))
    assert line_for_key("x") == 0x0
    assert line_for_key("V") == 0xF
    with pytest.raises(KeyError):
        line_for_key("p")
