"""Sixteen-line input model queried by the executor."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from .constants import KEY_COUNT

# Conventional 4x4 host layout. Each row lists (host key, input line).
#
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   q w e r
#   7 8 9 E        a s d f
#   A 0 B F        z x c v
KEY_LAYOUT: Tuple[Tuple[Tuple[str, int], ...], ...] = (
    (("1", 0x1), ("2", 0x2), ("3", 0x3), ("4", 0xC)),
    (("q", 0x4), ("w", 0x5), ("e", 0x6), ("r", 0xD)),
    (("a", 0x7), ("s", 0x8), ("d", 0x9), ("f", 0xE)),
    (("z", 0xA), ("x", 0x0), ("c", 0xB), ("v", 0xF)),
)

HOST_KEYS: Dict[str, int] = {key: line for row in KEY_LAYOUT for key, line in row}


def line_for_key(key: str) -> int:
    """Return the input line for a host key name (case-insensitive)."""
    try:
        return HOST_KEYS[key.lower()]
    except KeyError:
        raise KeyError(f"Key {key!r} is not mapped to an input line") from None


class Keypad:
    """Current assertion state of the 16 input lines.

    The host writes; the executor only reads through :meth:`is_pressed` and
    :meth:`first_pressed`.
    """

    def __init__(self) -> None:
        self._lines: List[bool] = [False] * KEY_COUNT

    def _check(self, line: int) -> None:
        if not 0 <= line < KEY_COUNT:
            raise ValueError(f"Input line out of range: {line}")

    def press(self, line: int) -> None:
        self._check(line)
        self._lines[line] = True

    def release(self, line: int) -> None:
        self._check(line)
        self._lines[line] = False

    def release_all(self) -> None:
        self._lines = [False] * KEY_COUNT

    def set_pressed(self, lines: Iterable[int]) -> None:
        """Replace the asserted set with ``lines``."""
        wanted = set(lines)
        for line in wanted:
            self._check(line)
        self._lines = [line in wanted for line in range(KEY_COUNT)]

    def is_pressed(self, line: int) -> bool:
        self._check(line)
        return self._lines[line]

    def first_pressed(self) -> Optional[int]:
        for line, asserted in enumerate(self._lines):
            if asserted:
                return line
        return None

    def pressed_lines(self) -> Tuple[int, ...]:
        return tuple(line for line, asserted in enumerate(self._lines) if asserted)


__all__ = ["Keypad", "KEY_LAYOUT", "HOST_KEYS", "line_for_key"]
