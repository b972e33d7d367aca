"""Deterministic byte generator used by the random-number opcode."""

from __future__ import annotations

SEED: tuple[int, int, int, int] = (0, 0, 0, 1)


class XorShiftRng:
    """Four-lane 8-bit xorshift generator.

    Every instance starts from the same seed, so two sessions produce the same
    stream. Not suitable for anything security related.
    """

    def __init__(self) -> None:
        self._x, self._y, self._z, self._a = SEED

    def next(self) -> int:
        t = (self._x ^ (self._x << 4)) & 0xFF
        self._x = self._y
        self._y = self._z
        self._z = self._a
        self._a = (self._z ^ t ^ (self._z >> 1) ^ (t << 1)) & 0xFF
        return self._a

    def state(self) -> tuple[int, int, int, int]:
        return (self._x, self._y, self._z, self._a)
