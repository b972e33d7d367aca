"""Capability interface the interpreter core calls out to."""

from __future__ import annotations

from typing import Protocol, Sequence


class Engine(Protocol):
    """Display and randomness services used while executing instructions.

    Implementations must return before the instruction completes and must not
    call back into the interpreter.
    """

    def clear_screen(self) -> None:
        ...

    def draw_sprite(self, x: int, y: int, height: int, sprite: Sequence[int]) -> bool:
        """XOR ``height`` rows of ``sprite`` at (``x``, ``y``); return the collision flag."""
        ...

    def rand(self) -> int:
        ...
