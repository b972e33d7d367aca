"""Engine that keeps the display in memory only."""

from __future__ import annotations

from typing import Sequence

from pychip8.video import FrameBuffer

from .rng import XorShiftRng


class HeadlessEngine:
    """In-memory engine used by tests and as the base of the visible engines."""

    def __init__(self, framebuffer: FrameBuffer | None = None, rng: XorShiftRng | None = None) -> None:
        self.framebuffer = framebuffer or FrameBuffer()
        self.rng = rng or XorShiftRng()
        self.draw_count = 0
        self.clear_count = 0
        self.dirty = False

    def clear_screen(self) -> None:
        self.framebuffer.clear()
        self.clear_count += 1
        self.dirty = True

    def draw_sprite(self, x: int, y: int, height: int, sprite: Sequence[int]) -> bool:
        collided = self.framebuffer.draw_sprite(x, y, height, sprite)
        self.draw_count += 1
        self.dirty = True
        return collided

    def rand(self) -> int:
        return self.rng.next()

    def take_dirty(self) -> bool:
        """Return whether the buffer changed since the last call and reset the flag."""

        dirty = self.dirty
        self.dirty = False
        return dirty
