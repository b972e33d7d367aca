"""Engine that redraws the display as text on a terminal stream."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

from pychip8.video import FrameBuffer, render_text

from .headless import HeadlessEngine
from .rng import XorShiftRng

CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[H"


class TerminalEngine:
    """Writes the whole 64x32 buffer as ``#``/space rows after each change."""

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        framebuffer: FrameBuffer | None = None,
        rng: XorShiftRng | None = None,
    ) -> None:
        self._stream = stream or sys.stdout
        self._display = HeadlessEngine(framebuffer, rng)

    @property
    def framebuffer(self) -> FrameBuffer:
        return self._display.framebuffer

    def start(self) -> None:
        self._stream.write(CLEAR_SCREEN + CURSOR_HOME)
        self._stream.flush()

    def clear_screen(self) -> None:
        self._display.clear_screen()
        self._stream.write(CLEAR_SCREEN)
        self._redraw()

    def draw_sprite(self, x: int, y: int, height: int, sprite: Sequence[int]) -> bool:
        collided = self._display.draw_sprite(x, y, height, sprite)
        self._redraw()
        return collided

    def rand(self) -> int:
        return self._display.rand()

    def _redraw(self) -> None:
        self._stream.write(CURSOR_HOME)
        self._stream.write(render_text(self._display.framebuffer))
        self._stream.write("\n")
        self._stream.flush()
