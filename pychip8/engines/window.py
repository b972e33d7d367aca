"""Engine that presents the display in a pygame window."""

from __future__ import annotations

from typing import Sequence

from pychip8.video import MONOCHROME, FrameBuffer, Renderer
from pychip8.video.palette import RGBColor

from .headless import HeadlessEngine
from .rng import XorShiftRng


class WindowEngine:
    """Blits the scaled frame buffer onto a pygame surface when it changes."""

    def __init__(
        self,
        screen,
        *,
        scale: int = 10,
        palette: Sequence[RGBColor] = MONOCHROME,
        framebuffer: FrameBuffer | None = None,
        rng: XorShiftRng | None = None,
    ) -> None:
        self._screen = screen
        self._scale = scale
        self._renderer = Renderer(palette)
        self._display = HeadlessEngine(framebuffer, rng)

    @property
    def framebuffer(self) -> FrameBuffer:
        return self._display.framebuffer

    def clear_screen(self) -> None:
        self._display.clear_screen()

    def draw_sprite(self, x: int, y: int, height: int, sprite: Sequence[int]) -> bool:
        return self._display.draw_sprite(x, y, height, sprite)

    def rand(self) -> int:
        return self._display.rand()

    def present(self, *, force: bool = False) -> bool:
        """Blit the frame to the screen surface; return whether anything was drawn."""

        if not (self._display.take_dirty() or force):
            return False
        frame = self._renderer.render(self._display.framebuffer, scale=self._scale)
        self._screen.blit(frame.to_surface(), (0, 0))
        return True
