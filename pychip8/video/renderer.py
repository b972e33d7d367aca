"""Convert the frame buffer into RGB frames or terminal text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .framebuffer import FrameBuffer
from .palette import MONOCHROME, RGBColor, validate_palette

LIT_CHAR = "#"
UNLIT_CHAR = " "


@dataclass
class RenderResult:
    """Packed RGB frame produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Scale a :class:`FrameBuffer` into an RGB byte frame."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._background, self._foreground = validate_palette(palette)

    def render(self, framebuffer: FrameBuffer, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")

        background = bytes(self._background)
        foreground = bytes(self._foreground)
        width = framebuffer.width * scale
        height = framebuffer.height * scale
        out = bytearray()
        for row in framebuffer.rows():
            line = b"".join((foreground if lit else background) * scale for lit in row)
            out += line * scale
        return RenderResult(width, height, bytes(out))


def render_text(framebuffer: FrameBuffer) -> str:
    """Render the buffer as ``#``/space lines for terminal output."""

    return "\n".join(
        "".join(LIT_CHAR if lit else UNLIT_CHAR for lit in row) for row in framebuffer.rows()
    )
