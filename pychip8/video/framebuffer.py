"""Monochrome 64x32 pixel buffer with XOR sprite blitting."""

from __future__ import annotations

from typing import Iterator, Sequence

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8


class FrameBuffer:
    """Row-major boolean pixel grid shared by every engine.

    Sprites are XORed in and wrap around both edges. ``draw_sprite`` reports a
    collision when at least one lit pixel is switched off.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("frame buffer dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))

    def draw_sprite(self, x: int, y: int, height: int, sprite: Sequence[int]) -> bool:
        if height < 0:
            raise ValueError("sprite height must not be negative")
        if len(sprite) < height:
            raise ValueError(f"sprite has {len(sprite)} rows, expected {height}")

        collided = False
        for row in range(height):
            line = sprite[row] & 0xFF
            if not line:
                continue
            py = (y + row) % self.height
            base = py * self.width
            for column in range(SPRITE_WIDTH):
                if not line & (0x80 >> column):
                    continue
                index = base + (x + column) % self.width
                if self._pixels[index]:
                    collided = True
                self._pixels[index] ^= 1
        return collided

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        return bool(self._pixels[y * self.width + x])

    def rows(self) -> Iterator[tuple[bool, ...]]:
        for y in range(self.height):
            start = y * self.width
            yield tuple(bool(value) for value in self._pixels[start : start + self.width])

    def snapshot(self) -> bytes:
        return bytes(self._pixels)

    def lit_count(self) -> int:
        return sum(self._pixels)
