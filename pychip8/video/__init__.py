"""Display model and rendering helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_BASE, FONTSET, GLYPH_BYTES, glyph_address
from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, FrameBuffer
from .palette import MONOCHROME, PHOSPHOR, validate_palette
from .renderer import RenderResult, Renderer, render_text

__all__ = [
    "FONT_BASE",
    "FONTSET",
    "GLYPH_BYTES",
    "glyph_address",
    "FrameBuffer",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "Renderer",
    "RenderResult",
    "render_text",
    "MONOCHROME",
    "PHOSPHOR",
    "validate_palette",
]
