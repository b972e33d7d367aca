"""CHIP-8 interpreter package.

The interpreter core lives in ``cpu``; ``bus`` holds the address map,
``video`` the 64x32 display model, ``engines`` the display/randomness
implementations the core calls out to, and ``system`` ties them into a
runnable machine.
"""

from __future__ import annotations

from . import bus, cpu, engines, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "io",
    "engines",
    "loader",
    "system",
    "ui",
    "utils",
]
