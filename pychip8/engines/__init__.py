"""Display/randomness engines consumed by the interpreter core."""

from __future__ import annotations

from .base import Engine
from .headless import HeadlessEngine
from .rng import SEED, XorShiftRng
from .terminal import TerminalEngine
from .window import WindowEngine

__all__ = [
    "Engine",
    "HeadlessEngine",
    "TerminalEngine",
    "WindowEngine",
    "XorShiftRng",
    "SEED",
]
