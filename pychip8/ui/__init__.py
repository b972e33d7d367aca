"""Front-ends for the CHIP-8 interpreter."""

from __future__ import annotations

from .app import AppConfig, BaseApp, Chip8App, format_cpu_state
from .terminal import TerminalApp

__all__ = [
    "AppConfig",
    "BaseApp",
    "Chip8App",
    "TerminalApp",
    "format_cpu_state",
]
