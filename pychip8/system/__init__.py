"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .driver import DEFAULT_CYCLES_PER_SECOND, DEFAULT_TIMER_HZ, CycleDriver
from .machine import Machine, MachineConfig, MainRam, create_machine

__all__ = [
    "CycleDriver",
    "DEFAULT_CYCLES_PER_SECOND",
    "DEFAULT_TIMER_HZ",
    "MachineConfig",
    "Machine",
    "MainRam",
    "create_machine",
]
