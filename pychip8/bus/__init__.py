"""Bus-related helpers for the CHIP-8 interpreter."""

from .memory import (
    ADDRESS_SPACE,
    Addressable,
    FontRom,
    Memory,
    MemoryAccessError,
    MemorySystem,
)

__all__ = [
    "ADDRESS_SPACE",
    "Addressable",
    "FontRom",
    "Memory",
    "MemoryAccessError",
    "MemorySystem",
]
