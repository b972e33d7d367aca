"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .rom import (
    LOAD_ADDRESS,
    MAX_ROM_SIZE,
    RomFormatError,
    RomImage,
    load_rom,
    load_rom_bytes,
    load_rom_from_path,
    validate_rom,
)

__all__ = [
    "LOAD_ADDRESS",
    "MAX_ROM_SIZE",
    "RomFormatError",
    "RomImage",
    "load_rom",
    "load_rom_bytes",
    "load_rom_from_path",
    "validate_rom",
]
