"""Raw ROM image loading.

A CHIP-8 program is a headerless byte image copied verbatim to ``0x200``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MemorySystem
from pychip8.utils import debug_enabled, debug_log

LOAD_ADDRESS = 0x200
MAX_ROM_SIZE = 0x1000 - LOAD_ADDRESS


class RomFormatError(RuntimeError):
    """Raised when a ROM image cannot be placed into memory."""


@dataclass
class RomImage:
    """A program image alongside where it was loaded."""

    data: bytes
    name: str = ""
    start: int = LOAD_ADDRESS

    @property
    def end(self) -> int:
        return self.start + len(self.data) - 1


def validate_rom(data: bytes) -> None:
    if not data:
        raise RomFormatError("ROM image is empty")
    if len(data) > MAX_ROM_SIZE:
        raise RomFormatError(f"ROM image is {len(data)} bytes; at most {MAX_ROM_SIZE} bytes fit above {LOAD_ADDRESS:#05x}")


def load_rom_bytes(data: bytes, memory: MemorySystem, *, name: str = "") -> RomImage:
    validate_rom(data)
    memory.store_block(LOAD_ADDRESS, data)
    image = RomImage(bytes(data), name)
    if debug_enabled("loader"):
        debug_log("loader", "loaded %s %d bytes at %04x-%04x", name or "<rom>", len(data), image.start, image.end)
    return image


def load_rom(stream: BinaryIO, memory: MemorySystem, *, name: str = "") -> RomImage:
    """Load a ROM image from ``stream`` into ``memory``."""

    return load_rom_bytes(stream.read(), memory, name=name)


def load_rom_from_path(path: Path, memory: MemorySystem) -> RomImage:
    """Load a ROM image from the filesystem."""

    with path.open("rb") as handle:
        return load_rom(handle, memory, name=path.name)
