"""CHIP-8 machine assembly and memory map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pychip8.bus import ADDRESS_SPACE, FontRom, Memory, MemorySystem
from pychip8.cpu import Chip8
from pychip8.engines import Engine, HeadlessEngine
from pychip8.io import Keypad
from pychip8.loader import RomImage, load_rom_bytes
from pychip8.video.font import FONT_BASE, FONTSET


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 session."""

    load_store_quirk: bool = False
    rom_image: Optional[bytes] = None
    rom_name: str = ""
    engine: Optional[Engine] = None
    keypad: Optional[Keypad] = None


@dataclass
class Machine:
    """Aggregates the components of one emulation session."""

    memory: MemorySystem
    cpu: Chip8
    ram: Memory
    font_rom: FontRom
    keypad: Keypad
    engine: Engine
    rom: Optional[RomImage] = None


class MainRam(Memory):
    """General RAM from the end of the font table to the top of memory."""


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    config = config or MachineConfig()

    memory = MemorySystem()
    memory.allocate_space(ADDRESS_SPACE)

    font_rom = FontRom(FONT_BASE, FONTSET)
    memory.register_memory(font_rom)

    ram_start = font_rom.get_end_address() + 1
    ram = MainRam(ram_start, ADDRESS_SPACE - ram_start)
    memory.register_memory(ram)

    rom = None
    if config.rom_image is not None:
        rom = load_rom_bytes(config.rom_image, memory, name=config.rom_name)

    keypad = config.keypad or Keypad()
    engine = config.engine if config.engine is not None else HeadlessEngine()
    cpu = Chip8(memory, keypad, engine, load_store_quirk=config.load_store_quirk)

    return Machine(
        memory=memory,
        cpu=cpu,
        ram=ram,
        font_rom=font_rom,
        keypad=keypad,
        engine=engine,
        rom=rom,
    )
