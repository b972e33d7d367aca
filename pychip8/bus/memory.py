"""Memory system for the CHIP-8 interpreter.

The CHIP-8 sees a flat 4 KiB address space. ``MemorySystem`` keeps the
dispatch-per-address layout so that the read-only font block and the general
RAM can be mapped side by side, and every access outside the mapped space is
reported as a :class:`MemoryAccessError` instead of wrapping silently.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Type, TypeVar

ADDRESS_SPACE = 0x1000


class MemoryAccessError(Exception):
    """Raised when memory is misconfigured or accessed outside its bounds."""


class Addressable:
    """Interface for objects mapped into the CHIP-8 address space."""

    def get_start_address(self) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def get_end_address(self) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def load8(self, address: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def store8(self, address: int, value: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def load16(self, address: int) -> int:
        high = self.load8(address)
        low = self.load8(address + 1)
        return ((high & 0xFF) << 8) | (low & 0xFF)

    def store16(self, address: int, value: int) -> None:
        self.store8(address, (value >> 8) & 0xFF)
        self.store8(address + 1, value & 0xFF)


@dataclass
class Memory(Addressable):
    """Simple byte-addressable memory region."""

    start: int
    length: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.length <= 0:
            raise MemoryAccessError("memory region must have a positive length and non-negative start")
        self._data = bytearray(self.length)

    def get_start_address(self) -> int:
        return self.start

    def get_end_address(self) -> int:
        return self.start + self.length - 1

    def _offset(self, address: int) -> int:
        offset = address - self.start
        if not 0 <= offset < self.length:
            raise MemoryAccessError(
                f"address {address:#05x} outside region {self.start:#05x}-{self.get_end_address():#05x}"
            )
        return offset

    def load8(self, address: int) -> int:
        return self._data[self._offset(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[self._offset(address)] = value & 0xFF

    def load_image(self, address: int, data: bytes) -> None:
        offset = self._offset(address)
        if offset + len(data) > self.length:
            raise MemoryAccessError(
                f"image of {len(data)} bytes at {address:#05x} overruns region ending {self.get_end_address():#05x}"
            )
        self._data[offset : offset + len(data)] = data

    def snapshot(self) -> bytes:
        return bytes(self._data)


class FontRom(Memory):
    """Read-only block holding the built-in hex digit glyphs."""

    def __init__(self, start: int, glyphs: bytes) -> None:
        super().__init__(start, len(glyphs))
        self._data[:] = glyphs

    def store8(self, address: int, value: int) -> None:
        raise MemoryAccessError(f"write to read-only font area at {address:#05x}")


T_Addressable = TypeVar("T_Addressable", bound=Addressable)


class MemorySystem:
    """Address map that dispatches reads/writes to the registered blocks."""

    def __init__(self) -> None:
        self._space: list[Addressable | None] | None = None
        self._registry: Dict[Type[Addressable], Addressable] = {}

    def allocate_space(self, capacity: int = ADDRESS_SPACE) -> None:
        if capacity <= 0 or capacity > 0x10000:
            raise MemoryAccessError(f"capacity {capacity} out of range (1-65536)")
        self._space = [None] * capacity

    @property
    def capacity(self) -> int:
        return len(self._ensure_space())

    def register_memory(self, memory: Addressable) -> None:
        space = self._ensure_space()
        start = memory.get_start_address()
        end = memory.get_end_address()
        if end < start:
            raise MemoryAccessError("memory end precedes start")
        if start < 0 or end >= len(space):
            raise MemoryAccessError(f"memory region {start:#05x}-{end:#05x} exceeds allocated space")
        for address in range(start, end + 1):
            space[address] = memory
        self._registry[type(memory)] = memory

    def get_memory(self, cls: Type[T_Addressable]) -> T_Addressable | None:
        memory = self._registry.get(cls)
        if memory is None:
            return None
        return memory  # type: ignore[return-value]

    def load8(self, address: int) -> int:
        return self._device_at(address).load8(address) & 0xFF

    def store8(self, address: int, value: int) -> None:
        self._device_at(address).store8(address, value)

    def load16(self, address: int) -> int:
        high = self.load8(address)
        low = self.load8(address + 1)
        return ((high & 0xFF) << 8) | (low & 0xFF)

    def store16(self, address: int, value: int) -> None:
        self.store8(address, (value >> 8) & 0xFF)
        self.store8(address + 1, value & 0xFF)

    def load_block(self, start: int, length: int) -> bytes:
        self._check_range(start, length)
        return bytes(self.load8(start + offset) for offset in range(length))

    def store_block(self, start: int, data: bytes) -> None:
        self._check_range(start, len(data))
        for offset in range(len(data)):
            device = self._device_at(start + offset)
            if isinstance(device, FontRom):
                raise MemoryAccessError(f"write to read-only font area at {start + offset:#05x}")
        for offset, value in enumerate(data):
            self.store8(start + offset, value)

    def _check_range(self, start: int, length: int) -> None:
        space = self._ensure_space()
        if length < 0:
            raise MemoryAccessError("negative block length")
        if start < 0 or start + length > len(space):
            raise MemoryAccessError(
                f"block {start:#05x}+{length} outside address space 0x000-{len(space) - 1:#05x}"
            )

    def _device_at(self, address: int) -> Addressable:
        space = self._ensure_space()
        if not 0 <= address < len(space):
            raise MemoryAccessError(f"address {address:#06x} outside address space 0x000-{len(space) - 1:#05x}")
        device = space[address]
        if device is None:
            raise MemoryAccessError(f"address {address:#05x} is not mapped")
        return device

    def _ensure_space(self) -> list[Addressable | None]:
        if self._space is None:
            raise MemoryAccessError("memory space not allocated")
        return self._space
