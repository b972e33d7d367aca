"""CHIP-8 hex keypad state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16


# Host keys laid out like the COSMAC VIP pad:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
KEY_MAP_TEMPLATE: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


@dataclass
class Keypad:
    """Sixteen key flags set by the front-end and read by the interpreter."""

    _keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    _listeners: list[Callable[[int, bool], None]] = field(default_factory=list)

    def press(self, key: int) -> None:
        self._set(key, True)

    def release(self, key: int) -> None:
        self._set(key, False)

    def is_pressed(self, key: int) -> bool:
        return self._keys[self._check(key)]

    def press_name(self, key_name: str) -> bool:
        key = self._lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return False
        self.press(key)
        return True

    def release_name(self, key_name: str) -> bool:
        key = self._lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return False
        self.release(key)
        return True

    def reset(self) -> None:
        for key in range(KEY_COUNT):
            self._keys[key] = False

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    def add_listener(self, listener: Callable[[int, bool], None]) -> None:
        self._listeners.append(listener)

    def _set(self, key: int, pressed: bool) -> None:
        index = self._check(key)
        before = self._keys[index]
        self._keys[index] = pressed
        if debug_enabled("input"):
            debug_log("input", "key=%X pressed=%s", index, pressed)
        if before != pressed:
            self._notify_listeners(index, pressed)

    @staticmethod
    def _check(key: int) -> int:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"key index {key} out of range (0-15)")
        return key

    @staticmethod
    def _lookup(key_name: str) -> int | None:
        return KEY_MAP_TEMPLATE.get(key_name.lower())

    def _notify_listeners(self, key: int, pressed: bool) -> None:
        for listener in tuple(self._listeners):
            listener(key, pressed)
