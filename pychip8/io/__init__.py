"""Input helpers for the CHIP-8 interpreter."""

from .keypad import KEY_COUNT, KEY_MAP_TEMPLATE, Keypad

__all__ = [
    "KEY_COUNT",
    "KEY_MAP_TEMPLATE",
    "Keypad",
]
