"""Split instruction words into nibbles and merge nibbles into immediates."""

from __future__ import annotations

from typing import NamedTuple


class Operands(NamedTuple):
    """Operand fields of a decoded instruction word."""

    nibbles: tuple[int, int, int, int]
    x: int
    y: int
    n: int
    nn: int
    nnn: int


def word_to_nibbles(high: int, low: int) -> tuple[int, int, int, int]:
    """Return the four nibbles of ``high``/``low``, most significant first."""

    return (
        (high & 0xF0) >> 4,
        high & 0x0F,
        (low & 0xF0) >> 4,
        low & 0x0F,
    )


def merge_nibbles(*nibbles: int) -> int:
    """Merge two or three nibbles big-endian into an 8 or 12 bit value."""

    if len(nibbles) not in (2, 3):
        raise ValueError(f"expected 2 or 3 nibbles, got {len(nibbles)}")
    value = 0
    for nibble in nibbles:
        value = (value << 4) | (nibble & 0x0F)
    return value


def decode_word(word: int) -> Operands:
    nibbles = word_to_nibbles((word >> 8) & 0xFF, word & 0xFF)
    _, x, y, n = nibbles
    return Operands(
        nibbles=nibbles,
        x=x,
        y=y,
        n=n,
        nn=merge_nibbles(y, n),
        nnn=merge_nibbles(x, y, n),
    )
