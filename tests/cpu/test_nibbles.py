"""Tests for instruction word nibble splitting and merging."""

from __future__ import annotations

import pytest

from pychip8.cpu import decode_word, merge_nibbles, word_to_nibbles


def test_word_to_nibbles_is_big_endian() -> None:
    assert word_to_nibbles(0xD1, 0x2F) == (0xD, 0x1, 0x2, 0xF)
    assert word_to_nibbles(0x00, 0xE0) == (0x0, 0x0, 0xE, 0x0)


def test_merge_two_and_three_nibbles() -> None:
    assert merge_nibbles(0xA, 0x5) == 0xA5
    assert merge_nibbles(0x1, 0x2, 0x3) == 0x123
    assert merge_nibbles(0xF, 0xF, 0xF) == 0xFFF


@pytest.mark.parametrize("count", [0, 1, 4])
def test_merge_rejects_other_counts(count: int) -> None:
    with pytest.raises(ValueError):
        merge_nibbles(*([0x1] * count))


def test_decode_word_operand_fields() -> None:
    operands = decode_word(0xD12F)

    assert operands.nibbles == (0xD, 0x1, 0x2, 0xF)
    assert operands.x == 0x1
    assert operands.y == 0x2
    assert operands.n == 0xF
    assert operands.nn == 0x2F
    assert operands.nnn == 0x12F
