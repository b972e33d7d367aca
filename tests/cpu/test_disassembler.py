"""Tests for the pseudo-C disassembly listing."""

from __future__ import annotations

import pytest

from pychip8.cpu import disassemble, disassemble_lines


def test_listing_format() -> None:
    listing = disassemble(bytes([0x00, 0xE0, 0x60, 0x05, 0xD0, 0x15, 0x12, 0x00]))

    assert listing.splitlines() == [
        "01) 0000\tdisp_clear",
        "02) 0002\tV0=05",
        "03) 0004\tdraw(V0, V1, 0x5)",
        "04) 0006\tgoto 200;",
    ]
    assert listing.endswith("\n")


def test_listing_with_start_address() -> None:
    lines = list(disassemble_lines(bytes([0xA2, 0x2A, 0xF3, 0x65]), start=0x200))

    assert lines == ["01) 0200\tI=0x22A", "02) 0202\treg_load(V3, &I)"]


def test_unknown_words_are_listed() -> None:
    lines = list(disassemble_lines(bytes([0x51, 0x21])))

    assert lines == ["01) 0000\tUNKNOWN INSTRUCTION 5121"]


def test_odd_length_is_rejected() -> None:
    with pytest.raises(ValueError):
        disassemble(bytes([0x00, 0xE0, 0x12]))


def test_empty_image() -> None:
    assert disassemble(b"") == ""
