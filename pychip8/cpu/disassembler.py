"""Pseudo-C listing of a ROM image, one line per instruction word."""

from __future__ import annotations

from typing import Iterator

from .nibbles import decode_word
from .opcodes import OPCODE_TABLE, OpcodeTable


def disassemble_lines(
    data: bytes,
    *,
    start: int = 0,
    table: OpcodeTable = OPCODE_TABLE,
) -> Iterator[str]:
    if len(data) % 2:
        raise ValueError(f"image has an odd length ({len(data)} bytes); trailing byte is not an instruction")

    for index, offset in enumerate(range(0, len(data), 2), start=1):
        word = (data[offset] << 8) | data[offset + 1]
        instruction = table.lookup(word)
        if instruction is None:
            text = f"UNKNOWN INSTRUCTION {word:04X}"
        else:
            text = instruction.format(decode_word(word))
        yield f"{index:02d}) {start + offset:04X}\t{text}"


def disassemble(data: bytes, *, start: int = 0) -> str:
    lines = list(disassemble_lines(data, start=start))
    return "\n".join(lines) + "\n" if lines else ""

