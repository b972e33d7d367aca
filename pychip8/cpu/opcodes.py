"""Opcode metadata for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from .nibbles import Operands

_HEX_DIGITS = "0123456789ABCDEF"
_OPERAND_LETTERS = "XYN"


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single CHIP-8 opcode.

    ``pattern`` is written the way opcode tables spell it (``"8XY4"``): hex
    digits are fixed nibbles, ``X``/``Y``/``N`` mark operand nibbles.
    ``syntax`` is the pseudo-C rendering used by the disassembler.
    """

    pattern: str
    mnemonic: str
    handler: str
    syntax: str
    mask: int = field(init=False)
    value: int = field(init=False)

    def __post_init__(self) -> None:
        if len(self.pattern) != 4:
            raise ValueError(f"pattern must have four nibbles: {self.pattern!r}")
        mask = 0
        value = 0
        for char in self.pattern:
            mask <<= 4
            value <<= 4
            if char in _HEX_DIGITS:
                mask |= 0xF
                value |= _HEX_DIGITS.index(char)
            elif char not in _OPERAND_LETTERS:
                raise ValueError(f"invalid pattern character {char!r} in {self.pattern!r}")
        object.__setattr__(self, "mask", mask)
        object.__setattr__(self, "value", value)

    @property
    def leading_nibble(self) -> int:
        return (self.value >> 12) & 0xF

    @property
    def specificity(self) -> int:
        return sum(1 for shift in (12, 8, 4, 0) if (self.mask >> shift) & 0xF)

    def matches(self, word: int) -> bool:
        return (word & self.mask) == self.value

    def format(self, operands: Operands) -> str:
        return self.syntax.format(
            x=operands.x,
            y=operands.y,
            n=operands.n,
            nn=operands.nn,
            nnn=operands.nnn,
        )


class OpcodeTable:
    """Instruction lookup grouped by leading nibble."""

    def __init__(self) -> None:
        self._groups: Dict[int, List[Instruction]] = {nibble: [] for nibble in range(16)}
        self._patterns: Dict[str, Instruction] = {}

    def register(self, instruction: Instruction) -> None:
        existing = self._patterns.get(instruction.pattern)
        if existing is not None:
            raise ValueError(
                f"pattern {instruction.pattern} already registered as {existing.mnemonic}")
        self._patterns[instruction.pattern] = instruction
        group = self._groups[instruction.leading_nibble]
        group.append(instruction)
        group.sort(key=lambda entry: entry.specificity, reverse=True)

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def lookup(self, word: int) -> Instruction | None:
        for instruction in self._groups[(word >> 12) & 0xF]:
            if instruction.matches(word):
                return instruction
        return None

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self):
        return iter(self._patterns.values())


def build_instruction_table(instructions: Iterable[Instruction]) -> OpcodeTable:
    """Build a lookup table from ``instructions``."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction("00E0", "CLS", "op_cls", "disp_clear"),
    Instruction("00EE", "RET", "op_ret", "return;"),
    Instruction("0NNN", "SYS", "op_sys", "call {nnn:03X}"),
    Instruction("1NNN", "JP", "op_jp", "goto {nnn:03X};"),
    Instruction("2NNN", "CALL", "op_call", "call {nnn:03X};"),
    Instruction("3XNN", "SE", "op_se_imm", "if(V{x:X}=={nn:02X}) skip_next;"),
    Instruction("4XNN", "SNE", "op_sne_imm", "if(V{x:X}!={nn:02X}) skip_next;"),
    Instruction("5XY0", "SE", "op_se_reg", "if(V{x:X}==V{y:X}) skip_next;"),
    Instruction("6XNN", "LD", "op_ld_imm", "V{x:X}={nn:02X}"),
    Instruction("7XNN", "ADD", "op_add_imm", "V{x:X}+={nn:02X}"),
    Instruction("8XY0", "LD", "op_ld_reg", "V{x:X}=V{y:X}"),
    Instruction("8XY1", "OR", "op_or", "V{x:X}=V{x:X}|V{y:X}"),
    Instruction("8XY2", "AND", "op_and", "V{x:X}=V{x:X}&V{y:X}"),
    Instruction("8XY3", "XOR", "op_xor", "V{x:X}=V{x:X}^V{y:X}"),
    Instruction("8XY4", "ADD", "op_add_reg", "V{x:X}+=V{y:X}"),
    Instruction("8XY5", "SUB", "op_sub", "V{x:X}-=V{y:X}"),
    Instruction("8XY6", "SHR", "op_shr", "V{x:X}>>=1"),
    Instruction("8XY7", "SUBN", "op_subn", "V{x:X}=V{y:X}-V{x:X}"),
    Instruction("8XYE", "SHL", "op_shl", "V{x:X}<<=1"),
    Instruction("9XY0", "SNE", "op_sne_reg", "if(V{x:X}!=V{y:X}) skip_next;"),
    Instruction("ANNN", "LD", "op_ld_i", "I=0x{nnn:03X}"),
    Instruction("BNNN", "JP", "op_jp_v0", "PC=V0+0x{nnn:03X}"),
    Instruction("CXNN", "RND", "op_rnd", "V{x:X}=rand() & 0x{nn:02X}"),
    Instruction("DXYN", "DRW", "op_drw", "draw(V{x:X}, V{y:X}, 0x{n:X})"),
    Instruction("EX9E", "SKP", "op_skp", "if(key()==V{x:X})"),
    Instruction("EXA1", "SKNP", "op_sknp", "if(key()!=V{x:X})"),
    Instruction("FX07", "LD", "op_ld_get_delay", "V{x:X}=get_delay()"),
    Instruction("FX0A", "LD", "op_wait_key", "V{x:X}=get_key()"),
    Instruction("FX15", "LD", "op_ld_set_delay", "delay_timer(V{x:X})"),
    Instruction("FX18", "LD", "op_ld_set_sound", "sound_timer(V{x:X})"),
    Instruction("FX1E", "ADD", "op_add_i", "I += V{x:X}"),
    Instruction("FX29", "LD", "op_ld_font", "I = sprite_addr(V{x:X})"),
    Instruction("FX33", "LD", "op_ld_bcd", "set_BCD(V{x:X})"),
    Instruction("FX55", "LD", "op_reg_dump", "reg_dump(V{x:X}, &I)"),
    Instruction("FX65", "LD", "op_reg_load", "reg_load(V{x:X}, &I)"),
)


OPCODE_TABLE: OpcodeTable = build_instruction_table(DEFAULT_INSTRUCTIONS)
