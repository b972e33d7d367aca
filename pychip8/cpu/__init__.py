"""CPU package for the CHIP-8 interpreter."""

from .core import FLAG_REGISTER, PROGRAM_START, REGISTER_COUNT, Chip8, CPUState
from .disassembler import disassemble, disassemble_lines
from .errors import CPUError, IllegalOpcodeError, StackError, UnimplementedOpcodeError
from .nibbles import Operands, decode_word, merge_nibbles, word_to_nibbles
from .opcodes import OPCODE_TABLE, Instruction, OpcodeTable
from .stack import STACK_CAPACITY, CallStack
from . import opcodes

__all__ = [
    "Chip8",
    "CPUState",
    "CPUError",
    "IllegalOpcodeError",
    "UnimplementedOpcodeError",
    "StackError",
    "CallStack",
    "STACK_CAPACITY",
    "FLAG_REGISTER",
    "PROGRAM_START",
    "REGISTER_COUNT",
    "Instruction",
    "OpcodeTable",
    "OPCODE_TABLE",
    "Operands",
    "decode_word",
    "merge_nibbles",
    "word_to_nibbles",
    "disassemble",
    "disassemble_lines",
    "opcodes",
]
