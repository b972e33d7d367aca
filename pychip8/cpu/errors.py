"""Exceptions raised by the CHIP-8 interpreter core."""

from __future__ import annotations


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised when an instruction word matches no known opcode."""

    def __init__(self, pc: int, opcode: int) -> None:
        self.pc = pc
        self.opcode = opcode
        super().__init__(f"illegal instruction {opcode:04X} at {pc:#05x}")


class UnimplementedOpcodeError(CPUError):
    """Raised for a known opcode that this interpreter does not execute."""

    def __init__(self, pc: int, opcode: int) -> None:
        self.pc = pc
        self.opcode = opcode
        super().__init__(f"instruction {opcode:04X} at {pc:#05x} is not implemented")


class StackError(CPUError):
    """Raised on call-stack overflow or underflow."""
