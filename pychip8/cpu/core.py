"""CHIP-8 interpreter core: fetch, decode and execute."""

from __future__ import annotations

from dataclasses import dataclass, field

from pychip8.bus import MemoryAccessError, MemorySystem
from pychip8.engines.base import Engine
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video.font import glyph_address

from .errors import CPUError, IllegalOpcodeError, UnimplementedOpcodeError
from .nibbles import Operands, decode_word
from .opcodes import OPCODE_TABLE, Instruction, OpcodeTable
from .stack import CallStack

PROGRAM_START = 0x200
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file and timers."""

    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0x000
    pc: int = PROGRAM_START
    delay_timer: int = 0
    sound_timer: int = 0

    def clone(self) -> "CPUState":
        return CPUState(bytearray(self.v), self.i, self.pc, self.delay_timer, self.sound_timer)


class Chip8:
    """The interpreter.

    ``emulate_cycle`` runs exactly one instruction and ``decrement_timers``
    ticks both timers once; pacing the two is left to the caller. The
    ``load_store_quirk`` flag is fixed at construction and makes ``FX55`` and
    ``FX65`` advance ``I`` past the transferred block.
    """

    def __init__(
        self,
        memory: MemorySystem,
        keypad: Keypad,
        engine: Engine,
        *,
        load_store_quirk: bool = False,
        instruction_table: OpcodeTable = OPCODE_TABLE,
    ) -> None:
        self.memory = memory
        self.keypad = keypad
        self.engine = engine
        self.instruction_table = instruction_table
        self._load_store_quirk = load_store_quirk
        self.state = CPUState()
        self.stack = CallStack()
        self.cycle_count = 0
        self._current_pc = PROGRAM_START
        self._current_opcode = 0

    @property
    def load_store_quirk(self) -> bool:
        return self._load_store_quirk

    @property
    def sp(self) -> int:
        return self.stack.depth

    def reset(self) -> None:
        """Reset registers, timers and the stack; memory is left untouched."""

        self.state = CPUState()
        self.stack.clear()
        self.cycle_count = 0

    def decode(self, opcode: int) -> Instruction | None:
        return self.instruction_table.lookup(opcode)

    def emulate_cycle(self) -> Instruction:
        """Execute a single instruction and return its metadata."""

        pc = self.state.pc
        opcode = self.memory.load16(pc)
        instruction = self.decode(opcode)
        if instruction is None:
            raise IllegalOpcodeError(pc, opcode)
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%04x opcode=%04x %s", pc, opcode, instruction.mnemonic)

        handler = getattr(self, instruction.handler, None)
        if handler is None:
            raise CPUError(f"handler '{instruction.handler}' not implemented")

        self._current_pc = pc
        self._current_opcode = opcode
        self.state.pc = (pc + 2) & 0xFFFF
        try:
            handler(decode_word(opcode))
        except (CPUError, MemoryAccessError):
            self.state.pc = pc
            raise
        self.cycle_count += 1
        return instruction

    def decrement_timers(self) -> None:
        if self.state.delay_timer > 0:
            self.state.delay_timer -= 1
        if self.state.sound_timer > 0:
            self.state.sound_timer -= 1

    def read_register(self, index: int) -> int:
        if not 0 <= index < REGISTER_COUNT:
            raise CPUError(f"register V{index} out of range")
        return self.state.v[index]

    def write_register(self, index: int, value: int) -> None:
        if not 0 <= index < REGISTER_COUNT:
            raise CPUError(f"register V{index} out of range")
        self.state.v[index] = value & 0xFF

    # ------------------------------------------------------------------
    # Flow control

    def op_cls(self, _: Operands) -> None:
        self.engine.clear_screen()

    def op_ret(self, _: Operands) -> None:
        self.state.pc = self.stack.pop()

    def op_sys(self, op: Operands) -> None:
        """Machine code routines do not exist here; the call is ignored."""

        if debug_enabled("cpu"):
            debug_log("cpu", "ignored sys call %03x at %04x", op.nnn, self._current_pc)

    def op_jp(self, op: Operands) -> None:
        self.state.pc = op.nnn

    def op_call(self, op: Operands) -> None:
        # state.pc already points past the call
        self.stack.push(self.state.pc)
        self.state.pc = op.nnn

    def op_jp_v0(self, op: Operands) -> None:
        self.state.pc = (self.read_register(0) + op.nnn) & 0xFFFF

    def op_se_imm(self, op: Operands) -> None:
        if self.read_register(op.x) == op.nn:
            self._skip_next_instruction()

    def op_sne_imm(self, op: Operands) -> None:
        if self.read_register(op.x) != op.nn:
            self._skip_next_instruction()

    def op_se_reg(self, op: Operands) -> None:
        if self.read_register(op.x) == self.read_register(op.y):
            self._skip_next_instruction()

    def op_sne_reg(self, op: Operands) -> None:
        if self.read_register(op.x) != self.read_register(op.y):
            self._skip_next_instruction()

    def op_skp(self, op: Operands) -> None:
        if self.keypad.is_pressed(self.read_register(op.x) & 0x0F):
            self._skip_next_instruction()

    def op_sknp(self, op: Operands) -> None:
        if not self.keypad.is_pressed(self.read_register(op.x) & 0x0F):
            self._skip_next_instruction()

    # ------------------------------------------------------------------
    # Register arithmetic

    def op_ld_imm(self, op: Operands) -> None:
        self.write_register(op.x, op.nn)

    def op_add_imm(self, op: Operands) -> None:
        # no carry flag for the immediate form
        self.write_register(op.x, self.read_register(op.x) + op.nn)

    def op_ld_reg(self, op: Operands) -> None:
        self.write_register(op.x, self.read_register(op.y))

    def op_or(self, op: Operands) -> None:
        self.write_register(op.x, self.read_register(op.x) | self.read_register(op.y))

    def op_and(self, op: Operands) -> None:
        self.write_register(op.x, self.read_register(op.x) & self.read_register(op.y))

    def op_xor(self, op: Operands) -> None:
        self.write_register(op.x, self.read_register(op.x) ^ self.read_register(op.y))

    def op_add_reg(self, op: Operands) -> None:
        total = self.read_register(op.x) + self.read_register(op.y)
        self._set_with_flag(op.x, total, total > 0xFF)

    def op_sub(self, op: Operands) -> None:
        vx = self.read_register(op.x)
        vy = self.read_register(op.y)
        self._set_with_flag(op.x, vx - vy, vx >= vy)

    def op_subn(self, op: Operands) -> None:
        vx = self.read_register(op.x)
        vy = self.read_register(op.y)
        self._set_with_flag(op.x, vy - vx, vy >= vx)

    def op_shr(self, op: Operands) -> None:
        source = self.read_register(op.y)
        self._set_with_flag(op.x, source >> 1, source & 0x01)

    def op_shl(self, op: Operands) -> None:
        source = self.read_register(op.y)
        self._set_with_flag(op.x, source << 1, (source >> 7) & 0x01)

    def op_rnd(self, op: Operands) -> None:
        self.write_register(op.x, self.engine.rand() & 0xFF & op.nn)

    # ------------------------------------------------------------------
    # Index register and memory

    def op_ld_i(self, op: Operands) -> None:
        self.state.i = op.nnn

    def op_add_i(self, op: Operands) -> None:
        self.state.i = (self.state.i + self.read_register(op.x)) & 0xFFFF

    def op_ld_font(self, op: Operands) -> None:
        self.state.i = glyph_address(self.read_register(op.x))

    def op_ld_bcd(self, op: Operands) -> None:
        value = self.read_register(op.x)
        self.memory.store_block(self.state.i, bytes((value // 100, (value // 10) % 10, value % 10)))

    def op_reg_dump(self, op: Operands) -> None:
        count = op.x + 1
        self.memory.store_block(self.state.i, bytes(self.state.v[:count]))
        if self._load_store_quirk:
            self.state.i = (self.state.i + count) & 0xFFFF

    def op_reg_load(self, op: Operands) -> None:
        count = op.x + 1
        self.state.v[:count] = self.memory.load_block(self.state.i, count)
        if self._load_store_quirk:
            self.state.i = (self.state.i + count) & 0xFFFF

    def op_drw(self, op: Operands) -> None:
        sprite = self.memory.load_block(self.state.i, op.n)
        collided = self.engine.draw_sprite(
            self.read_register(op.x),
            self.read_register(op.y),
            op.n,
            sprite,
        )
        self.write_register(FLAG_REGISTER, 1 if collided else 0)

    # ------------------------------------------------------------------
    # Timers and input

    def op_ld_get_delay(self, op: Operands) -> None:
        self.write_register(op.x, self.state.delay_timer)

    def op_ld_set_delay(self, op: Operands) -> None:
        self.state.delay_timer = self.read_register(op.x)

    def op_ld_set_sound(self, op: Operands) -> None:
        self.state.sound_timer = self.read_register(op.x)

    def op_wait_key(self, _: Operands) -> None:
        raise UnimplementedOpcodeError(self._current_pc, self._current_opcode)

    # ------------------------------------------------------------------
    # Helpers

    def _skip_next_instruction(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF

    def _set_with_flag(self, index: int, result: int, flag) -> None:
        # VF is written last so it survives when it is also the destination
        self.write_register(index, result)
        self.write_register(FLAG_REGISTER, 1 if flag else 0)
