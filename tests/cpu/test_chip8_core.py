"""Tests for the CHIP-8 interpreter core."""

from __future__ import annotations

import pytest

from pychip8.bus import MemoryAccessError
from pychip8.cpu import (
    Chip8,
    CPUError,
    IllegalOpcodeError,
    StackError,
    UnimplementedOpcodeError,
)
from pychip8.engines import HeadlessEngine
from pychip8.system import MachineConfig, create_machine


def words(*opcodes: int) -> bytes:
    return b"".join(opcode.to_bytes(2, "big") for opcode in opcodes)


def make_cpu(*opcodes: int, load_store_quirk: bool = False) -> tuple[Chip8, HeadlessEngine]:
    engine = HeadlessEngine()
    machine = create_machine(
        MachineConfig(
            load_store_quirk=load_store_quirk,
            rom_image=words(*opcodes) if opcodes else None,
            engine=engine,
        )
    )
    return machine.cpu, engine


def test_initial_state() -> None:
    cpu, _ = make_cpu()

    assert cpu.state.pc == 0x200
    assert cpu.state.i == 0
    assert cpu.sp == 0
    assert bytes(cpu.state.v) == bytes(16)
    assert cpu.load_store_quirk is False


def test_load_then_add_immediate() -> None:
    cpu, _ = make_cpu(0x6005, 0x7003)

    cpu.emulate_cycle()
    cpu.emulate_cycle()

    assert cpu.state.v[0] == 8
    assert cpu.state.pc == 0x204
    assert cpu.cycle_count == 2


def test_add_immediate_wraps_without_flag() -> None:
    cpu, _ = make_cpu(0x7001)
    cpu.state.v[0] = 0xFF
    cpu.state.v[0xF] = 0x55

    cpu.emulate_cycle()

    assert cpu.state.v[0] == 0x00
    assert cpu.state.v[0xF] == 0x55


def test_call_and_return() -> None:
    cpu, _ = make_cpu(0x2300)
    cpu.memory.store16(0x300, 0x00EE)

    cpu.emulate_cycle()
    assert cpu.state.pc == 0x300
    assert cpu.stack.snapshot() == (0x202,)

    cpu.emulate_cycle()
    assert cpu.state.pc == 0x202
    assert cpu.sp == 0


def test_jump_absolute() -> None:
    cpu, _ = make_cpu(0x12A0)

    cpu.emulate_cycle()

    assert cpu.state.pc == 0x2A0


def test_jump_with_v0_offset() -> None:
    cpu, _ = make_cpu(0xB300)
    cpu.state.v[0] = 0x04

    cpu.emulate_cycle()

    assert cpu.state.pc == 0x304


def test_sys_call_is_ignored() -> None:
    cpu, _ = make_cpu(0x0123)

    cpu.emulate_cycle()

    assert cpu.state.pc == 0x202
    assert cpu.sp == 0


@pytest.mark.parametrize(
    ("opcode", "vx", "vy", "expected_pc"),
    [
        (0x3042, 0x42, 0x00, 0x204),
        (0x3042, 0x41, 0x00, 0x202),
        (0x4042, 0x41, 0x00, 0x204),
        (0x4042, 0x42, 0x00, 0x202),
        (0x5010, 0x07, 0x07, 0x204),
        (0x5010, 0x07, 0x08, 0x202),
        (0x9010, 0x07, 0x08, 0x204),
        (0x9010, 0x07, 0x07, 0x202),
    ],
)
def test_conditional_skips(opcode: int, vx: int, vy: int, expected_pc: int) -> None:
    cpu, _ = make_cpu(opcode)
    cpu.state.v[0] = vx
    cpu.state.v[1] = vy

    cpu.emulate_cycle()

    assert cpu.state.pc == expected_pc


@pytest.mark.parametrize(
    ("opcode", "expected"),
    [
        (0x8010, 0b1010_0000),
        (0x8011, 0b1110_1100),
        (0x8012, 0b0010_0000),
        (0x8013, 0b1100_1100),
    ],
)
def test_register_logic(opcode: int, expected: int) -> None:
    cpu, _ = make_cpu(opcode)
    cpu.state.v[0] = 0b0110_1100
    cpu.state.v[1] = 0b1010_0000

    cpu.emulate_cycle()

    assert cpu.state.v[0] == expected
    assert cpu.state.v[1] == 0b1010_0000


def test_shift_right_uses_vy_and_sets_flag_from_low_bit() -> None:
    cpu, _ = make_cpu(0x8016)
    cpu.state.v[0] = 0xFF
    cpu.state.v[1] = 0b1000_0001

    cpu.emulate_cycle()

    assert cpu.state.v[0] == 0b0100_0000
    assert cpu.state.v[0xF] == 1


def test_shift_left_uses_vy_and_sets_flag_from_high_bit() -> None:
    cpu, _ = make_cpu(0x801E, 0x801E)
    cpu.state.v[1] = 0b1000_0001

    cpu.emulate_cycle()

    assert cpu.state.v[0] == 0b0000_0010
    assert cpu.state.v[0xF] == 1

    cpu.state.v[1] = 0b0100_0000
    cpu.emulate_cycle()

    assert cpu.state.v[0] == 0b1000_0000
    assert cpu.state.v[0xF] == 0


def test_reverse_subtract() -> None:
    cpu, _ = make_cpu(0x8017, 0x8017)
    cpu.state.v[0] = 0x10
    cpu.state.v[1] = 0x30

    cpu.emulate_cycle()

    assert cpu.state.v[0] == 0x20
    assert cpu.state.v[0xF] == 1

    cpu.state.v[0] = 0x31
    cpu.emulate_cycle()

    assert cpu.state.v[0] == 0xFF
    assert cpu.state.v[0xF] == 0


def test_flag_wins_when_vf_is_destination() -> None:
    cpu, _ = make_cpu(0x8F14)
    cpu.state.v[0xF] = 0xFF
    cpu.state.v[1] = 0x01

    cpu.emulate_cycle()

    assert cpu.state.v[0xF] == 1


def test_index_register_operations() -> None:
    cpu, _ = make_cpu(0xA123, 0xF01E)
    cpu.state.v[0] = 0x10

    cpu.emulate_cycle()
    assert cpu.state.i == 0x123

    cpu.emulate_cycle()
    assert cpu.state.i == 0x133
    assert cpu.state.v[0xF] == 0


def test_add_to_index_wraps_at_16_bits() -> None:
    cpu, _ = make_cpu(0xF01E)
    cpu.state.i = 0xFFFF
    cpu.state.v[0] = 0x02

    cpu.emulate_cycle()

    assert cpu.state.i == 0x0001


@pytest.mark.parametrize(("value", "address"), [(0x0, 0), (0xA, 50), (0x1B, 55), (0xFF, 75)])
def test_font_address_uses_low_nibble(value: int, address: int) -> None:
    cpu, _ = make_cpu(0xF029)
    cpu.state.v[0] = value

    cpu.emulate_cycle()

    assert cpu.state.i == address


def test_bcd() -> None:
    cpu, _ = make_cpu(0xF033)
    cpu.state.v[0] = 156
    cpu.state.i = 0x300

    cpu.emulate_cycle()

    assert cpu.memory.load_block(0x300, 3) == bytes([1, 5, 6])
    assert cpu.state.i == 0x300


@pytest.mark.parametrize(("quirk", "expected_i"), [(False, 0x300), (True, 0x304)])
def test_register_dump(quirk: bool, expected_i: int) -> None:
    cpu, _ = make_cpu(0xF355, load_store_quirk=quirk)
    cpu.state.v[0:5] = bytes([1, 2, 3, 4, 5])
    cpu.state.i = 0x300

    cpu.emulate_cycle()

    assert cpu.memory.load_block(0x300, 5) == bytes([1, 2, 3, 4, 0])
    assert cpu.state.i == expected_i


@pytest.mark.parametrize(("quirk", "expected_i"), [(False, 0x300), (True, 0x303)])
def test_register_load(quirk: bool, expected_i: int) -> None:
    cpu, _ = make_cpu(0xF265, load_store_quirk=quirk)
    cpu.memory.store_block(0x300, bytes([9, 8, 7, 6]))
    cpu.state.i = 0x300

    cpu.emulate_cycle()

    assert bytes(cpu.state.v[:4]) == bytes([9, 8, 7, 0])
    assert cpu.state.i == expected_i


@pytest.mark.parametrize("quirk", [False, True])
def test_dump_then_load_round_trip(quirk: bool) -> None:
    cpu, _ = make_cpu(0xF555, 0xF565, load_store_quirk=quirk)
    original = bytes([0x11, 0x22, 0x33, 0x44, 0x55, 0x66])
    cpu.state.v[0:6] = original
    cpu.state.i = 0x400

    cpu.emulate_cycle()
    assert cpu.state.i == (0x406 if quirk else 0x400)
    cpu.state.v[0:6] = bytes(6)
    if quirk:
        cpu.state.i = 0x400

    cpu.emulate_cycle()

    assert bytes(cpu.state.v[:6]) == original
    assert cpu.state.i == (0x406 if quirk else 0x400)


def test_clear_then_draw_has_no_collision() -> None:
    cpu, engine = make_cpu(0x00E0, 0xD015)
    cpu.state.i = 0x000  # glyph "0"

    cpu.emulate_cycle()
    cpu.emulate_cycle()

    assert cpu.state.v[0xF] == 0
    assert engine.clear_count == 1
    assert engine.framebuffer.lit_count() == 14


def test_drawing_twice_erases_and_collides() -> None:
    cpu, engine = make_cpu(0xD015, 0xD015)
    cpu.state.v[0] = 10
    cpu.state.v[1] = 5

    cpu.emulate_cycle()
    assert cpu.state.v[0xF] == 0
    assert engine.framebuffer.get_pixel(10, 5)

    cpu.emulate_cycle()
    assert cpu.state.v[0xF] == 1
    assert engine.framebuffer.lit_count() == 0


def test_draw_reads_height_bytes_from_index() -> None:
    cpu, engine = make_cpu(0xD012)
    cpu.memory.store_block(0x300, bytes([0x80, 0x01]))
    cpu.state.i = 0x300

    cpu.emulate_cycle()

    assert engine.framebuffer.get_pixel(0, 0)
    assert engine.framebuffer.get_pixel(7, 1)
    assert engine.framebuffer.lit_count() == 2


def test_random_uses_engine_stream_and_mask() -> None:
    cpu, _ = make_cpu(0xC0FF, 0xC1FF, 0xC2FF, 0xC30F)

    for _ in range(4):
        cpu.emulate_cycle()

    assert bytes(cpu.state.v[:4]) == bytes([1, 1, 1, 50 & 0x0F])


@pytest.mark.parametrize(
    ("opcode", "pressed", "expected_pc"),
    [
        (0xE09E, True, 0x204),
        (0xE09E, False, 0x202),
        (0xE0A1, True, 0x202),
        (0xE0A1, False, 0x204),
    ],
)
def test_key_skips_use_low_nibble(opcode: int, pressed: bool, expected_pc: int) -> None:
    cpu, _ = make_cpu(opcode)
    cpu.state.v[0] = 0x1A
    if pressed:
        cpu.keypad.press(0xA)

    cpu.emulate_cycle()

    assert cpu.state.pc == expected_pc


def test_timer_opcodes() -> None:
    cpu, _ = make_cpu(0xF015, 0xF118, 0xF207)
    cpu.state.v[0] = 5
    cpu.state.v[1] = 7

    cpu.emulate_cycle()
    cpu.emulate_cycle()
    cpu.decrement_timers()
    cpu.emulate_cycle()

    assert cpu.state.delay_timer == 4
    assert cpu.state.sound_timer == 6
    assert cpu.state.v[2] == 4


def test_timers_decrement_independently_and_saturate() -> None:
    cpu, _ = make_cpu()
    cpu.state.delay_timer = 1
    cpu.state.sound_timer = 0

    cpu.decrement_timers()
    assert (cpu.state.delay_timer, cpu.state.sound_timer) == (0, 0)

    cpu.state.sound_timer = 2
    cpu.decrement_timers()
    assert (cpu.state.delay_timer, cpu.state.sound_timer) == (0, 1)


def test_instructions_never_touch_timers() -> None:
    cpu, _ = make_cpu(0x6001, 0x6002)
    cpu.state.delay_timer = 9

    cpu.emulate_cycle()
    cpu.emulate_cycle()

    assert cpu.state.delay_timer == 9


@pytest.mark.parametrize("opcode", [0x5121, 0x8008, 0x800F, 0x9121, 0xE000, 0xF0FF, 0xF000])
def test_illegal_opcode_raises(opcode: int) -> None:
    cpu, _ = make_cpu(opcode)

    with pytest.raises(IllegalOpcodeError) as excinfo:
        cpu.emulate_cycle()

    assert excinfo.value.pc == 0x200
    assert excinfo.value.opcode == opcode
    assert f"{opcode:04X}" in str(excinfo.value)
    assert cpu.state.pc == 0x200


def test_wait_for_key_is_unimplemented() -> None:
    cpu, _ = make_cpu(0x6001, 0xF30A)
    cpu.emulate_cycle()

    with pytest.raises(UnimplementedOpcodeError) as excinfo:
        cpu.emulate_cycle()

    assert not isinstance(excinfo.value, IllegalOpcodeError)
    assert isinstance(excinfo.value, CPUError)
    assert excinfo.value.pc == 0x202
    assert excinfo.value.opcode == 0xF30A
    assert cpu.state.pc == 0x202


def test_stack_overflow() -> None:
    cpu, _ = make_cpu(0x2200)

    for _ in range(16):
        cpu.emulate_cycle()

    with pytest.raises(StackError):
        cpu.emulate_cycle()
    assert cpu.sp == 16
    assert cpu.state.pc == 0x200


def test_return_with_empty_stack() -> None:
    cpu, _ = make_cpu(0x00EE)

    with pytest.raises(StackError):
        cpu.emulate_cycle()
    assert cpu.state.pc == 0x200


def test_bcd_outside_memory_is_reported_without_side_effects() -> None:
    cpu, _ = make_cpu(0xF033)
    cpu.state.v[0] = 123
    cpu.state.i = 0xFFE

    with pytest.raises(MemoryAccessError):
        cpu.emulate_cycle()

    assert cpu.memory.load_block(0xFFE, 2) == bytes(2)
    assert cpu.state.pc == 0x200


def test_register_dump_into_font_area_is_rejected() -> None:
    cpu, _ = make_cpu(0xF055)
    cpu.state.i = 0x000

    with pytest.raises(MemoryAccessError):
        cpu.emulate_cycle()


def test_fetch_past_end_of_memory() -> None:
    cpu, _ = make_cpu(0x1FFF)
    cpu.emulate_cycle()

    with pytest.raises(MemoryAccessError):
        cpu.emulate_cycle()


def test_register_accessors_check_bounds() -> None:
    cpu, _ = make_cpu()

    cpu.write_register(3, 0x1FF)
    assert cpu.read_register(3) == 0xFF

    with pytest.raises(CPUError):
        cpu.read_register(16)
    with pytest.raises(CPUError):
        cpu.write_register(-1, 0)


def test_reset_keeps_memory() -> None:
    cpu, _ = make_cpu(0x6005, 0x2300)
    cpu.emulate_cycle()
    cpu.emulate_cycle()

    cpu.reset()

    assert cpu.state.pc == 0x200
    assert cpu.state.v[0] == 0
    assert cpu.sp == 0
    assert cpu.cycle_count == 0
    assert cpu.memory.load16(0x200) == 0x6005
