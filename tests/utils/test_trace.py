from types import SimpleNamespace

from pychip8.utils.trace import TraceRecorder


def _state(pc, **kwargs):
    defaults = {"v": bytes(16), "i": 0x000, "delay_timer": 0, "sound_timer": 0}
    defaults.update(kwargs)
    return SimpleNamespace(pc=pc, **defaults)


def test_trace_recorder_overwrites_old_entries():
    recorder = TraceRecorder(capacity=2)

    recorder.record_step(_state(0x200), 0x6005, sp=0, mnemonic="LD")
    recorder.record_step(_state(0x202, i=0x22A), 0x7003, sp=0, mnemonic="ADD")
    recorder.record_step(_state(0x204, delay_timer=0x3C), 0x2300, sp=1, mnemonic="CALL", note="nested")

    lines = list(recorder.format_entries())
    assert len(recorder) == 2
    assert len(lines) == 2
    assert "pc=0202" in lines[0]
    assert "I=022A" in lines[0]
    assert "pc=0204" in lines[1]
    assert "CALL" in lines[1]
    assert "SP=01 DT=3C" in lines[1]
    assert lines[1].endswith("note=nested")


def test_trace_recorder_handles_missing_opcode():
    recorder = TraceRecorder(1)
    recorder.record_step(_state(0x1000), None, sp=0, note="MemoryAccessError")

    lines = list(recorder.format_entries())
    assert len(lines) == 1
    assert "opcode=----" in lines[0]
    assert "note=MemoryAccessError" in lines[0]


def test_entries_limit_returns_most_recent():
    recorder = TraceRecorder(8)
    for offset in range(5):
        recorder.record_step(_state(0x200 + offset * 2), 0x00E0, sp=0)

    assert [entry.pc for entry in recorder.entries(2)] == [0x206, 0x208]
    assert recorder.last_entry().pc == 0x208


def test_registers_are_copied():
    recorder = TraceRecorder(1)
    registers = bytearray(16)
    recorder.record_step(_state(0x200, v=registers), 0x6001, sp=0)
    registers[0] = 0xFF

    assert recorder.last_entry().v[0] == 0
