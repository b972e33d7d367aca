"""Tests for CHIP8_DEBUG driven logging."""

from __future__ import annotations

import pytest

from pychip8.utils import debug
from pychip8.utils.trace import TraceRecorder


@pytest.fixture(autouse=True)
def _reset_categories():
    debug.reload_categories()
    yield
    debug.reload_categories()


def test_disabled_without_environment(monkeypatch, capsys) -> None:
    monkeypatch.delenv("CHIP8_DEBUG", raising=False)

    debug.debug_log("cpu", "pc=%04x", 0x200)

    assert debug.debug_enabled("cpu") is False
    assert capsys.readouterr().out == ""


def test_selected_categories(monkeypatch, capsys) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "CPU, loader")

    debug.debug_log("cpu", "pc=%04x", 0x200)
    debug.debug_log("input", "ignored")

    assert debug.debug_enabled("loader") is True
    assert debug.debug_enabled("trace") is False
    assert capsys.readouterr().out == "[CHIP8][cpu] pc=0200\n"


def test_all_enables_every_category(monkeypatch) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "all")

    assert debug.debug_enabled("perf") is True
    assert debug.debug_enabled() is True


def test_bad_format_arguments_are_kept(monkeypatch, capsys) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "fault")

    debug.debug_log("fault", "%d cycles", "many")

    assert capsys.readouterr().out == "[CHIP8][fault] %d cycles ('many',)\n"


def test_trace_dump_goes_through_debug_log(monkeypatch, capsys) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "trace")
    recorder = TraceRecorder(2)
    recorder.record_step(
        type("State", (), {"pc": 0x200, "i": 0, "v": bytes(16), "delay_timer": 0, "sound_timer": 0})(),
        0x00E0,
        sp=0,
        mnemonic="CLS",
    )

    recorder.dump("trace")

    out = capsys.readouterr().out
    assert out.startswith("[CHIP8][trace] pc=0200 opcode=00E0 CLS")
