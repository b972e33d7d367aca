"""Pygame front-end for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.bus import MemoryAccessError
from pychip8.cpu import CPUError
from pychip8.engines import Engine
from pychip8.loader import RomFormatError
from pychip8.system import (
    DEFAULT_CYCLES_PER_SECOND,
    DEFAULT_TIMER_HZ,
    CycleDriver,
    Machine,
    MachineConfig,
    create_machine,
)
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import MONOCHROME, SCREEN_HEIGHT, SCREEN_WIDTH


@dataclass
class AppConfig:
    """Configuration shared by the CHIP-8 front-ends."""

    rom_path: Optional[Path] = None
    mode: str = "window"
    scale: int = 10
    load_store_quirk: bool = False
    cycles_per_second: int = DEFAULT_CYCLES_PER_SECOND
    timer_hz: int = DEFAULT_TIMER_HZ
    palette: tuple = MONOCHROME


class BaseApp:
    """Machine construction and fault reporting common to every front-end."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._driver: CycleDriver | None = None
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace") or debug_enabled("fault"):
            self._trace_recorder = TraceRecorder(256)

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def stop(self) -> None:
        self._running = False

    def _create_machine(self, engine: Engine) -> Machine:
        rom_path = self._config.rom_path
        if rom_path is None:
            raise RuntimeError("ROM image is required; pass the ROM path")
        if not rom_path.exists():
            raise RuntimeError(f"ROM file not found: {rom_path}")

        try:
            machine = create_machine(
                MachineConfig(
                    load_store_quirk=self._config.load_store_quirk,
                    rom_image=rom_path.read_bytes(),
                    rom_name=rom_path.name,
                    engine=engine,
                )
            )
        except (RomFormatError, MemoryAccessError) as exc:
            raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc

        self._machine = machine
        self._driver = CycleDriver(
            machine,
            cycles_per_second=self._config.cycles_per_second,
            timer_hz=self._config.timer_hz,
            trace=self._trace_recorder,
        )
        return machine

    def _run_frame(self) -> int:
        driver = self._driver
        if driver is None:
            raise RuntimeError("machine not initialised")
        try:
            return driver.run_frame()
        except (CPUError, MemoryAccessError) as exc:
            self._running = False
            self._report_fault(exc)
            raise RuntimeError(f"Emulation stopped: {exc}") from exc

    def _report_fault(self, exc: Exception) -> None:
        debug_log("fault", "%s: %s", type(exc).__name__, exc)
        if self._machine is not None:
            for line in format_cpu_state(self._machine):
                debug_log("fault", line)
        if self._trace_recorder is not None:
            self._trace_recorder.dump("fault", limit=32)


class Chip8App(BaseApp):
    """Runs the interpreter inside a pygame window."""

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        from pychip8.engines import WindowEngine

        pygame.init()
        rom_name = self._config.rom_path.name if self._config.rom_path else "CHIP-8"
        pygame.display.set_caption(f"CHIP-8 - {rom_name}")

        scale = self._config.scale
        screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
        engine = WindowEngine(screen, scale=scale, palette=self._config.palette)
        try:
            machine = self._create_machine(engine)
        except RuntimeError:
            pygame.quit()
            raise

        clock = pygame.time.Clock()
        self._running = True
        engine.present(force=True)
        pygame.display.flip()

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(machine, pygame.key.name(event.key), pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(machine, pygame.key.name(event.key), pressed=False)

                if not self._running:
                    break

                frame_start = time.perf_counter()
                executed = self._run_frame()
                if engine.present():
                    pygame.display.flip()

                if debug_enabled("perf"):
                    elapsed = time.perf_counter() - frame_start
                    debug_log("perf", "cycles=%d frame_ms=%.3f", executed, elapsed * 1000.0)

                clock.tick(self._config.timer_hz)
        finally:
            pygame.quit()

    def _handle_key_event(self, machine: Machine, name: str, *, pressed: bool) -> None:
        if debug_enabled("input"):
            debug_log("input", "event=%s pressed=%s", name, pressed)
        if pressed:
            machine.keypad.press_name(name)
        else:
            machine.keypad.release_name(name)


def format_cpu_state(machine: Machine) -> list[str]:
    state = machine.cpu.state
    registers = " ".join(f"V{index:X}={value:02X}" for index, value in enumerate(state.v))
    stack = " ".join(f"{address:03X}" for address in machine.cpu.stack.snapshot()) or "-"
    return [
        f"PC={state.pc:04X} I={state.i:04X} SP={machine.cpu.sp:02d} DT={state.delay_timer:02X} ST={state.sound_timer:02X}",
        registers,
        f"stack: {stack}",
    ]

