"""Cycle pacing between instruction execution and the 60 Hz timer tick."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from pychip8.bus import MemoryAccessError
from pychip8.cpu import CPUError, Instruction
from pychip8.utils import TraceRecorder

from .machine import Machine

DEFAULT_CYCLES_PER_SECOND = 600
DEFAULT_TIMER_HZ = 60

StepHook = Callable[[Machine, Instruction], None]


@dataclass
class CycleDriver:
    """Runs instructions in batches, one timer decrement per batch.

    The driver does not sleep; a front-end calls ``run_frame`` once per
    timer tick and handles wall-clock pacing itself.
    """

    machine: Machine
    cycles_per_second: int = DEFAULT_CYCLES_PER_SECOND
    timer_hz: int = DEFAULT_TIMER_HZ
    trace: Optional[TraceRecorder] = None
    on_step: Optional[StepHook] = None
    frames: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.cycles_per_second <= 0:
            raise ValueError("cycles_per_second must be positive")
        if self.timer_hz <= 0:
            raise ValueError("timer_hz must be positive")

    @property
    def cycles_per_frame(self) -> int:
        return max(1, self.cycles_per_second // self.timer_hz)

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.timer_hz

    def step(self) -> Instruction:
        cpu = self.machine.cpu
        if self.trace is None:
            instruction = cpu.emulate_cycle()
        else:
            state_before = cpu.state.clone()
            sp_before = cpu.sp
            opcode = self._peek_opcode(state_before.pc)
            try:
                instruction = cpu.emulate_cycle()
            except (CPUError, MemoryAccessError) as exc:
                self.trace.record_step(state_before, opcode, sp=sp_before, note=type(exc).__name__)
                raise
            self.trace.record_step(state_before, opcode, sp=sp_before, mnemonic=instruction.mnemonic)
        if self.on_step is not None:
            self.on_step(self.machine, instruction)
        return instruction

    def run_frame(self) -> int:
        """Execute one frame worth of cycles and tick the timers once."""

        executed = 0
        for _ in range(self.cycles_per_frame):
            self.step()
            executed += 1
        self.machine.cpu.decrement_timers()
        self.frames += 1
        return executed

    def run_frames(self, count: int) -> int:
        return sum(self.run_frame() for _ in range(count))

    def _peek_opcode(self, pc: int) -> int | None:
        try:
            return self.machine.memory.load16(pc)
        except MemoryAccessError:
            return None
