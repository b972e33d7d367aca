"""Terminal front-end that prints the display as text."""

from __future__ import annotations

import time
from typing import TextIO

from pychip8.engines import TerminalEngine

from .app import BaseApp


class TerminalApp(BaseApp):
    """Runs the interpreter against a text stream; Ctrl-C stops it.

    Keys are not read from the terminal, so programs waiting on the keypad
    never see a press.
    """

    def run(self, stream: TextIO | None = None, *, max_frames: int | None = None) -> int:
        engine = TerminalEngine(stream)
        self._create_machine(engine)
        engine.start()

        driver = self._driver
        assert driver is not None
        interval = driver.frame_interval
        frames = 0
        self._running = True
        try:
            while self._running:
                if max_frames is not None and frames >= max_frames:
                    break
                frame_start = time.perf_counter()
                self._run_frame()
                frames += 1
                remaining = interval - (time.perf_counter() - frame_start)
                if remaining > 0:
                    time.sleep(remaining)
        except KeyboardInterrupt:
            self._running = False
        return frames
