"""Terminal blinking with ANSI escape codes.

:class:`TerminalBlinker` plays a pulse sequence as a coloured block in
the terminal, either on a single line (:meth:`~TerminalBlinker.blink_inline`)
or filling the whole screen (:meth:`~TerminalBlinker.blink_fullscreen`).
The light state changes exactly at the pulse boundaries and each state
is held for the pulse duration with a real sleep.

Output stream and sleep function are injectable so the blinker can be
driven without a terminal and without waiting.
"""

from __future__ import annotations

import shutil
import sys
import time
from typing import Callable, Dict, List, Optional, TextIO, Tuple, Union

from ..core.speed import SpeedConfig
from ..core.timing_engine import PulseSequence, create_pulse_sequence

RESET = "\033[0m"
CLEAR_LINE = "\033[2K\r"
CLEAR_SCREEN = "\033[2J\033[H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
BOLD = "\033[1m"

DEFAULT_ON_COLOR = "\033[43;30m"   # yellow background, black text
DEFAULT_OFF_COLOR = "\033[40;37m"  # black background, white text


class TerminalBlinker:
    """Blink code strings in a terminal."""

    def __init__(
        self,
        speed: Optional[SpeedConfig] = None,
        stream: Optional[TextIO] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.speed = speed or SpeedConfig.default()
        self.stream = stream if stream is not None else sys.stdout
        self._sleep = sleep
        self.on_color = DEFAULT_ON_COLOR
        self.off_color = DEFAULT_OFF_COLOR
        self.on_symbol = "████"
        self.off_symbol = "░░░░"
        self.show_labels = True
        self.start_delay = 1.0

    def set_speed(self, wpm: int) -> None:
        self.speed = self.speed.with_speed(wpm)

    def set_colors(self, on_color: str, off_color: str) -> None:
        self.on_color = on_color
        self.off_color = off_color

    def set_symbols(self, on_symbol: str, off_symbol: str) -> None:
        self.on_symbol = on_symbol
        self.off_symbol = off_symbol

    def set_show_labels(self, show: bool) -> None:
        self.show_labels = show

    def get_timing_array(self, code: str) -> List[Dict[str, Union[str, int]]]:
        return create_pulse_sequence(code, self.speed).as_dicts()

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def display(self, code: str, label: Optional[str] = None) -> None:
        self.blink_inline(code, label)

    def blink_inline(self, code: str, label: Optional[str] = None) -> None:
        pulses = create_pulse_sequence(code, self.speed)
        code = code.strip()
        self._write(HIDE_CURSOR)
        try:
            self._draw_inline(False, code, label)
            self._sleep(self.start_delay)
            self._play(pulses, lambda on: self._draw_inline(on, code, label))
            self._write("\n\n")
        finally:
            self._write(SHOW_CURSOR)

    def blink_fullscreen(self, code: str, text: Optional[str] = None, repeats: int = 2) -> None:
        pulses = create_pulse_sequence(code, self.speed)
        code = code.strip()
        rows, cols = self.terminal_size()
        draw = lambda on: self._draw_fullscreen(on, text, code, rows, cols)  # noqa: E731

        self._write(HIDE_CURSOR + CLEAR_SCREEN)
        try:
            draw(False)
            self._sleep(self.start_delay)
            for i in range(repeats):
                if i > 0:
                    self._sleep(2 * self.speed.word_spacing_ms / 1000.0)
                self._play(pulses, draw)
        finally:
            self._write(CLEAR_SCREEN + SHOW_CURSOR)

    def _play(self, pulses: PulseSequence, draw: Callable[[bool], None]) -> None:
        lit = False
        for event in pulses:
            if event.is_on != lit:
                lit = event.is_on
                draw(lit)
            self._sleep(event.duration_ms / 1000.0)
        if lit:
            draw(False)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _write(self, s: str) -> None:
        self.stream.write(s)
        self.stream.flush()

    def _draw_inline(self, on: bool, code: str, label: Optional[str]) -> None:
        parts = [CLEAR_LINE]
        if on:
            parts += [self.on_color, self.on_symbol * 8, RESET, " ON  "]
        else:
            parts += [self.off_color, self.off_symbol * 8, RESET, " OFF "]
        if self.show_labels:
            parts.append(f" | {label}: " if label else " | ")
            parts.append(code)
        self._write("".join(parts))

    def _draw_fullscreen(self, on: bool, text: Optional[str], code: str, rows: int, cols: int) -> None:
        color = self.on_color if on else self.off_color
        center = rows // 2
        lines = []
        for row in range(rows):
            if text and row == center - 2:
                lines.append(_centered(f"[ {text} ]", cols, BOLD, RESET + color))
            elif row == center:
                lines.append(_centered(code, cols))
            elif self.show_labels and row == center + 2:
                status = "••• SIGNAL ON •••" if on else "--- SIGNAL OFF ---"
                lines.append(_centered(status, cols, BOLD, RESET + color))
            else:
                lines.append(" " * cols)
        self._write(CLEAR_SCREEN + color + "\n".join(lines) + RESET)

    @staticmethod
    def terminal_size() -> Tuple[int, int]:
        """Return ``(rows, cols)``, falling back to 24×80."""
        size = shutil.get_terminal_size(fallback=(80, 24))
        return size.lines, size.columns


def _centered(s: str, cols: int, before: str = "", after: str = "") -> str:
    padding = max(0, (cols - len(s)) // 2)
    rest = max(0, cols - padding - len(s))
    return " " * padding + before + s + after + " " * rest


__all__ = ["TerminalBlinker", "DEFAULT_ON_COLOR", "DEFAULT_OFF_COLOR"]
