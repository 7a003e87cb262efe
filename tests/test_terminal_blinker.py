import io

import pytest

from morseflow.core.speed import SpeedConfig
from morseflow.terminal.blinker import CLEAR_LINE, HIDE_CURSOR, SHOW_CURSOR, TerminalBlinker


class SleepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def blinker(sleeps):
    return TerminalBlinker(SpeedConfig.from_wpm(20), stream=io.StringIO(), sleep=sleeps)


def test_inline_holds_each_pulse(blinker, sleeps):
    blinker.blink_inline(".-", "A")
    assert sleeps.calls == pytest.approx([1.0, 0.06, 0.06, 0.18])


def test_inline_redraws_on_state_changes_only(blinker):
    blinker.blink_inline(".-", "A")
    out = blinker.stream.getvalue()
    # initial off, on, off, on, final off
    assert out.count(CLEAR_LINE) == 5
    assert out.startswith(HIDE_CURSOR)
    assert out.endswith(SHOW_CURSOR)
    assert " | A: .-" in out


def test_inline_without_labels(blinker):
    blinker.set_show_labels(False)
    blinker.blink_inline(".-", "A")
    assert ".-" not in blinker.stream.getvalue()


def test_custom_symbols(blinker):
    blinker.set_symbols("X", "o")
    blinker.blink_inline(".")
    out = blinker.stream.getvalue()
    assert "X" * 8 in out
    assert "o" * 8 in out


def test_fullscreen_repeats(blinker, sleeps):
    blinker.terminal_size = lambda: (10, 40)
    blinker.blink_fullscreen(".", "E", repeats=2)
    assert sleeps.calls == pytest.approx([1.0, 0.06, 0.84, 0.06])
    out = blinker.stream.getvalue()
    assert "[ E ]" in out
    assert "SIGNAL ON" in out
    assert out.endswith(SHOW_CURSOR)


def test_timing_array_uses_speed(blinker):
    blinker.set_speed(10)
    assert blinker.get_timing_array(".-") == [
        {"state": "on", "duration": 120},
        {"state": "off", "duration": 120},
        {"state": "on", "duration": 360},
    ]


def test_terminal_size_fallback():
    rows, cols = TerminalBlinker.terminal_size()
    assert rows > 0 and cols > 0
