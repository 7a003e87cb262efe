import pytest

from morseflow.core.codec import Codec
from morseflow.core.speed import SpeedConfig
from morseflow.core.symbol_table import SYMBOL_TABLE
from morseflow.core.timing_engine import (
    PulseEvent,
    PulseSequence,
    PulseState,
    TimingEngine,
    create_pulse_sequence,
    estimate_duration_ms,
)
from morseflow.exceptions import EmptyInputError, InvalidCodeFormatError

on = PulseEvent.on
off = PulseEvent.off

WPM20 = SpeedConfig.from_wpm(20)


def test_single_character():
    assert create_pulse_sequence(".-", WPM20) == [on(60), off(60), on(180)]


def test_sos_event_count_and_duration():
    pulses = create_pulse_sequence("... --- ...", WPM20)
    assert len(pulses) == 17
    assert pulses[5] == off(180)
    assert pulses.total_duration_ms == 1620


def test_word_gap_consumes_slash_group():
    pulses = create_pulse_sequence("... / ...", WPM20)
    assert len(pulses) == 11
    assert pulses[5] == off(420)
    assert not pulses.has_consecutive_off()


def test_bare_slash_is_word_gap():
    pulses = create_pulse_sequence(".../...", WPM20)
    assert pulses == create_pulse_sequence("... / ...", WPM20)


def test_double_space_emits_one_gap():
    assert create_pulse_sequence(".  .", WPM20) == [on(60), off(180), on(60)]


def test_surrounding_whitespace_is_trimmed():
    assert create_pulse_sequence("  .-  ", WPM20) == create_pulse_sequence(".-", WPM20)


def test_repeated_word_gaps_are_kept():
    pulses = create_pulse_sequence(". / / .", WPM20)
    assert pulses == [on(60), off(420), off(420), off(180), on(60)]
    assert pulses.has_consecutive_off()


def test_durations_scale_with_speed():
    pulses = create_pulse_sequence(".-", SpeedConfig.from_wpm(10))
    assert pulses == [on(120), off(120), on(360)]


def test_default_speed_is_20_wpm():
    assert create_pulse_sequence(".") == [on(60)]


@pytest.mark.parametrize("char", [c for c in SYMBOL_TABLE if c != " "])
def test_every_character_alternates(char):
    pulses = create_pulse_sequence(SYMBOL_TABLE.lookup(char), WPM20)
    assert pulses[0].is_on and pulses[-1].is_on
    for a, b in zip(pulses, pulses[1:]):
        assert a.is_on != b.is_on
    assert all(p.duration_ms > 0 for p in pulses)


@pytest.mark.parametrize("text", [
    "HELLO WORLD",
    "SOS SOS SOS",
    "THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG 0123456789",
    "'\"$@ /()& :;=+ -_.,?!",
])
def test_encoded_text_alternates(text):
    pulses = create_pulse_sequence(Codec().encode(text), WPM20)
    assert not pulses.has_consecutive_off()
    for a, b in zip(pulses, pulses[1:]):
        assert a.is_on != b.is_on
    assert pulses.as_dicts().count({"state": "off", "duration": 420}) == text.count(" ")


def test_empty_code():
    with pytest.raises(EmptyInputError):
        create_pulse_sequence("   ", WPM20)


def test_invalid_code():
    with pytest.raises(InvalidCodeFormatError):
        TimingEngine().run("..x", WPM20)


def test_estimate_duration():
    assert estimate_duration_ms(".-", WPM20) == 300


def test_pulse_sequence_helpers():
    pulses = create_pulse_sequence(".-", WPM20)
    assert isinstance(pulses[1:], PulseSequence)
    assert pulses[1:] == (off(60), on(180))
    assert pulses.as_dicts() == [
        {"state": "on", "duration": 60},
        {"state": "off", "duration": 60},
        {"state": "on", "duration": 180},
    ]
    assert pulses[0].state is PulseState.ON
    assert hash(pulses) == hash(create_pulse_sequence(".-", WPM20))
