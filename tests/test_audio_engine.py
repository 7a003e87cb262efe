import logging
import os
import wave
from pathlib import Path

import pytest
from pydub import AudioSegment

from morseflow.audio.audio_engine import WAV_HEADER_BYTES, AudioEngine
from morseflow.audio.audio_logger import LOG_DIR_ENV_VAR, LOGGER_NAME, get_audio_log_path
from morseflow.audio.utils import db_from_linear
from morseflow.core.speed import SpeedConfig
from morseflow.core.timing_engine import PulseEvent, create_pulse_sequence
from morseflow.exceptions import ConfigurationError


@pytest.fixture
def pulses():
    return create_pulse_sequence(".-", SpeedConfig.from_wpm(20))


def test_samples_for():
    assert AudioEngine().samples_for(60) == 2646
    assert AudioEngine(sample_rate=8000).samples_for(60) == 480


def test_synthesise_length(pulses):
    raw = AudioEngine().synthesise(pulses)
    assert len(raw) == 2 * (2646 + 2646 + 7938)


def test_synthesise_empty_returns_none():
    assert AudioEngine().synthesise([]) is None


def test_silence_is_zero():
    assert AudioEngine().synthesise([PulseEvent.off(10)]) == bytes(2 * 441)


def test_tone_respects_volume():
    engine = AudioEngine(volume=0.25)
    raw = engine.synthesise([PulseEvent.on(100)])
    samples = [int.from_bytes(raw[i:i + 2], "little", signed=True) for i in range(0, len(raw), 2)]
    assert samples[0] == 0
    assert max(abs(s) for s in samples) <= int(0.25 * 32767) + 1
    assert max(abs(s) for s in samples) > 0


def test_write_wav(tmp_path, pulses):
    engine = AudioEngine()
    path = engine.write_wav(pulses, tmp_path / "a.wav")
    with wave.open(str(path), "rb") as wf:
        assert wf.getnchannels() == 1
        assert wf.getsampwidth() == 2
        assert wf.getframerate() == 44100
        assert wf.getnframes() == 13230
    assert path.stat().st_size == engine.estimate_file_size(pulses)


def test_estimate_file_size(pulses):
    assert AudioEngine().estimate_file_size(pulses) == WAV_HEADER_BYTES + 2 * 13230


def test_audio_segment(pulses):
    segment = AudioEngine().generate_audio_segment(pulses)
    assert isinstance(segment, AudioSegment)
    assert len(segment) == 300
    assert segment.channels == 1
    assert segment.frame_rate == 44100


def test_audio_segment_empty():
    assert AudioEngine().generate_audio_segment([]) is None


def test_export_empty_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        AudioEngine().export([], tmp_path / "x.wav")


def test_synthesise_code():
    engine = AudioEngine(sample_rate=8000)
    assert len(engine.synthesise_code(".", SpeedConfig.from_wpm(20))) == 2 * 480


@pytest.mark.parametrize("kwargs", [
    {"sample_rate": 7999},
    {"sample_rate": 192001},
    {"frequency": 99},
    {"frequency": 4001},
    {"volume": -0.1},
    {"volume": 1.1},
])
def test_invalid_settings(kwargs):
    with pytest.raises(ConfigurationError):
        AudioEngine(**kwargs)


def test_failed_setter_keeps_value():
    engine = AudioEngine(frequency=800)
    with pytest.raises(ConfigurationError):
        engine.set_frequency(5000)
    assert engine.frequency == 800


def test_db_from_linear():
    assert db_from_linear(1.0) == 0.0
    assert db_from_linear(0.1) == pytest.approx(-20.0)


@pytest.fixture
def audio_logger():
    logger = logging.getLogger(LOGGER_NAME)
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_debug_log_records_engine_settings(tmp_path, audio_logger):
    log_path = tmp_path / "audio.log"
    AudioEngine(sample_rate=8000, frequency=700, debug_log=True, debug_log_path=log_path)
    AudioEngine(sample_rate=16000, debug_log=True, debug_log_path=log_path)

    content = log_path.read_text(encoding="utf-8")
    assert "sample_rate=8000 Hz, frequency=700 Hz, volume=0.50" in content
    assert "sample_rate=16000 Hz, frequency=600 Hz" in content
    handlers = [h for h in audio_logger.handlers
                if isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_path)]
    assert len(handlers) == 1


def test_debug_log_receives_synthesis_messages(tmp_path, audio_logger):
    log_path = tmp_path / "audio.log"
    engine = AudioEngine(debug_log=True, debug_log_path=log_path)
    engine.synthesise([PulseEvent.on(10)])
    assert "Synthesised 1 pulses" in log_path.read_text(encoding="utf-8")


def test_no_debug_log_by_default(audio_logger):
    AudioEngine()
    assert not [h for h in audio_logger.handlers if isinstance(h, logging.FileHandler)]


def test_log_path_resolution(tmp_path, monkeypatch):
    monkeypatch.setenv(LOG_DIR_ENV_VAR, str(tmp_path))
    assert get_audio_log_path() == Path(os.path.abspath(tmp_path / "audio_debug.log"))
    assert get_audio_log_path(tmp_path / "other.log").name == "other.log"
    monkeypatch.delenv(LOG_DIR_ENV_VAR)
    assert get_audio_log_path().parent == Path(os.path.abspath(Path.cwd()))
