"""Tone synthesis for pulse sequences
===================================

:class:`AudioEngine` renders a :class:`~morseflow.core.timing_engine.PulseSequence`
as 16-bit mono PCM: every ``on`` pulse becomes a sine tone, every
``off`` pulse the same number of samples of silence.  Pulses are
rendered strictly in order, back to back.

Each tone gets a short linear fade in and out (``min(100, n / 10)``
samples) so that the keying does not click.

Output options:

* :meth:`AudioEngine.synthesise` – raw PCM ``bytes``.
* :meth:`AudioEngine.write_wav` – a WAV file via the stdlib ``wave``
  module.
* :meth:`AudioEngine.generate_audio_segment` / :meth:`AudioEngine.export`
  – a ``pydub.AudioSegment`` and anything ffmpeg can write.
* :meth:`AudioEngine.play` – blocking playback through the platform
  player (``winsound`` / ``afplay`` / ``aplay`` / ``paplay``).
"""

from __future__ import annotations

import logging
import math
import os
import subprocess
import sys
import tempfile
import wave
from pathlib import Path
from typing import Iterable, Optional, Union

from pydub import AudioSegment

from ..core.speed import SpeedConfig
from ..core.timing_engine import PulseEvent, create_pulse_sequence
from ..exceptions import ConfigurationError
from .audio_logger import attach_debug_log, log_engine_settings
from .utils import apply_volume

if sys.platform == "win32":
    import winsound as _winsound
    HAVE_WINSOUND = True
else:
    HAVE_WINSOUND = False

logger = logging.getLogger(__name__)

# WAV header size for a plain PCM file
WAV_HEADER_BYTES = 44


class AudioEngine:
    """Sine-tone renderer for pulse sequences.

    :param sample_rate: Samples per second (8000–192000).
    :param frequency: Tone frequency in Hz (100–4000).
    :param volume: Linear amplitude (0.0–1.0).
    :param debug_log: Attach the audio debug file logger.
    :param debug_log_path: Log file for ``debug_log``; defaults to
        ``audio_debug.log`` in ``$MORSEFLOW_LOG_DIR`` or the working directory.
    """

    def __init__(
        self,
        sample_rate: int = 44100,
        frequency: int = 600,
        volume: float = 0.5,
        debug_log: bool = False,
        debug_log_path: Optional[Union[str, os.PathLike]] = None,
    ) -> None:
        self._sample_rate = 44100
        self._frequency = 600
        self._volume = 0.5
        self.set_sample_rate(sample_rate)
        self.set_frequency(frequency)
        self.set_volume(volume)
        if debug_log:
            handler = attach_debug_log(debug_log_path)
            log_engine_settings(self._sample_rate, self._frequency, self._volume, handler.baseFilename)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def frequency(self) -> int:
        return self._frequency

    @property
    def volume(self) -> float:
        return self._volume

    def set_sample_rate(self, sample_rate: int) -> None:
        if sample_rate < 8000 or sample_rate > 192000:
            raise ConfigurationError("Sample rate must be between 8000 and 192000 Hz")
        self._sample_rate = int(sample_rate)

    def set_frequency(self, frequency: int) -> None:
        if frequency < 100 or frequency > 4000:
            raise ConfigurationError("Frequency must be between 100 and 4000 Hz")
        self._frequency = int(frequency)

    def set_volume(self, volume: float) -> None:
        if volume < 0.0 or volume > 1.0:
            raise ConfigurationError("Volume must be between 0.0 and 1.0")
        self._volume = float(volume)

    # ------------------------------------------------------------------
    # Synthesis
    # ------------------------------------------------------------------

    def samples_for(self, duration_ms: int) -> int:
        return int(self._sample_rate * duration_ms / 1000)

    def _tone(self, duration_ms: int) -> bytes:
        n_samples = self.samples_for(duration_ms)
        fade = min(100.0, n_samples / 10)
        step = 2 * math.pi * self._frequency / self._sample_rate
        pcm = bytearray()
        for i in range(n_samples):
            value = math.sin(step * i) * self._volume
            if i < fade:
                value *= i / fade
            elif i > n_samples - fade:
                value *= (n_samples - i) / fade
            sample = max(-32768, min(32767, int(value * 32767)))
            pcm += sample.to_bytes(2, byteorder="little", signed=True)
        return bytes(pcm)

    def _silence(self, duration_ms: int) -> bytes:
        return bytes(2 * self.samples_for(duration_ms))

    def synthesise(self, pulses: Iterable[PulseEvent]) -> Optional[bytes]:
        """Render ``pulses`` as 16-bit little-endian mono PCM.

        :return: PCM bytes, or ``None`` for an empty sequence.
        """
        pcm = bytearray()
        count = 0
        for event in pulses:
            count += 1
            pcm += self._tone(event.duration_ms) if event.is_on else self._silence(event.duration_ms)
        if not count:
            return None
        logger.debug("Synthesised %d pulses into %d bytes", count, len(pcm))
        return bytes(pcm)

    def synthesise_code(self, code: str, speed: Optional[SpeedConfig] = None) -> Optional[bytes]:
        """Shortcut: time ``code`` at ``speed`` and synthesise the result."""
        return self.synthesise(create_pulse_sequence(code, speed))

    def estimate_file_size(self, pulses: Iterable[PulseEvent]) -> int:
        """Size in bytes of the WAV file :meth:`write_wav` would produce."""
        samples = sum(self.samples_for(event.duration_ms) for event in pulses)
        return WAV_HEADER_BYTES + 2 * samples

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def write_wav(self, pulses: Iterable[PulseEvent], path: Union[str, os.PathLike]) -> Path:
        """Write ``pulses`` as a mono 16-bit WAV file and return its path."""
        raw = self.synthesise(pulses) or b""
        out = Path(path)
        with wave.open(str(out), "wb") as wf:
            wf.setnchannels(1)
            wf.setsampwidth(2)
            wf.setframerate(self._sample_rate)
            wf.writeframes(raw)
        logger.info("Wrote %s (%d bytes of PCM)", out, len(raw))
        return out

    def generate_audio_segment(
        self,
        pulses: Iterable[PulseEvent],
        gain: float = 1.0,
    ) -> Optional[AudioSegment]:
        """Wrap the synthesised PCM in a ``pydub.AudioSegment``.

        :param gain: Extra linear gain applied on top of :attr:`volume`.
        :return: The segment, or ``None`` for an empty sequence.
        """
        raw = self.synthesise(pulses)
        if raw is None:
            return None
        segment = AudioSegment(
            data=raw,
            sample_width=2,
            frame_rate=self._sample_rate,
            channels=1,
        )
        if gain != 1.0:
            segment = apply_volume(segment, gain)
        return segment

    def export(
        self,
        pulses: Iterable[PulseEvent],
        path: Union[str, os.PathLike],
        format: str = "wav",
    ) -> Path:
        """Export via pydub; formats other than ``wav`` need ffmpeg."""
        segment = self.generate_audio_segment(pulses)
        if segment is None:
            raise ConfigurationError("Nothing to export: pulse sequence is empty")
        out = Path(path)
        segment.export(str(out), format=format)
        logger.info("Exported %s as %s", out, format)
        return out

    # ------------------------------------------------------------------
    # Playback – blocking
    # ------------------------------------------------------------------

    def _play_bytes(self, raw: bytes) -> None:
        """Play raw PCM through the platform player, blocking until done."""
        if not raw:
            return
        fd, tmp_path = tempfile.mkstemp(suffix=".wav")
        os.close(fd)
        try:
            with wave.open(tmp_path, "wb") as wf:
                wf.setnchannels(1)
                wf.setsampwidth(2)
                wf.setframerate(self._sample_rate)
                wf.writeframes(raw)

            if HAVE_WINSOUND:
                _winsound.PlaySound(tmp_path, _winsound.SND_FILENAME | _winsound.SND_NODEFAULT)
            elif sys.platform == "darwin":
                subprocess.run(["afplay", tmp_path], check=True)
            else:
                try:
                    subprocess.run(["aplay", "-q", tmp_path], check=True, timeout=300)
                except (FileNotFoundError, subprocess.SubprocessError):
                    logger.debug("aplay failed, falling back to paplay")
                    subprocess.run(["paplay", tmp_path], check=True, timeout=300)
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)

    def play(self, data: Union[bytes, bytearray, AudioSegment, Iterable[PulseEvent], None]) -> None:
        """Play PCM bytes, an ``AudioSegment`` or a pulse sequence.

        ``None`` is ignored.  Blocks until playback has finished.
        """
        if data is None:
            return
        if isinstance(data, AudioSegment):
            seg = data.set_frame_rate(self._sample_rate).set_channels(1).set_sample_width(2)
            self._play_bytes(seg.raw_data)
            return
        if isinstance(data, (bytes, bytearray)):
            self._play_bytes(bytes(data))
            return
        self._play_bytes(self.synthesise(data) or b"")


__all__ = ["AudioEngine", "WAV_HEADER_BYTES"]
