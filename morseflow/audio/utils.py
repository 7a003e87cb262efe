"""Audio utility functions for morseflow.

Small helpers shared by the audio package: converting linear volume
factors to decibels and applying them to pydub segments.
"""

from __future__ import annotations

import math

from pydub import AudioSegment


def db_from_linear(volume: float) -> float:
    """Convert a linear volume factor to dBFS gain.

    :param volume: Linear factor where 1.0 = unity gain.
    :return: Gain in dB (negative for volumes < 1.0).
    """
    return 20.0 * math.log10(max(volume, 0.0001))


def apply_volume(segment: AudioSegment, volume: float) -> AudioSegment:
    """Apply a linear volume factor to an AudioSegment.

    :param segment: Source AudioSegment.
    :param volume: Linear factor (1.0 leaves the segment unchanged).
    :return: New AudioSegment with adjusted volume.
    """
    return segment.apply_gain(db_from_linear(volume))


__all__ = ["db_from_linear", "apply_volume"]
