"""
Audio rendering for morseflow.

:class:`AudioEngine` turns a pulse sequence into a sine-keyed tone:
raw PCM, a WAV file, a ``pydub.AudioSegment`` or blocking playback.
The optional debug file logger lives in ``audio_logger``; small pydub
helpers in ``utils``.

Note that exporting formats other than WAV relies on ``pydub`` and
``ffmpeg``.
"""

from .audio_engine import AudioEngine  # noqa: F401
from .audio_logger import attach_debug_log  # noqa: F401

__all__ = [
    "AudioEngine",
    "attach_debug_log",
]
