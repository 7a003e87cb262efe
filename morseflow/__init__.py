"""
Top-level package for morseflow.

morseflow translates text to Morse code and back, and renders code as
timed on/off pulses: a WAV tone, a blinking terminal block, exported
blink patterns (JSON, CSV, HTML, Arduino), an SVG image or a networked
Govee lamp.
All renderers share one timing engine, so they agree to the
millisecond.

Example usage::

    from morseflow import Translator, get_app_config

    # load configuration (honours MORSEFLOW_CONFIG)
    cfg = get_app_config()
    tr = Translator.from_config(cfg)

    code = tr.encode("SOS")        # '... --- ...'
    tr.decode(code)                # 'SOS'

    tr.set_output_directory("/tmp")
    tr.generate_audio_file("SOS", "sos.wav")
    tr.generate_blink_pattern("SOS", "sos.html")

The namespace re-exports only the high-level entry points.  For
lower-level functionality import from the subpackages (``morseflow.core``,
``morseflow.audio``, ``morseflow.patterns``, ``morseflow.visual``,
``morseflow.terminal`` or
``morseflow.connectors``).
"""

from .config import AppConfig, get_app_config, load_config  # noqa: F401
from .connectors import get_default_connector  # noqa: F401
from .core import (  # noqa: F401
    Codec,
    PulseEvent,
    PulseSequence,
    PulseState,
    SpeedConfig,
    TimingEngine,
    Translator,
    UnsupportedInputPolicy,
    create_pulse_sequence,
)
from .exceptions import (  # noqa: F401
    ConfigurationError,
    EmptyInputError,
    InvalidCharacterError,
    InvalidCodeError,
    InvalidCodeFormatError,
    InvalidCodeTokenError,
    TranslatorError,
)
from .audio.audio_engine import AudioEngine  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "get_app_config",
    "load_config",
    "get_default_connector",
    "Codec",
    "PulseEvent",
    "PulseSequence",
    "PulseState",
    "SpeedConfig",
    "TimingEngine",
    "Translator",
    "UnsupportedInputPolicy",
    "create_pulse_sequence",
    "AudioEngine",
    "TranslatorError",
    "EmptyInputError",
    "InvalidCharacterError",
    "InvalidCodeError",
    "InvalidCodeFormatError",
    "InvalidCodeTokenError",
    "ConfigurationError",
]
