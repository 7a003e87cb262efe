"""
Core translation logic for morseflow.

This subpackage holds everything that does not touch a device or a
file: the symbol table, the unsupported-input policy, the codec, the
speed model and the timing engine that turns a code string into a
:class:`PulseSequence`.  :class:`Translator` ties these together and
hands the pulses to the renderers.

Example::

    from morseflow.core import Codec, SpeedConfig, create_pulse_sequence

    code = Codec().encode("Hi")                       # '.... ..'
    pulses = create_pulse_sequence(code, SpeedConfig.from_wpm(15))
    pulses.total_duration_ms
"""

# Public API of the core package
from .codec import Codec, WORD_BOUNDARY  # noqa: F401
from .policy import PolicyKind, UnsupportedInputPolicy  # noqa: F401
from .speed import DEFAULT_WPM, MAX_WPM, MIN_WPM, SpeedConfig  # noqa: F401
from .symbol_table import SYMBOL_TABLE, SymbolTable  # noqa: F401
from .timing_engine import (  # noqa: F401
    PulseEvent,
    PulseSequence,
    PulseState,
    TimingEngine,
    create_pulse_sequence,
    estimate_duration_ms,
)
from .translator import Translator  # noqa: F401
from .validation import is_valid_code, require_valid_code  # noqa: F401

__all__ = [
    "Codec",
    "WORD_BOUNDARY",
    "PolicyKind",
    "UnsupportedInputPolicy",
    "SpeedConfig",
    "MIN_WPM",
    "MAX_WPM",
    "DEFAULT_WPM",
    "SymbolTable",
    "SYMBOL_TABLE",
    "PulseEvent",
    "PulseSequence",
    "PulseState",
    "TimingEngine",
    "create_pulse_sequence",
    "estimate_duration_ms",
    "Translator",
    "is_valid_code",
    "require_valid_code",
]
