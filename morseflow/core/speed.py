"""Speed-derived element durations.

All five durations follow from one number, the speed in words per
minute, using the PARIS convention of 50 dit units per word::

    dit      = floor(1200 / wpm)   milliseconds
    dah      = 3 × dit
    element  = 1 × dit   (gap between marks of one character)
    char     = 3 × dit   (gap between characters)
    word     = 7 × dit   (gap between words)

The dit is truncated, not rounded.  Speeds that do not divide 1200
therefore lose a fraction of a millisecond per dit; the loss is not
corrected so that outputs stay comparable with the reference values.

:class:`SpeedConfig` is immutable.  Changing speed means building a new
instance with :meth:`SpeedConfig.with_speed`; a failed validation never
produces a half-updated object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from ..exceptions import ConfigurationError

MIN_WPM = 5
MAX_WPM = 60
DEFAULT_WPM = 20


@dataclass(frozen=True)
class SpeedConfig:
    """The five element durations (ms) for one speed setting."""

    wpm: int
    dit_ms: int
    dah_ms: int
    element_spacing_ms: int
    char_spacing_ms: int
    word_spacing_ms: int

    def __post_init__(self) -> None:
        _check_wpm(self.wpm)
        dit = 1200 // self.wpm
        expected = (dit, 3 * dit, dit, 3 * dit, 7 * dit)
        actual = (
            self.dit_ms,
            self.dah_ms,
            self.element_spacing_ms,
            self.char_spacing_ms,
            self.word_spacing_ms,
        )
        if actual != expected:
            raise ConfigurationError(
                f"Durations {actual} do not match {self.wpm} WPM; use SpeedConfig.from_wpm()"
            )

    @classmethod
    def from_wpm(cls, wpm: int) -> "SpeedConfig":
        """Compute all durations for ``wpm``.

        :raises ConfigurationError: unless ``wpm`` is an integer in
            ``[5, 60]``.
        """
        _check_wpm(wpm)
        dit = 1200 // wpm
        return cls(
            wpm=wpm,
            dit_ms=dit,
            dah_ms=3 * dit,
            element_spacing_ms=dit,
            char_spacing_ms=3 * dit,
            word_spacing_ms=7 * dit,
        )

    @classmethod
    def default(cls) -> "SpeedConfig":
        return cls.from_wpm(DEFAULT_WPM)

    def with_speed(self, wpm: int) -> "SpeedConfig":
        """Return a new config for ``wpm``; ``self`` is left untouched."""
        return SpeedConfig.from_wpm(wpm)

    def as_settings(self) -> Dict[str, int]:
        """Durations keyed the way the export formats name them."""
        return {
            "dit_duration": self.dit_ms,
            "dah_duration": self.dah_ms,
            "element_spacing": self.element_spacing_ms,
            "character_spacing": self.char_spacing_ms,
            "word_spacing": self.word_spacing_ms,
        }


def _check_wpm(wpm: object) -> None:
    if isinstance(wpm, bool) or not isinstance(wpm, int):
        raise ConfigurationError(f"WPM must be an integer, got {wpm!r}")
    if wpm < MIN_WPM or wpm > MAX_WPM:
        raise ConfigurationError(f"WPM must be between {MIN_WPM} and {MAX_WPM}")


__all__ = ["SpeedConfig", "MIN_WPM", "MAX_WPM", "DEFAULT_WPM"]
