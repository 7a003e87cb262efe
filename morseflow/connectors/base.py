"""Base interface for light connectors.

A light connector drives a networked lamp through a pulse sequence:
``on`` pulses switch the lamp to the *on* colour, ``off`` pulses to the
*off* colour, and every state is held for the pulse duration.
Subclasses only implement the three primitive commands
(:meth:`~BaseLightConnector.turn`, :meth:`~BaseLightConnector.set_brightness_now`
and :meth:`~BaseLightConnector.set_color`); the blinking loop lives
here so that every device type follows the same timing.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..core.speed import SpeedConfig
from ..core.timing_engine import PulseEvent, create_pulse_sequence
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class DeviceNotSelectedError(RuntimeError):
    """Raised when a command is sent before a device was chosen."""


def _check_rgb(rgb: Sequence[int]) -> RGB:
    if len(rgb) != 3:
        raise ConfigurationError("Colors must be RGB triples with 3 values")
    for value in rgb:
        if value < 0 or value > 255:
            raise ConfigurationError("RGB values must be between 0 and 255")
    return int(rgb[0]), int(rgb[1]), int(rgb[2])


class BaseLightConnector:
    """Abstract base class for all light connectors."""

    def __init__(
        self,
        speed: Optional[SpeedConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.speed = speed or SpeedConfig.default()
        self.brightness = 100
        self.on_color: RGB = (255, 255, 0)
        self.off_color: RGB = (0, 0, 0)
        self.settle_delay = 0.5
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def set_speed(self, wpm: int) -> None:
        self.speed = self.speed.with_speed(wpm)

    def set_brightness(self, brightness: int) -> None:
        if brightness < 1 or brightness > 100:
            raise ConfigurationError("Brightness must be between 1 and 100")
        self.brightness = brightness

    def set_colors(self, on_color: Sequence[int], off_color: Sequence[int] = (0, 0, 0)) -> None:
        self.on_color = _check_rgb(on_color)
        self.off_color = _check_rgb(off_color)

    # ------------------------------------------------------------------
    # Device commands (implemented by subclasses)
    # ------------------------------------------------------------------

    def turn(self, on: bool) -> bool:
        raise NotImplementedError

    def set_brightness_now(self, brightness: int) -> bool:
        raise NotImplementedError

    def set_color(self, rgb: Sequence[int]) -> bool:
        raise NotImplementedError

    def ensure_ready(self) -> None:
        """Hook for subclasses: raise if the device cannot be addressed."""

    # ------------------------------------------------------------------
    # Blinking
    # ------------------------------------------------------------------

    def blink_pulses(self, pulses: Iterable[PulseEvent]) -> None:
        """Play ``pulses`` on the lamp, strictly in order."""
        self.turn(True)
        self.set_brightness_now(self.brightness)
        self.set_color(self.off_color)
        self._sleep(self.settle_delay)

        lit = False
        for event in pulses:
            if event.is_on != lit:
                lit = event.is_on
                self.set_color(self.on_color if lit else self.off_color)
            self._sleep(event.duration_ms / 1000.0)
        self.set_color(self.off_color)

    def blink_morse_code(self, code: str, text: Optional[str] = None) -> None:
        """Time ``code`` at the configured speed and blink it."""
        self.ensure_ready()
        pulses = create_pulse_sequence(code, self.speed)
        logger.info("Blinking %r (%d pulses, %d ms)", text or code.strip(), len(pulses), pulses.total_duration_ms)
        self.blink_pulses(pulses)

    def display(self, code: str, label: Optional[str] = None) -> None:
        self.blink_morse_code(code, label)


__all__ = ["BaseLightConnector", "DeviceNotSelectedError", "RGB"]
