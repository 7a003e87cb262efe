"""High-level translator facade.

:class:`Translator` bundles the codec, the current speed and the
renderers behind one object:

* text ↔ code translation with a configurable unsupported-input policy,
* speed handling (one :class:`~morseflow.core.speed.SpeedConfig` that is
  handed to every renderer it creates),
* file output into a fixed output directory with sanitised filenames
  and a size limit,
* SVG images, terminal blinking and light control.

Example::

    from morseflow import Translator

    tr = Translator()
    tr.set_speed(15)
    tr.encode("SOS")                   # '... --- ...'
    tr.set_output_directory("/tmp")
    tr.generate_audio_file("SOS", "sos.wav")
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..exceptions import ConfigurationError
from .codec import Codec
from .policy import UnsupportedInputPolicy
from .speed import DEFAULT_WPM, SpeedConfig
from .timing_engine import PulseSequence, create_pulse_sequence

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024

_RE_SAFE_NAME = re.compile(r"[A-Za-z0-9._-]+")
_RE_EXECUTABLE = re.compile(r"\.(php|phtml|phar|py|sh)[0-9]*$", re.IGNORECASE)

AUDIO_OPTIONS = ("sample_rate", "frequency", "volume", "debug_log", "debug_log_path")


class Translator:
    """Translate text and drive the renderers at one shared speed.

    :param policy: Unsupported-input policy (``fail`` by default).
    :param speed: Initial speed (20 WPM by default).
    """

    def __init__(
        self,
        policy: Optional[UnsupportedInputPolicy] = None,
        speed: Optional[SpeedConfig] = None,
    ) -> None:
        self._codec = Codec(policy)
        self._speed = speed or SpeedConfig.default()
        self._output_dir: Optional[Path] = None
        self._max_file_size = DEFAULT_MAX_FILE_SIZE
        self._settings: Dict[str, Dict[str, Any]] = {}

    @classmethod
    def from_config(cls, config: Any) -> "Translator":
        """Build a translator from an :class:`~morseflow.config.AppConfig`."""
        section = config.section("translator")
        policy = UnsupportedInputPolicy.from_mode(
            section.get("unsupported_character_mode", "throw"),
            section.get("replacement_character", "?"),
        )
        tr = cls(policy, SpeedConfig.from_wpm(section.get("wpm", DEFAULT_WPM)))
        if "max_file_size" in section:
            tr.set_max_file_size(section["max_file_size"])
        for name in ("audio", "patterns", "visual", "terminal", "connector"):
            tr._settings[name] = config.section(name)
        return tr

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def speed(self) -> SpeedConfig:
        return self._speed

    @property
    def codec(self) -> Codec:
        return self._codec

    @property
    def policy(self) -> UnsupportedInputPolicy:
        return self._codec.policy

    def set_speed(self, wpm: int) -> None:
        """Switch to ``wpm``; on failure the previous speed stays in place."""
        self._speed = self._speed.with_speed(wpm)

    def set_unsupported_character_mode(self, mode: str) -> None:
        self._codec.policy = UnsupportedInputPolicy.from_mode(mode, self._codec.policy.replacement)

    def set_replacement_character(self, character: str) -> None:
        self._codec.policy = self._codec.policy.with_replacement(character)

    def set_output_directory(self, directory: Union[str, os.PathLike]) -> None:
        path = Path(directory)
        if not path.is_dir():
            raise ConfigurationError(f"Output directory does not exist: {directory}")
        if not os.access(path, os.W_OK):
            raise ConfigurationError(f"Output directory is not writable: {directory}")
        self._output_dir = path.resolve()

    def set_max_file_size(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int):
            raise ConfigurationError(f"Max file size must be an integer, got {size!r}")
        if size <= 0:
            raise ConfigurationError("Max file size must be greater than 0")
        self._max_file_size = size

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def encode(self, text: str) -> str:
        return self._codec.encode(text)

    def decode(self, code: str) -> str:
        return self._codec.decode(code)

    def character_code(self, character: str) -> Optional[str]:
        return self._codec.character_code(character)

    def code_map(self) -> Dict[str, str]:
        return self._codec.table.as_dict()

    def pulses(self, text: str) -> PulseSequence:
        """Encode ``text`` and time it at the current speed."""
        return create_pulse_sequence(self.encode(text), self._speed)

    # ------------------------------------------------------------------
    # File output
    # ------------------------------------------------------------------

    def _prepare_file_path(self, filename: str) -> Path:
        if self._output_dir is None:
            raise ConfigurationError(
                "Output directory must be set before generating files. "
                "Use set_output_directory()."
            )
        name = os.path.basename(filename)
        if not name or name in (".", ".."):
            raise ConfigurationError("Invalid filename provided")
        if not _RE_SAFE_NAME.fullmatch(name):
            raise ConfigurationError(
                "Filename contains invalid characters. Only alphanumeric, "
                "dots, dashes, and underscores are allowed."
            )
        if _RE_EXECUTABLE.search(name):
            raise ConfigurationError("Executable file extensions are not allowed")
        return self._output_dir / name

    def _check_file_size(self, estimated: int) -> None:
        if estimated > self._max_file_size:
            raise ConfigurationError(
                f"Estimated file size ({estimated / 1048576:.2f}MB) exceeds maximum "
                f"allowed size ({self._max_file_size / 1048576:.2f}MB). "
                "Use set_max_file_size() to increase the limit."
            )

    def generate_audio_file(self, text: str, filename: str, engine: Any = None) -> Path:
        """Encode ``text`` and write it as a WAV tone file."""
        from ..audio.audio_engine import AudioEngine

        if engine is None:
            opts = self._settings.get("audio", {})
            engine = AudioEngine(**{key: opts[key] for key in AUDIO_OPTIONS if key in opts})
        path = self._prepare_file_path(filename)
        pulses = self.pulses(text)
        self._check_file_size(engine.estimate_file_size(pulses))
        return engine.write_wav(pulses, path)

    def _pattern_generator(self) -> Any:
        from ..patterns.blink_pattern import BlinkPatternGenerator

        generator = BlinkPatternGenerator(self._speed)
        opts = self._settings.get("patterns", {})
        if "light_color" in opts or "background_color" in opts:
            generator.set_colors(
                opts.get("light_color", generator.light_color),
                opts.get("background_color", generator.background_color),
            )
        if "light_size" in opts:
            generator.set_light_size(int(opts["light_size"]))
        if "include_controls" in opts:
            generator.set_include_controls(bool(opts["include_controls"]))
        return generator

    def generate_blink_pattern(self, text: str, filename: str, generator: Any = None) -> Path:
        """Write the blink pattern as json, csv or html (chosen by extension)."""
        if generator is None:
            generator = self._pattern_generator()
        path = self._prepare_file_path(filename)
        return generator.generate(self.encode(text), path, text)

    def generate_visual_file(self, text: str, filename: str, generator: Any = None) -> Path:
        """Draw ``text`` as an SVG image of dots and dashes."""
        from ..visual.svg import SvgGenerator

        if generator is None:
            generator = SvgGenerator(self._speed)
            opts = self._settings.get("visual", {})
            if "dot_width" in opts:
                generator.set_dot_width(opts["dot_width"])
            if "element_height" in opts:
                generator.set_element_height(opts["element_height"])
            if "max_width" in opts:
                generator.set_max_width(opts["max_width"])
        path = self._prepare_file_path(filename)
        return generator.generate(self.encode(text), path, text)

    def export_blink_timings(self, text: str, fmt: str = "array") -> Union[List[Dict[str, Union[str, int]]], str]:
        """Return the timings as a list (``array``) or an Arduino sketch."""
        generator = self._pattern_generator()
        code = self.encode(text)
        if fmt == "array":
            return generator.export_timing_array(code)
        if fmt == "arduino":
            return generator.generate_arduino_code(code)
        raise ConfigurationError(f"Unsupported format: {fmt}")

    # ------------------------------------------------------------------
    # Live output
    # ------------------------------------------------------------------

    def blink_in_terminal(
        self,
        text: str,
        fullscreen: bool = False,
        repeats: int = 2,
        blinker: Any = None,
    ) -> None:
        from ..terminal.blinker import TerminalBlinker

        if blinker is None:
            blinker = TerminalBlinker(self._speed)
            opts = self._settings.get("terminal", {})
            if "on_symbol" in opts and "off_symbol" in opts:
                blinker.set_symbols(opts["on_symbol"], opts["off_symbol"])
            if "show_labels" in opts:
                blinker.set_show_labels(bool(opts["show_labels"]))
        code = self.encode(text)
        if fullscreen:
            blinker.blink_fullscreen(code, text, repeats)
        else:
            blinker.blink_inline(code, text)

    def blink_on_light(self, text: str, connector: Any = None) -> None:
        """Blink ``text`` on a networked lamp.

        Without an explicit connector one is built from the ``connector``
        config section and given the translator's speed.
        """
        from ..connectors import get_default_connector

        if connector is None:
            connector = get_default_connector(self._settings.get("connector"))
            connector.speed = self._speed
        connector.blink_morse_code(self.encode(text), text)


__all__ = ["Translator", "DEFAULT_MAX_FILE_SIZE"]
