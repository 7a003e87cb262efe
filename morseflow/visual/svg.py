"""SVG rendering of code strings.

:class:`SvgGenerator` draws a code string as rows of bars: a short bar
per dit, a bar three times as wide per dah, with the character's code
written underneath.  The layout is read off the same
:class:`~morseflow.core.timing_engine.PulseSequence` the other renderers
play, so gaps appear exactly where the timing puts them:

* an ``on`` pulse of one dit is a dot, any longer ``on`` pulse a dash,
* an ``off`` pulse of character spacing starts a new character,
* an ``off`` pulse of word spacing starts a new word,
* element spacing is already part of every bar's advance.

Rows wrap when the next item would cross ``max_width - padding``.

Example::

    from morseflow.visual import SvgGenerator

    svg = SvgGenerator().render("... --- ...", "SOS")
"""

from __future__ import annotations

import html
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from ..core.speed import SpeedConfig
from ..core.timing_engine import create_pulse_sequence
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

MARK = "mark"
CHAR_SPACE = "char_space"
WORD_SPACE = "word_space"

# Height reserved above the rows for the text label
LABEL_HEIGHT = 30


@dataclass(frozen=True)
class LayoutItem:
    """One drawable step: a mark (``symbol`` is ``.`` or ``-``) or a gap."""

    kind: str
    symbol: str = ""


def _rgb(color: Sequence[int]) -> RGB:
    if len(color) != 3 or any(c < 0 or c > 255 for c in color):
        raise ConfigurationError("Colors must be RGB triples with values between 0 and 255")
    return int(color[0]), int(color[1]), int(color[2])


def _fill(color: RGB) -> str:
    return "rgb({},{},{})".format(*color)


class SvgGenerator:
    """Lay out and draw code strings as SVG.

    :param speed: Speed used to classify pulses (20 WPM by default).
    """

    def __init__(self, speed: Optional[SpeedConfig] = None) -> None:
        self.speed = speed or SpeedConfig.default()
        self.dot_width = 20
        self.dash_width = 60
        self.element_height = 20
        self.element_spacing = 10
        self.character_spacing = 30
        self.word_spacing = 60
        self.padding = 20
        self.line_height = 40
        self.max_width = 800
        self.background_color: RGB = (255, 255, 255)
        self.element_color: RGB = (0, 0, 0)
        self.text_color: RGB = (128, 128, 128)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def set_speed(self, wpm: int) -> None:
        self.speed = self.speed.with_speed(wpm)

    def set_dot_width(self, width: int) -> None:
        """Set the dot width; dashes stay three times as wide."""
        if width < 5 or width > 100:
            raise ConfigurationError("Dot width must be between 5 and 100 pixels")
        self.dot_width = width
        self.dash_width = 3 * width

    def set_element_height(self, height: int) -> None:
        if height < 5 or height > 100:
            raise ConfigurationError("Element height must be between 5 and 100 pixels")
        self.element_height = height

    def set_spacing(self, element: int, character: int, word: int) -> None:
        if min(element, character, word) < 0:
            raise ConfigurationError("Spacing must not be negative")
        self.element_spacing = element
        self.character_spacing = character
        self.word_spacing = word

    def set_max_width(self, width: int) -> None:
        if width < 200:
            raise ConfigurationError("Maximum width must be at least 200 pixels")
        self.max_width = width

    def set_colors(self, background: Sequence[int], element: Sequence[int], text: Sequence[int]) -> None:
        self.background_color = _rgb(background)
        self.element_color = _rgb(element)
        self.text_color = _rgb(text)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def items(self, code: str) -> List[LayoutItem]:
        """Translate the pulses of ``code`` into marks and gaps."""
        speed = self.speed
        out: List[LayoutItem] = []
        for event in create_pulse_sequence(code, speed):
            if event.is_on:
                out.append(LayoutItem(MARK, "." if event.duration_ms == speed.dit_ms else "-"))
            elif event.duration_ms == speed.word_spacing_ms:
                out.append(LayoutItem(WORD_SPACE))
            elif event.duration_ms == speed.char_spacing_ms:
                out.append(LayoutItem(CHAR_SPACE))
        return out

    def item_width(self, item: LayoutItem) -> int:
        if item.kind == MARK:
            bar = self.dot_width if item.symbol == "." else self.dash_width
            return bar + self.element_spacing
        if item.kind == CHAR_SPACE:
            return self.character_spacing
        return self.word_spacing

    def layout(self, code: str) -> List[List[LayoutItem]]:
        """Split the items of ``code`` into rows no wider than ``max_width``.

        :raises EmptyInputError: if ``code`` is blank.
        :raises InvalidCodeFormatError: for characters outside
            ``. - / space``.
        """
        lines: List[List[LayoutItem]] = []
        current: List[LayoutItem] = []
        width = self.padding
        for item in self.items(code):
            item_width = self.item_width(item)
            if current and width + item_width > self.max_width - self.padding:
                lines.append(current)
                current = []
                width = self.padding
            current.append(item)
            width += item_width
        if current:
            lines.append(current)
        return lines

    def image_size(self, lines: List[List[LayoutItem]], text: Optional[str] = None) -> Tuple[int, int]:
        height = 2 * self.padding + len(lines) * self.line_height
        if text is not None:
            height += LABEL_HEIGHT
        return self.max_width, height

    # ------------------------------------------------------------------
    # SVG output
    # ------------------------------------------------------------------

    def render(self, code: str, text: Optional[str] = None) -> str:
        """Return the SVG document for ``code`` with an optional label."""
        lines = self.layout(code)
        width, height = self.image_size(lines, text)
        parts = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">',
            f'<rect width="{width}" height="{height}" fill="{_fill(self.background_color)}"/>',
        ]
        y = self.padding
        if text is not None:
            parts.append(
                f'<text x="{self.padding}" y="{y + 15}" font-family="Arial" font-size="14" '
                f'fill="{_fill(self.text_color)}">{html.escape(text)}</text>'
            )
            y += LABEL_HEIGHT
        for line in lines:
            parts.extend(self._render_line(line, y))
            y += self.line_height
        parts.append("</svg>")
        return "\n".join(parts)

    def _render_line(self, line: List[LayoutItem], y: int) -> List[str]:
        parts: List[str] = []
        bar_y = y + (self.line_height - self.element_height) // 2
        x = self.padding
        char_start = x
        symbols: List[str] = []

        def label() -> None:
            if symbols:
                label_x = char_start + (x - char_start - self.element_spacing) // 2
                parts.append(
                    f'<text x="{label_x}" y="{y + self.line_height - 5}" font-family="monospace" '
                    f'font-size="10" text-anchor="middle" fill="{_fill(self.text_color)}">'
                    f'{"".join(symbols)}</text>'
                )
                symbols.clear()

        for item in line:
            if item.kind == MARK:
                bar = self.dot_width if item.symbol == "." else self.dash_width
                parts.append(
                    f'<rect x="{x}" y="{bar_y}" width="{bar}" height="{self.element_height}" '
                    f'fill="{_fill(self.element_color)}"/>'
                )
                symbols.append(item.symbol)
                x += bar + self.element_spacing
            else:
                label()
                x += self.item_width(item)
                char_start = x
        label()
        return parts

    def generate_svg(self, code: str, path: Union[str, os.PathLike], text: Optional[str] = None) -> Path:
        out = Path(path)
        out.write_text(self.render(code, text), encoding="utf-8")
        logger.info("Wrote SVG to %s", out)
        return out

    def generate(self, code: str, path: Union[str, os.PathLike], text: Optional[str] = None) -> Path:
        """Write ``code`` to ``path``; only the ``svg`` extension is supported."""
        extension = Path(path).suffix.lower().lstrip(".")
        if extension != "svg":
            raise ConfigurationError(
                f"Unsupported image format: {extension}. Only svg output is available."
            )
        return self.generate_svg(code, path, text)


__all__ = ["SvgGenerator", "LayoutItem", "MARK", "CHAR_SPACE", "WORD_SPACE"]
