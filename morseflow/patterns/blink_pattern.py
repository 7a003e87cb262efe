"""Blink pattern export.

:class:`BlinkPatternGenerator` writes the pulse timing of a code string
in formats meant for other players:

* a plain timing array (list of ``{"state", "duration"}`` dicts),
* JSON with the code, the timings and the speed settings,
* CSV (``index,state,duration_ms``),
* an Arduino sketch that blinks the on-board LED,
* a self-contained HTML page that plays the pattern with JavaScript.

All formats are derived from the same :class:`~morseflow.core.timing_engine.PulseSequence`,
so they agree with the audio and terminal renderers to the millisecond.
"""

from __future__ import annotations

import csv
import html
import json
import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..core.speed import SpeedConfig
from ..core.timing_engine import PulseSequence, create_pulse_sequence
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_RE_HEX = re.compile(r"#[0-9A-Fa-f]{3,6}")
_RE_RGB = re.compile(r"rgba?\(\s*\d{1,3}\s*,\s*\d{1,3}\s*,\s*\d{1,3}\s*(,\s*[0-9.]+)?\s*\)")

NAMED_COLORS = frozenset({
    "black", "white", "red", "green", "blue", "yellow", "cyan", "magenta",
    "gray", "grey", "orange", "purple", "brown", "pink", "lime", "navy",
})


def sanitize_color(color: str) -> str:
    """Return ``color`` if it is a safe CSS colour, otherwise ``#000000``."""
    if _RE_HEX.fullmatch(color) or _RE_RGB.fullmatch(color):
        return color
    if color.lower() in NAMED_COLORS:
        return color.lower()
    return "#000000"


class BlinkPatternGenerator:
    """Export pulse timings as JSON, CSV, HTML or Arduino code."""

    def __init__(self, speed: Optional[SpeedConfig] = None) -> None:
        self.speed = speed or SpeedConfig.default()
        self.light_color = "#FFFF00"
        self.background_color = "#000000"
        self.light_size = 200
        self.include_controls = True

    def set_speed(self, wpm: int) -> None:
        self.speed = self.speed.with_speed(wpm)

    def set_colors(self, light_color: str, background_color: str) -> None:
        self.light_color = light_color
        self.background_color = background_color

    def set_light_size(self, size: int) -> None:
        if size < 50 or size > 500:
            raise ConfigurationError("Light size must be between 50 and 500 pixels")
        self.light_size = size

    def set_include_controls(self, include: bool) -> None:
        self.include_controls = include

    # ------------------------------------------------------------------

    def pulses(self, code: str) -> PulseSequence:
        return create_pulse_sequence(code, self.speed)

    def export_timing_array(self, code: str) -> List[Dict[str, Union[str, int]]]:
        return self.pulses(code).as_dicts()

    def export_json(self, code: str, path: Union[str, os.PathLike]) -> Path:
        data = {
            "morse": code,
            "timings": self.export_timing_array(code),
            "settings": self.speed.as_settings(),
        }
        out = Path(path)
        out.write_text(json.dumps(data, indent=4), encoding="utf-8")
        logger.info("Wrote blink pattern JSON to %s", out)
        return out

    def export_csv(self, code: str, path: Union[str, os.PathLike]) -> Path:
        timings = self.export_timing_array(code)
        out = Path(path)
        with open(out, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(["index", "state", "duration_ms"])
            for index, timing in enumerate(timings):
                writer.writerow([index, timing["state"], timing["duration"]])
        logger.info("Wrote blink pattern CSV to %s", out)
        return out

    def generate_arduino_code(self, code: str) -> str:
        lines = [
            "// Morse Code Blink Pattern",
            "// Generated by morseflow",
            "",
            "const int LED_PIN = 13;",
            "",
            "void setup() {",
            "  pinMode(LED_PIN, OUTPUT);",
            "}",
            "",
            "void loop() {",
        ]
        for event in self.pulses(code):
            lines.append(f"  digitalWrite(LED_PIN, {'HIGH' if event.is_on else 'LOW'});")
            lines.append(f"  delay({event.duration_ms});")
        lines += [
            "",
            "  // Pause before repeating",
            "  delay(2000);",
            "}",
        ]
        return "\n".join(lines) + "\n"

    def generate_html(self, code: str, path: Union[str, os.PathLike], text: Optional[str] = None) -> Path:
        timings = self.export_timing_array(code)
        page = self._render_html(code, text, json.dumps(timings))
        out = Path(path)
        out.write_text(page, encoding="utf-8")
        logger.info("Wrote blink pattern HTML to %s", out)
        return out

    def generate(self, code: str, path: Union[str, os.PathLike], text: Optional[str] = None) -> Path:
        """Dispatch on the file extension: json, csv, html or htm."""
        extension = Path(path).suffix.lower().lstrip(".")
        if extension == "json":
            return self.export_json(code, path)
        if extension == "csv":
            return self.export_csv(code, path)
        if extension in ("html", "htm"):
            return self.generate_html(code, path, text)
        raise ConfigurationError(f"Unsupported file format: {extension}")

    # ------------------------------------------------------------------
    # HTML template
    # ------------------------------------------------------------------

    def _render_html(self, code: str, text: Optional[str], timing_json: str) -> str:
        title = html.escape(f"Morse Code: {text}" if text else "Morse Code Pattern")
        code_safe = html.escape(code)
        controls = _CONTROLS_HTML if self.include_controls else ""
        return _PAGE_TEMPLATE.format(
            title=title,
            code=code_safe,
            controls=controls,
            light_color=sanitize_color(self.light_color),
            background_color=sanitize_color(self.background_color),
            light_size=int(self.light_size),
            timings=timing_json,
        )


_CONTROLS_HTML = """    <div class="controls">
        <button id="playBtn">Play</button>
        <button id="stopBtn" disabled>Stop</button>
        <div class="speed-control">
            <label for="speedRange">Speed: </label>
            <input type="range" id="speedRange" min="0.5" max="3.0" step="0.1" value="1.0">
            <span id="speedDisplay">1.0x</span>
        </div>
    </div>"""

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{
            margin: 0;
            background-color: {background_color};
            color: white;
            font-family: Arial, sans-serif;
            display: flex;
            flex-direction: column;
            align-items: center;
            justify-content: center;
            min-height: 100vh;
        }}
        #light {{
            width: {light_size}px;
            height: {light_size}px;
            border-radius: 50%;
            background-color: #333;
            transition: background-color 0.1s;
            margin: 20px;
        }}
        #light.on {{
            background-color: {light_color};
            box-shadow: 0 0 100px {light_color};
        }}
        .info {{ text-align: center; margin: 20px; }}
        .morse-display {{ font-family: monospace; font-size: 24px; margin: 10px; }}
        button {{ padding: 10px 20px; margin: 5px; font-size: 16px; cursor: pointer; }}
    </style>
</head>
<body>
    <div class="info">
        <h1>{title}</h1>
        <div class="morse-display">{code}</div>
    </div>
    <div id="light"></div>
{controls}
    <script>
        const timings = {timings};
        let currentIndex = 0;
        let isPlaying = false;
        let timeoutId = null;
        let speedMultiplier = 1.0;

        const light = document.getElementById('light');
        const playBtn = document.getElementById('playBtn');
        const stopBtn = document.getElementById('stopBtn');
        const speedRange = document.getElementById('speedRange');
        const speedDisplay = document.getElementById('speedDisplay');

        function updateLight(isOn) {{
            light.classList.toggle('on', isOn);
        }}

        function playNext() {{
            if (!isPlaying) return;
            if (currentIndex >= timings.length) {{
                currentIndex = 0;
                updateLight(false);
                timeoutId = setTimeout(playNext, 2000 / speedMultiplier);
                return;
            }}
            const timing = timings[currentIndex++];
            updateLight(timing.state === 'on');
            timeoutId = setTimeout(playNext, timing.duration / speedMultiplier);
        }}

        function play() {{
            if (isPlaying) return;
            isPlaying = true;
            if (playBtn) playBtn.disabled = true;
            if (stopBtn) stopBtn.disabled = false;
            playNext();
        }}

        function stop() {{
            isPlaying = false;
            currentIndex = 0;
            if (timeoutId) {{ clearTimeout(timeoutId); timeoutId = null; }}
            updateLight(false);
            if (playBtn) playBtn.disabled = false;
            if (stopBtn) stopBtn.disabled = true;
        }}

        if (playBtn) {{
            playBtn.addEventListener('click', play);
            stopBtn.addEventListener('click', stop);
            speedRange.addEventListener('input', () => {{
                speedMultiplier = parseFloat(speedRange.value);
                speedDisplay.textContent = speedMultiplier.toFixed(1) + 'x';
            }});
            setTimeout(play, 1000);
        }} else {{
            isPlaying = true;
            setTimeout(playNext, 1000);
        }}
    </script>
</body>
</html>
"""


__all__ = ["BlinkPatternGenerator", "sanitize_color", "NAMED_COLORS"]
