"""Blink pattern export (JSON, CSV, HTML, Arduino)."""

from .blink_pattern import BlinkPatternGenerator, sanitize_color  # noqa: F401

__all__ = ["BlinkPatternGenerator", "sanitize_color"]
