"""ANSI terminal blinker."""

from .blinker import TerminalBlinker  # noqa: F401

__all__ = ["TerminalBlinker"]
