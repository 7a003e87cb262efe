"""Shared helpers for morseflow."""

from .paths import find_data_file  # noqa: F401

__all__ = ["find_data_file"]
