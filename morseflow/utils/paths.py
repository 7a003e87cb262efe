"""Utility functions for locating data files.

Rather than hard-coding relative paths, :func:`find_data_file`
searches a few standard locations: the current working directory of
the process, the repository root, the package directory and the utils
directory itself.  This keeps lookups working whether morseflow runs
from a checkout, an editable install or a regular wheel install.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


def _candidate_locations(filename: str) -> Iterable[Path]:
    """Yield candidate locations for a data file.

    The order of locations is:
    1. Current working directory.
    2. Repository root (two levels above this file).
    3. Package directory (one level above this file).
    4. utils directory (the directory containing this module).
    """
    here = Path(__file__).resolve()
    yield Path.cwd() / filename
    yield here.parents[2] / filename
    yield here.parents[1] / filename
    yield here.parent / filename


def find_data_file(filename: str) -> Path:
    """Locate a data file by searching standard locations.

    Returns the first existing path from the candidate locations.
    Raises FileNotFoundError if the file is not found.
    """
    for candidate in _candidate_locations(filename):
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(f"Could not find data file '{filename}'. Tried: "
                            f"{', '.join(str(p) for p in _candidate_locations(filename))}")


__all__ = ["find_data_file"]
