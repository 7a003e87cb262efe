"""Charset validation for code strings.

Only the character set is checked; whether the tokens form known
codes is the codec's business.
"""

from __future__ import annotations

import re

from ..exceptions import EmptyInputError, InvalidCodeFormatError

CODE_ALPHABET = frozenset(".- /")

_RE_CODE = re.compile(r"[.\- /]+")


def is_valid_code(code: str) -> bool:
    """Return ``True`` iff ``code`` is non-empty and uses only ``. - / space``."""
    return bool(code) and _RE_CODE.fullmatch(code) is not None


def require_valid_code(code: str) -> str:
    """Trim ``code`` and enforce the code-string precondition.

    :raises EmptyInputError: if nothing is left after trimming.
    :raises InvalidCodeFormatError: if a character outside the
        signalling alphabet is present.
    :return: The trimmed code string.
    """
    trimmed = code.strip()
    if not trimmed:
        raise EmptyInputError("Morse code cannot be empty")
    if not is_valid_code(trimmed):
        raise InvalidCodeFormatError(trimmed)
    return trimmed


__all__ = ["CODE_ALPHABET", "is_valid_code", "require_valid_code"]
