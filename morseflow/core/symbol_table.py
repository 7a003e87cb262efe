"""Static character ↔ code mapping.

The table covers the 26 Latin letters, the ten digits, the usual ITU
punctuation set and the space character, which maps to the word
separator token ``/``.  Lookups are case-insensitive on the character
side: :meth:`SymbolTable.lookup` uppercases its argument before
consulting the table.

The reverse direction is the exact inverse of the forward mapping.
Since no two characters share a code, the inverse is unique as well
(including ``"/" -> " "``).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

# ── Forward mapping ─────────────────────────────────────────────────
# Order matters only for display: ``as_dict`` preserves it.

_CODES: Dict[str, str] = {
    "A": ".-",      "B": "-...",    "C": "-.-.",    "D": "-..",
    "E": ".",       "F": "..-.",    "G": "--.",     "H": "....",
    "I": "..",      "J": ".---",    "K": "-.-",     "L": ".-..",
    "M": "--",      "N": "-.",      "O": "---",     "P": ".--.",
    "Q": "--.-",    "R": ".-.",     "S": "...",     "T": "-",
    "U": "..-",     "V": "...-",    "W": ".--",     "X": "-..-",
    "Y": "-.--",    "Z": "--..",
    "0": "-----",   "1": ".----",   "2": "..---",   "3": "...--",
    "4": "....-",   "5": ".....",   "6": "-....",   "7": "--...",
    "8": "---..",   "9": "----.",
    ".": ".-.-.-",  ",": "--..--",  "?": "..--..",  "'": ".----.",
    "!": "-.-.--",  "/": "-..-.",   "(": "-.--.",   ")": "-.--.-",
    "&": ".-...",   ":": "---...",  ";": "-.-.-.",  "=": "-...-",
    "+": ".-.-.",   "-": "-....-",  "_": "..--.-",  '"': ".-..-.",
    "$": "...-..-", "@": ".--.-.",
    " ": "/",
}

WORD_SEPARATOR = "/"


class SymbolTable:
    """Immutable bidirectional lookup between characters and codes."""

    def __init__(self, codes: Mapping[str, str]) -> None:
        forward = dict(codes)
        reverse = {code: char for char, code in forward.items()}
        if len(reverse) != len(forward):
            raise ValueError("Symbol table contains duplicate codes")
        self._forward: Mapping[str, str] = MappingProxyType(forward)
        self._reverse: Mapping[str, str] = MappingProxyType(reverse)

    def lookup(self, char: str) -> Optional[str]:
        """Return the code for ``char`` (any case) or ``None``."""
        return self._forward.get(char.upper())

    def reverse_lookup(self, token: str) -> Optional[str]:
        """Return the character for a code token or ``None``."""
        return self._reverse.get(token)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._forward)

    def __contains__(self, char: object) -> bool:
        return isinstance(char, str) and char.upper() in self._forward

    def __len__(self) -> int:
        return len(self._forward)

    def __iter__(self) -> Iterator[str]:
        return iter(self._forward)


SYMBOL_TABLE = SymbolTable(_CODES)

__all__ = ["SymbolTable", "SYMBOL_TABLE", "WORD_SEPARATOR"]
