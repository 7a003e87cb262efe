"""Unsupported-input policy shared by encoding and decoding.

A policy decides what happens when a text character has no code
(encoding) or a code token has no character (decoding):

``fail``
    Raise immediately with the offending value.
``skip``
    Drop the value and continue with the next one.
``substitute``
    Emit a replacement.  When encoding, the *code* of the replacement
    character is emitted (nothing if the replacement itself has no
    code).  When decoding, the replacement character is emitted
    literally.

The policy never covers the charset precondition of a code string;
that check is always fatal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from ..exceptions import ConfigurationError


class PolicyKind(str, Enum):
    FAIL = "throw"
    SKIP = "skip"
    SUBSTITUTE = "replace"


DEFAULT_REPLACEMENT = "?"


@dataclass(frozen=True)
class UnsupportedInputPolicy:
    """Tagged variant: ``kind`` plus the replacement for ``SUBSTITUTE``."""

    kind: PolicyKind = PolicyKind.FAIL
    replacement: str = DEFAULT_REPLACEMENT

    def __post_init__(self) -> None:
        if not isinstance(self.replacement, str) or len(self.replacement) != 1:
            raise ConfigurationError("Replacement character must be exactly one character")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def fail(cls) -> "UnsupportedInputPolicy":
        return cls(PolicyKind.FAIL)

    @classmethod
    def skip(cls) -> "UnsupportedInputPolicy":
        return cls(PolicyKind.SKIP)

    @classmethod
    def substitute(cls, replacement: str = DEFAULT_REPLACEMENT) -> "UnsupportedInputPolicy":
        return cls(PolicyKind.SUBSTITUTE, replacement)

    @classmethod
    def from_mode(cls, mode: str, replacement: str = DEFAULT_REPLACEMENT) -> "UnsupportedInputPolicy":
        """Build a policy from a mode string (``throw``, ``skip`` or ``replace``).

        :raises ConfigurationError: for unknown modes or an invalid
            replacement character.
        """
        try:
            kind = PolicyKind(mode)
        except ValueError:
            raise ConfigurationError(
                f"Invalid unsupported character mode '{mode}'. "
                f"Valid modes are: {', '.join(valid_modes())}"
            ) from None
        return cls(kind, replacement)

    # ------------------------------------------------------------------

    def with_replacement(self, replacement: str) -> "UnsupportedInputPolicy":
        return UnsupportedInputPolicy(self.kind, replacement)

    @property
    def mode(self) -> str:
        return self.kind.value


def valid_modes() -> List[str]:
    return [kind.value for kind in PolicyKind]


__all__ = ["PolicyKind", "UnsupportedInputPolicy", "DEFAULT_REPLACEMENT", "valid_modes"]
