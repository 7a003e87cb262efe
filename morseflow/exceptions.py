"""Exception hierarchy for morseflow.

Every error raised by the codec, the timing engine and the renderers
derives from :class:`TranslatorError`, so callers can catch the whole
family with a single ``except`` clause.  The concrete classes carry the
offending value as attributes for precise diagnostics:

* :class:`EmptyInputError` – blank or whitespace-only text or code.
* :class:`InvalidCharacterError` – a text character without a code
  (only raised under the ``fail`` policy).
* :class:`InvalidCodeTokenError` – a well-formed but unknown code token
  (only raised under the ``fail`` policy).
* :class:`InvalidCodeFormatError` – a code string containing characters
  outside ``. - / space``.  Always fatal.
* :class:`ConfigurationError` – a parameter outside its valid range.
"""

from __future__ import annotations


class TranslatorError(Exception):
    """Base class for all morseflow errors."""


class EmptyInputError(TranslatorError):
    def __init__(self, message: str = "Input cannot be empty") -> None:
        super().__init__(message)


class InvalidCharacterError(TranslatorError):
    """Raised when text contains a character that has no code."""

    def __init__(self, character: str, position: int, message: str = "") -> None:
        self.character = character
        self.position = position
        if not message:
            message = (
                f"Invalid character '{character}' at position {position}. "
                "Character is not supported in Morse code."
            )
        super().__init__(message)


class InvalidCodeError(TranslatorError):
    """Common base for errors about a code string or code token."""

    def __init__(self, invalid_code: str, message: str = "") -> None:
        self.invalid_code = invalid_code
        if not message:
            message = (
                f"Invalid Morse code sequence '{invalid_code}'. Morse code should "
                "only contain dots (.), dashes (-), spaces, and forward slashes (/)."
            )
        super().__init__(message)


class InvalidCodeFormatError(InvalidCodeError):
    """The code string uses characters outside the signalling alphabet."""


class InvalidCodeTokenError(InvalidCodeError):
    """A token passed the charset check but maps to no character."""

    def __init__(self, token: str, message: str = "") -> None:
        super().__init__(token, message or f"Unknown Morse code sequence: '{token}'")

    @property
    def token(self) -> str:
        return self.invalid_code


class ConfigurationError(TranslatorError, ValueError):
    """A speed or renderer parameter is outside its valid range."""


__all__ = [
    "TranslatorError",
    "EmptyInputError",
    "InvalidCharacterError",
    "InvalidCodeError",
    "InvalidCodeFormatError",
    "InvalidCodeTokenError",
    "ConfigurationError",
]
