"""Text ↔ code translation.

:class:`Codec` combines the :data:`~morseflow.core.symbol_table.SYMBOL_TABLE`
with an :class:`~morseflow.core.policy.UnsupportedInputPolicy`.  Both
directions consult the same policy object, so ``skip`` and
``substitute`` behave identically whichever way the text flows.

Example::

    from morseflow.core import Codec, UnsupportedInputPolicy

    codec = Codec()
    codec.encode("Hello World")
    # '.... . .-.. .-.. --- / .-- --- .-. .-.. -..'

    Codec(UnsupportedInputPolicy.substitute("?")).decode(".... . ...... .-.. .-.. ---")
    # 'HE?LLO'
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..exceptions import (
    ConfigurationError,
    EmptyInputError,
    InvalidCharacterError,
    InvalidCodeFormatError,
    InvalidCodeTokenError,
)
from .policy import PolicyKind, UnsupportedInputPolicy
from .symbol_table import SYMBOL_TABLE, SymbolTable
from .validation import is_valid_code

logger = logging.getLogger(__name__)

_RE_WS = re.compile(r"\s+")

# Word boundaries inside a code string are spelled with surrounding spaces.
WORD_BOUNDARY = " / "


class Codec:
    """Bidirectional translator between text and code strings.

    :param policy: How to treat unsupported input.  Defaults to
        :meth:`UnsupportedInputPolicy.fail`.
    :param table: Symbol table to use; the built-in table by default.
    """

    def __init__(
        self,
        policy: Optional[UnsupportedInputPolicy] = None,
        table: SymbolTable = SYMBOL_TABLE,
    ) -> None:
        self._policy = policy or UnsupportedInputPolicy.fail()
        self._table = table

    @property
    def policy(self) -> UnsupportedInputPolicy:
        return self._policy

    @policy.setter
    def policy(self, policy: UnsupportedInputPolicy) -> None:
        self._policy = policy

    @property
    def table(self) -> SymbolTable:
        return self._table

    # ------------------------------------------------------------------
    # Text → code
    # ------------------------------------------------------------------

    def encode(self, text: str) -> str:
        """Translate ``text`` into a code string.

        Characters are translated one by one and joined with single
        spaces; a space in the text becomes the ``/`` token, so word
        boundaries come out as ``" / "``.

        :raises EmptyInputError: if ``text`` is blank.
        :raises InvalidCharacterError: for an unsupported character
            under the ``fail`` policy.
        """
        if not text.strip():
            raise EmptyInputError("Text to translate cannot be empty")

        policy = self._policy
        codes: List[str] = []
        for index, char in enumerate(text):
            code = self._table.lookup(char)
            if code is not None:
                codes.append(code)
                continue
            if policy.kind is PolicyKind.FAIL:
                raise InvalidCharacterError(char, index)
            if policy.kind is PolicyKind.SKIP:
                logger.debug("Skipping unsupported character %r at %d", char, index)
                continue
            replacement = self._table.lookup(policy.replacement)
            logger.debug("Substituting %r at %d with %r", char, index, policy.replacement)
            if replacement is not None:
                codes.append(replacement)
        return " ".join(codes)

    # ------------------------------------------------------------------
    # Code → text
    # ------------------------------------------------------------------

    def decode(self, code: str) -> str:
        """Translate a code string back into uppercase text.

        Whitespace runs are collapsed first.  The charset check is a
        hard precondition and is not subject to the policy; the policy
        only applies to tokens that are well formed but unknown.

        :raises EmptyInputError: if ``code`` is blank.
        :raises InvalidCodeFormatError: for characters outside
            ``. - / space``.
        :raises InvalidCodeTokenError: for an unknown token under the
            ``fail`` policy.
        """
        collapsed = _RE_WS.sub(" ", code).strip()
        if not collapsed:
            raise EmptyInputError("Morse code to translate cannot be empty")
        if not is_valid_code(collapsed):
            raise InvalidCodeFormatError(collapsed)

        policy = self._policy
        out: List[str] = []
        for word_index, word in enumerate(collapsed.split(WORD_BOUNDARY)):
            if word_index > 0:
                out.append(" ")
            for token in word.strip().split(" "):
                if not token:
                    continue
                char = self._table.reverse_lookup(token)
                if char is not None:
                    out.append(char)
                    continue
                if policy.kind is PolicyKind.FAIL:
                    raise InvalidCodeTokenError(token)
                if policy.kind is PolicyKind.SKIP:
                    logger.debug("Skipping unknown code token %r", token)
                    continue
                out.append(policy.replacement)
        return "".join(out)

    # ------------------------------------------------------------------

    def character_code(self, character: str) -> Optional[str]:
        """Return the code of a single character, or ``None`` if unsupported.

        :raises EmptyInputError: if ``character`` is empty.
        :raises ConfigurationError: if more than one character is given.
        """
        if not character:
            raise EmptyInputError("Character cannot be empty")
        if len(character) > 1:
            raise ConfigurationError("Only single characters are allowed")
        return self._table.lookup(character)


__all__ = ["Codec", "WORD_BOUNDARY"]
