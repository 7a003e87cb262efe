"""Pulse timing for code strings.

This module turns a validated code string into the ordered list of
on/off pulses that every renderer consumes (tone synthesis, terminal
blinking, pattern export, light control).  Keeping the scan in one
place means all renderers agree on the exact same timing.

The scan walks the trimmed code string left to right with one
character of lookahead:

* ``.`` emits ``on(dit)``, ``-`` emits ``on(dah)``.  If the next
  character is another mark, ``off(element)`` follows; at the end of a
  character (next is space, ``/`` or the end) it does not.
* A space followed by ``/`` emits ``off(word)`` and consumes the whole
  ``" / "`` group, i.e. the scan index moves past the ``/`` *and* the
  character after it.
* Any other space emits ``off(char)``, unless the previous character
  was also a space.
* A bare ``/`` emits ``off(word)``.

Two ``off`` events in a row are possible for irregular input such as
``". / / ."``; they are emitted as-is.  :meth:`PulseSequence.has_consecutive_off`
lets callers detect that case.

Example::

    from morseflow.core import SpeedConfig, create_pulse_sequence

    pulses = create_pulse_sequence(".-", SpeedConfig.from_wpm(20))
    [p.as_dict() for p in pulses]
    # [{'state': 'on', 'duration': 60},
    #  {'state': 'off', 'duration': 60},
    #  {'state': 'on', 'duration': 180}]
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union, overload

from .speed import SpeedConfig
from .validation import require_valid_code


class PulseState(str, Enum):
    ON = "on"
    OFF = "off"


@dataclass(frozen=True)
class PulseEvent:
    """One signal state held for ``duration_ms`` milliseconds."""

    state: PulseState
    duration_ms: int

    @classmethod
    def on(cls, duration_ms: int) -> "PulseEvent":
        return cls(PulseState.ON, duration_ms)

    @classmethod
    def off(cls, duration_ms: int) -> "PulseEvent":
        return cls(PulseState.OFF, duration_ms)

    @property
    def is_on(self) -> bool:
        return self.state is PulseState.ON

    def as_dict(self) -> Dict[str, Union[str, int]]:
        return {"state": self.state.value, "duration": self.duration_ms}


class PulseSequence(Sequence):
    """Immutable, ordered collection of :class:`PulseEvent`."""

    def __init__(self, events: Iterable[PulseEvent] = ()) -> None:
        self._events: Tuple[PulseEvent, ...] = tuple(events)

    @overload
    def __getitem__(self, index: int) -> PulseEvent: ...

    @overload
    def __getitem__(self, index: slice) -> "PulseSequence": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return PulseSequence(self._events[index])
        return self._events[index]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[PulseEvent]:
        return iter(self._events)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PulseSequence):
            return self._events == other._events
        if isinstance(other, (list, tuple)):
            return list(self._events) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._events)

    def __repr__(self) -> str:
        return f"PulseSequence({list(self._events)!r})"

    @property
    def total_duration_ms(self) -> int:
        return sum(event.duration_ms for event in self._events)

    def as_dicts(self) -> List[Dict[str, Union[str, int]]]:
        """Wire shape: ``[{"state": "on"|"off", "duration": ms}, ...]``."""
        return [event.as_dict() for event in self._events]

    def has_consecutive_off(self) -> bool:
        return any(
            not a.is_on and not b.is_on
            for a, b in zip(self._events, self._events[1:])
        )


class TimingEngine:
    """Stateless scanner from code string to :class:`PulseSequence`."""

    def run(self, code: str, speed: SpeedConfig) -> PulseSequence:
        """Compute the pulse sequence for ``code`` at ``speed``.

        :raises EmptyInputError: if ``code`` is blank.
        :raises InvalidCodeFormatError: if ``code`` contains characters
            outside ``. - / space``.
        """
        code = require_valid_code(code)
        events: List[PulseEvent] = []
        n = len(code)
        i = 0
        while i < n:
            char = code[i]
            nxt = code[i + 1] if i + 1 < n else None

            if char == ".":
                events.append(PulseEvent.on(speed.dit_ms))
            elif char == "-":
                events.append(PulseEvent.on(speed.dah_ms))
            elif char == " ":
                if nxt == "/":
                    # " / " is one word gap; skip the slash and the space after it
                    events.append(PulseEvent.off(speed.word_spacing_ms))
                    i += 3
                    continue
                if i > 0 and code[i - 1] != " ":
                    events.append(PulseEvent.off(speed.char_spacing_ms))
            elif char == "/":
                events.append(PulseEvent.off(speed.word_spacing_ms))

            if char in ".-" and nxt is not None and nxt not in " /":
                events.append(PulseEvent.off(speed.element_spacing_ms))
            i += 1
        return PulseSequence(events)


_ENGINE = TimingEngine()


def create_pulse_sequence(code: str, speed: Optional[SpeedConfig] = None) -> PulseSequence:
    """Module-level shortcut for :meth:`TimingEngine.run` (default 20 WPM)."""
    return _ENGINE.run(code, speed or SpeedConfig.default())


def estimate_duration_ms(code: str, speed: Optional[SpeedConfig] = None) -> int:
    """Total playing time of ``code`` in milliseconds."""
    return create_pulse_sequence(code, speed).total_duration_ms


__all__ = [
    "PulseState",
    "PulseEvent",
    "PulseSequence",
    "TimingEngine",
    "create_pulse_sequence",
    "estimate_duration_ms",
]
