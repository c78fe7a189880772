"""Audio feedback described as beeps handed to a sink."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

log = logging.getLogger(__name__)


class SoundType(IntEnum):
    KEYSTROKE_CORRECT = 0
    KEYSTROKE_INCORRECT = 1
    TEST_START = 2
    TEST_COMPLETE = 3
    LEVEL_UP = 4
    ACHIEVEMENT = 5
    TICK = 6
    WARNING = 7


@dataclass(frozen=True)
class Beep:
    """A tone of ``frequency`` Hz lasting ``duration`` ms, starting ``delay`` ms from now."""

    frequency: int
    duration: int
    delay: int = 0


_SEQUENCES: dict[SoundType, tuple[Beep, ...]] = {
    SoundType.KEYSTROKE_CORRECT: (Beep(800, 50),),
    SoundType.KEYSTROKE_INCORRECT: (Beep(300, 100),),
    SoundType.TEST_START: (Beep(660, 200),),
    SoundType.TEST_COMPLETE: (Beep(880, 300),),
    SoundType.LEVEL_UP: (Beep(440, 100, 0), Beep(550, 100, 100), Beep(660, 150, 200)),
    SoundType.ACHIEVEMENT: (
        Beep(880, 100, 0),
        Beep(1100, 100, 100),
        Beep(880, 100, 200),
        Beep(1320, 200, 300),
    ),
    SoundType.TICK: (Beep(1000, 30),),
    SoundType.WARNING: (Beep(220, 150),),
}

_KEYSTROKES = frozenset({SoundType.KEYSTROKE_CORRECT, SoundType.KEYSTROKE_INCORRECT})


def _log_beep(beep: Beep) -> None:
    log.debug("Beep: %d Hz for %d ms", beep.frequency, beep.duration)


class SoundManager:
    """Turns sound events into beeps, honouring the enabled flags and volume."""

    def __init__(self, sink: Callable[[Beep], None] | None = None) -> None:
        self._sink = sink if sink is not None else _log_beep
        self._enabled = True
        self._keystroke_sounds_enabled = False
        self._volume = 0.5

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = bool(value)

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = min(max(float(value), 0.0), 1.0)

    @property
    def keystroke_sounds_enabled(self) -> bool:
        return self._keystroke_sounds_enabled

    @keystroke_sounds_enabled.setter
    def keystroke_sounds_enabled(self, value: bool) -> None:
        self._keystroke_sounds_enabled = bool(value)

    def play_sound(self, sound_type: SoundType) -> tuple[Beep, ...]:
        """Play the beeps for ``sound_type`` and return them; nothing plays when muted."""
        if not self._enabled:
            return ()
        if sound_type in _KEYSTROKES and not self._keystroke_sounds_enabled:
            return ()
        beeps = _SEQUENCES[SoundType(sound_type)]
        for beep in beeps:
            self._sink(beep)
        return beeps

    def play_keystroke_sound(self, correct: bool = True) -> tuple[Beep, ...]:
        kind = SoundType.KEYSTROKE_CORRECT if correct else SoundType.KEYSTROKE_INCORRECT
        return self.play_sound(kind)

    def generate_beep(self, frequency: int, duration: int) -> Beep:
        """Emit a single beep straight away."""
        beep = Beep(frequency, duration)
        self._sink(beep)
        return beep