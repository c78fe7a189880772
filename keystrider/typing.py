"""A timed typing test: sample text, live statistics and completion."""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping

from keystrider.lessons import LessonManager, LessonType


class Difficulty(IntEnum):
    EASY = 0
    MEDIUM = 1
    HARD = 2


class TestMode(IntEnum):
    __test__ = False  # keep pytest from collecting this enum

    STANDARD_TEST = 0
    LESSON_MODE = 1


EASY_SENTENCES: tuple[str, ...] = (
    "The cat sat on the mat.",
    "I like to eat pizza.",
    "The sun is bright today.",
    "Dogs are good pets.",
    "She went to the store.",
    "We play games at home.",
    "The book is on the table.",
    "He likes to read books.",
    "The car is red and fast.",
    "They live in a big house.",
    "Water is good for you.",
    "The bird can fly high.",
    "I want to go home now.",
    "The tree has green leaves.",
    "She has a nice smile.",
)

MEDIUM_SENTENCES: tuple[str, ...] = (
    "The quick brown fox jumps over the lazy dog.",
    "A journey of a thousand miles begins with a single step.",
    "To be or not to be, that is the question.",
    "All that glitters is not gold.",
    "The early bird catches the worm.",
    "Actions speak louder than words.",
    "Better late than never.",
    "Don't count your chickens before they hatch.",
    "Every cloud has a silver lining.",
    "Fortune favors the bold.",
    "Good things come to those who wait.",
    "Haste makes waste.",
    "If at first you don't succeed, try, try again.",
    "Knowledge is power.",
    "Laughter is the best medicine.",
    "Make hay while the sun shines.",
    "No pain, no gain.",
    "Opportunity knocks but once.",
    "Practice makes perfect.",
    "Rome wasn't built in a day.",
)

HARD_SENTENCES: tuple[str, ...] = (
    "The implementation of polymorphism requires understanding inheritance hierarchies.",
    "Asynchronous programming paradigms utilize event-driven architectures effectively.",
    "Quantum entanglement demonstrates non-local correlations between particles.",
    "The algorithm's time complexity exhibits exponential growth characteristics.",
    "Microservices architecture facilitates scalable distributed system design.",
    "Cryptographic hash functions ensure data integrity and authenticity.",
    "Machine learning algorithms optimize parameters through gradient descent.",
    "Blockchain technology implements decentralized consensus mechanisms.",
    "Neuroplasticity enables synaptic reorganization throughout human development.",
    "Bioinformatics algorithms analyze genomic sequences for pattern recognition.",
    "Electromagnetic radiation propagates through vacuum at light speed.",
    "Thermodynamic equilibrium requires energy conservation across system boundaries.",
    "Pharmaceutical compounds undergo rigorous clinical trial protocols.",
    "Semiconductor fabrication utilizes photolithography for circuit patterning.",
    "Epidemiological studies investigate disease transmission patterns statistically.",
)

SENTENCES: Mapping[Difficulty, tuple[str, ...]] = MappingProxyType({
    Difficulty.EASY: EASY_SENTENCES,
    Difficulty.MEDIUM: MEDIUM_SENTENCES,
    Difficulty.HARD: HARD_SENTENCES,
})

CHARS_PER_WORD = 5
STANDARD_MIN_LENGTH = 200
STANDARD_MAX_LENGTH = 250
LESSON_MIN_LENGTH = 50
LESSON_FALLBACK_LENGTH = 100
MIN_LESSON_LEVEL = 1
MAX_LESSON_LEVEL = 5


class TypingTest:
    """State of one typing test, driven by input changes and timer ticks."""

    __test__ = False  # keep pytest from collecting this class

    def __init__(
        self,
        lessons: LessonManager | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._lessons = lessons if lessons is not None else LessonManager(self._rng)
        self._clock = clock if clock is not None else time.monotonic
        self._listeners: list[Callable[[], None]] = []

        self._started_at: float | None = None
        self._sample_text = ""
        self._input = ""
        self._correct = 0
        self._total = 0
        self._active = False
        self._complete = False
        self._wpm = 0.0
        self._accuracy = 100.0
        self._elapsed = 0

        self._difficulty = Difficulty.MEDIUM
        self._duration = 60
        self._mode = TestMode.STANDARD_TEST
        self._lesson_type = LessonType.HOME_ROW
        self._lesson_level = 1

        self._generate_sample_text()

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` whenever the statistics change."""
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in self._listeners:
            callback()

    # -- lifecycle ---------------------------------------------------------

    def start_test(self) -> None:
        """Reset, then start timing."""
        self.reset_test()
        self._active = True
        self._complete = False
        self._started_at = self._clock()
        self._notify()

    def reset_test(self) -> None:
        """Stop the test, clear statistics and pick new sample text."""
        self._active = False
        self._complete = False
        self._started_at = None
        self._correct = 0
        self._total = 0
        self._wpm = 0.0
        self._accuracy = 100.0
        self._elapsed = 0
        self._input = ""
        self._generate_sample_text()
        self._notify()

    def on_text_changed(self, text: str) -> None:
        """Take the whole current input; ignored unless a test is running."""
        if not self._active or self._complete:
            return
        self._input = text
        self._calculate_stats()
        if len(self._input) >= len(self._sample_text):
            self._finish()
        self._notify()

    def update_timer(self) -> None:
        """Timer tick: refresh elapsed time and end the test when time is up."""
        if not self._active:
            return
        self._elapsed = self._elapsed_ms() // 1000
        if self._elapsed >= self._duration:
            self._finish()
        self._calculate_stats()
        self._notify()

    def _finish(self) -> None:
        self._complete = True
        self._active = False

    def _elapsed_ms(self) -> int:
        if self._started_at is None:
            return 0
        return int((self._clock() - self._started_at) * 1000)

    def _calculate_stats(self) -> None:
        self._total = len(self._input)
        self._correct = sum(a == b for a, b in zip(self._input, self._sample_text))
        if self._total > 0:
            self._accuracy = self._correct / self._total * 100.0
        else:
            self._accuracy = 100.0
        minutes = self._elapsed_ms() / 60000.0
        if minutes > 0:
            self._wpm = (self._correct // CHARS_PER_WORD) / minutes
        else:
            self._wpm = 0.0
        if self._wpm < 0:
            self._wpm = 0.0

    # -- sample text -------------------------------------------------------

    def _generate_sample_text(self) -> None:
        if self._mode == TestMode.LESSON_MODE:
            text = self._lessons.progressive_lesson(self._lesson_type, self._lesson_level)
            if len(text) < LESSON_MIN_LENGTH:
                text = self._lessons.lesson_text(self._lesson_type, LESSON_FALLBACK_LENGTH)
            self._sample_text = text
            return

        pool = SENTENCES[self._difficulty]
        text = ""
        while len(text) < STANDARD_MIN_LENGTH:
            if text:
                text += " "
            text += self._rng.choice(pool)
        if len(text) > STANDARD_MAX_LENGTH:
            last_space = text.rfind(" ", 0, STANDARD_MAX_LENGTH + 1)
            if last_space > 0:
                text = text[:last_space]
        self._sample_text = text

    @property
    def sample_text(self) -> str:
        return self._sample_text

    # -- settings ----------------------------------------------------------

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, level: Difficulty) -> None:
        self._difficulty = Difficulty(level)
        self._generate_sample_text()

    @property
    def test_duration(self) -> int:
        """Test length in seconds."""
        return self._duration

    @test_duration.setter
    def test_duration(self, seconds: int) -> None:
        self._duration = int(seconds)

    @property
    def test_mode(self) -> TestMode:
        return self._mode

    @test_mode.setter
    def test_mode(self, mode: TestMode) -> None:
        self._mode = TestMode(mode)
        self._generate_sample_text()

    @property
    def lesson_type(self) -> LessonType:
        return self._lesson_type

    @lesson_type.setter
    def lesson_type(self, lesson_type: LessonType) -> None:
        self._lesson_type = LessonType(lesson_type)
        if self._mode == TestMode.LESSON_MODE:
            self._generate_sample_text()

    @property
    def lesson_level(self) -> int:
        return self._lesson_level

    @lesson_level.setter
    def lesson_level(self, level: int) -> None:
        self._lesson_level = min(max(int(level), MIN_LESSON_LEVEL), MAX_LESSON_LEVEL)
        if self._mode == TestMode.LESSON_MODE:
            self._generate_sample_text()

    # -- statistics --------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def wpm(self) -> float:
        return self._wpm

    @property
    def accuracy(self) -> float:
        return self._accuracy

    @property
    def elapsed_time(self) -> int:
        """Whole seconds since the start, as of the last timer tick."""
        return self._elapsed

    @property
    def progress(self) -> int:
        """Percentage of the sample text typed, capped at 100."""
        if not self._sample_text:
            return 0
        return min(len(self._input) * 100 // len(self._sample_text), 100)

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def correct_characters(self) -> int:
        return self._correct

    @property
    def total_characters(self) -> int:
        return self._total