"""Typing lessons: fixed drills, generated drills and progressive levels."""

from __future__ import annotations

import random
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Sequence


class LessonType(IntEnum):
    """Kinds of lesson, in the order they are offered."""

    HOME_ROW = 0
    TOP_ROW = 1
    BOTTOM_ROW = 2
    NUMBERS = 3
    PUNCTUATION = 4
    COMMON_WORDS = 5
    FINGER_SPECIFIC = 6
    BIGRAMS = 7
    TRIGRAMS = 8
    PROGRAMMING = 9


LESSON_NOT_FOUND = "Lesson type not found."
UNKNOWN_TITLE = "Unknown Lesson"
UNKNOWN_DESCRIPTION = "No description available."

HOME_ROW_CHARS = "asdfghjkl;"
TOP_ROW_CHARS = "qwertyuiop"
BOTTOM_ROW_CHARS = "zxcvbnm,./"
NUMBER_CHARS = "1234567890"
PUNCTUATION_CHARS = ".,;:!?'\""
PROGRAMMING_CHARS = "(){}[]<>=+-*/\\|&%$#@"

COMMON_WORDS: tuple[str, ...] = (
    "the", "and", "for", "are", "but", "not", "you", "all",
    "can", "had", "her", "was", "one", "our", "out", "day",
    "get", "has", "him", "his", "how", "man", "new", "now",
    "old", "see", "two", "way", "who", "boy", "did", "its",
    "let", "put", "say", "she", "too", "use", "what", "when",
    "where", "which", "with", "have", "this", "will", "your",
    "from", "they", "know", "want", "been", "good", "much",
    "some", "time", "very", "when", "come", "here", "just",
    "like", "long", "make", "many", "over", "such", "take",
    "than", "them", "well", "were",
)

COMMON_BIGRAMS: tuple[str, ...] = (
    "th", "he", "in", "er", "an", "re", "ed", "nd",
    "on", "en", "at", "ou", "it", "is", "or", "ti",
    "hi", "st", "ar", "ne", "ng", "al", "se", "to",
    "as", "de", "rt", "ve", "te", "es", "le", "nt",
)

COMMON_TRIGRAMS: tuple[str, ...] = (
    "the", "and", "ing", "her", "hat", "his", "tha",
    "ere", "for", "ent", "ion", "ter", "was", "you",
    "ith", "ver", "all", "wit", "thi", "tio", "end",
)

LESSON_TITLES: Mapping[LessonType, str] = MappingProxyType({
    LessonType.HOME_ROW: "Home Row Keys",
    LessonType.TOP_ROW: "Top Row Keys",
    LessonType.BOTTOM_ROW: "Bottom Row Keys",
    LessonType.NUMBERS: "Number Practice",
    LessonType.PUNCTUATION: "Punctuation Practice",
    LessonType.COMMON_WORDS: "Common Words",
    LessonType.FINGER_SPECIFIC: "Finger-Specific Training",
    LessonType.BIGRAMS: "Letter Pairs (Bigrams)",
    LessonType.TRIGRAMS: "Letter Combinations (Trigrams)",
    LessonType.PROGRAMMING: "Programming Characters",
})

LESSON_DESCRIPTIONS: Mapping[LessonType, str] = MappingProxyType({
    LessonType.HOME_ROW: "Practice the foundation keys: a s d f g h j k l ;",
    LessonType.TOP_ROW: "Master the top row: q w e r t y u i o p",
    LessonType.BOTTOM_ROW: "Learn the bottom row: z x c v b n m , . /",
    LessonType.NUMBERS: "Number typing practice: 1 2 3 4 5 6 7 8 9 0",
    LessonType.PUNCTUATION: "Common punctuation marks and symbols",
    LessonType.COMMON_WORDS: "Most frequently used English words",
    LessonType.FINGER_SPECIFIC: "Targeted exercises for each finger",
    LessonType.BIGRAMS: "Common two-letter combinations",
    LessonType.TRIGRAMS: "Common three-letter patterns",
    LessonType.PROGRAMMING: "Special characters used in programming",
})

LESSON_CONTENT: Mapping[LessonType, tuple[str, ...]] = MappingProxyType({
    LessonType.HOME_ROW: (
        "asdf", "jkl;", "fjfj", "dkdk", "slsl", "a;a;",
        "asdf jkl;", "fjdk slgh", "asdfjkl;", "glad", "hall",
        "fall", "ask", "flask", "glass", "fast", "last",
    ),
    LessonType.TOP_ROW: (
        "qwer", "tyui", "op", "quip", "tire", "wire",
        "quit", "were", "power", "tower", "quote", "write",
        "quite", "poetry", "typewriter", "query", "worry",
    ),
    LessonType.BOTTOM_ROW: (
        "zxcv", "bnm", ",./", "zoom", "next", "come",
        "move", "bronze", "complex", "maximum", "examine",
        "example", "mixture", "boxing", "frozen", "dozen",
    ),
    LessonType.NUMBERS: (
        "123", "456", "789", "0", "12345", "67890",
        "1234567890", "123 456 789", "1 2 3 4 5", "6 7 8 9 0",
    ),
    LessonType.PUNCTUATION: (
        ".,;", ":!?", "'\"", "Hello, world!", "Yes; no.",
        "What? Why!", 'I said, "Hello."', "Can't you see?",
        "It's great!", "Time: 3:30", "Cost: $10.50",
    ),
    LessonType.PROGRAMMING: (
        "()", "{}", "[]", "<>", "=+", "-*", "/\\",
        "|&", "%$", "#@", "if (x == y)", "array[i]",
        "function() {}", "x += y;", "return true;",
        "#include <stdio.h>", "var x = 10;", 'print("hello");',
    ),
})

_ROW_DRILLS: Mapping[LessonType, tuple[str, ...]] = MappingProxyType({
    LessonType.HOME_ROW: ("asdf", "asdfgh", "asdfghjk", "asdfghjkl", HOME_ROW_CHARS),
    LessonType.TOP_ROW: ("qwer", "qwerty", "qwertyui", "qwertyuio", TOP_ROW_CHARS),
    LessonType.BOTTOM_ROW: ("zxcv", "zxcvbn", "zxcvbnm", "zxcvbnm,", BOTTOM_ROW_CHARS),
})


def _head(items: Sequence[str], count: int) -> Sequence[str]:
    """First ``count`` items; a negative count means all of them."""
    return items if count < 0 else items[:count]


class LessonManager:
    """Builds lesson texts from fixed content and random drills."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def lesson_text(self, lesson_type: LessonType, length: int = 50) -> str:
        """Random elements of the lesson's content, joined with spaces, at most ``length`` long."""
        content = LESSON_CONTENT.get(lesson_type)
        if content is None:
            return LESSON_NOT_FOUND
        return self._format_lesson(content, length)

    def lesson_title(self, lesson_type: LessonType) -> str:
        return LESSON_TITLES.get(lesson_type, UNKNOWN_TITLE)

    def lesson_description(self, lesson_type: LessonType) -> str:
        return LESSON_DESCRIPTIONS.get(lesson_type, UNKNOWN_DESCRIPTION)

    def all_lesson_types(self) -> list[LessonType]:
        return list(LessonType)

    def progressive_lesson(self, lesson_type: LessonType, level: int) -> str:
        """Lesson text whose length and character set grow with ``level`` (1 to 5)."""
        base_length = 20 + (level - 1) * 10
        drills = _ROW_DRILLS.get(lesson_type)
        if drills is not None:
            if 1 <= level <= len(drills):
                return self.character_drill(drills[level - 1], base_length)
            return self.lesson_text(lesson_type, base_length)
        if lesson_type == LessonType.COMMON_WORDS:
            return self.word_drill(_head(COMMON_WORDS, level * 10), int(base_length / 4))
        if lesson_type == LessonType.BIGRAMS:
            return self.bigram_drill(_head(COMMON_BIGRAMS, level * 5), base_length)
        return self.lesson_text(lesson_type, base_length)

    def character_drill(self, characters: str, length: int = 30) -> str:
        """``length`` random characters from ``characters``, with a space after every fourth."""
        if length > 0 and not characters:
            raise ValueError("character drill needs at least one character")
        parts: list[str] = []
        for i in range(length):
            parts.append(self._rng.choice(characters))
            if i > 0 and i % 4 == 0 and i < length - 1:
                parts.append(" ")
        return "".join(parts)

    def word_drill(self, words: Sequence[str], count: int = 10) -> str:
        """``count`` random words from ``words`` joined by spaces."""
        if count > 0 and not words:
            raise ValueError("word drill needs at least one word")
        return " ".join(self._rng.choice(words) for _ in range(count))

    def bigram_drill(self, bigrams: Sequence[str], length: int = 40) -> str:
        """Random bigrams separated by spaces until the text reaches ``length``."""
        if length > 0 and not bigrams:
            raise ValueError("bigram drill needs at least one bigram")
        result = ""
        while len(result) < length:
            result += self._rng.choice(bigrams) + " "
        return result.strip()

    def _format_lesson(self, elements: Sequence[str], total_length: int) -> str:
        pieces: list[str] = []
        current = 0
        while current < total_length and elements:
            element = self._rng.choice(elements)
            if current + len(element) + 1 > total_length:
                break
            if pieces:
                current += 1
            pieces.append(element)
            current += len(element)
        return " ".join(pieces)