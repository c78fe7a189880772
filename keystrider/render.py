"""Text and HTML shown to the user while testing and afterwards."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from keystrider.statistics import TestResult, UserStats
from keystrider.theme import ThemeColors
from keystrider.typing import Difficulty

DIFFICULTY_NAMES = {
    Difficulty.EASY: "Easy",
    Difficulty.MEDIUM: "Medium",
    Difficulty.HARD: "Hard",
}

FALLBACK_CORRECT = ("#90EE90", "#000000")
FALLBACK_INCORRECT = ("#FFB6C1", "#8B0000")
FALLBACK_CURRENT = ("#87CEEB", "#000000")
FALLBACK_REMAINING = "#696969"

_OPEN = "<span style='font-family: monospace; font-size: 14px;'>"
_CLOSE = "</span>"


class StatLabels(NamedTuple):
    """The three live statistic labels."""

    wpm: str
    accuracy: str
    time: str


def _difficulty_name(difficulty: int) -> str:
    return DIFFICULTY_NAMES[Difficulty(difficulty)]


def _shown(ch: str) -> str:
    return "&nbsp;" if ch == " " else ch


def _highlight(background: str, foreground: str, ch: str) -> str:
    return f"<span style='background-color: {background}; color: {foreground};'>{_shown(ch)}</span>"


def render_progress_html(
    sample: str, typed: str, colors: ThemeColors | None = None
) -> str:
    """Sample text as HTML, marking typed characters right or wrong and the next one to type."""
    if colors is not None:
        text = colors.foreground.name()
        correct = (colors.correct_text.name(), text)
        incorrect = (colors.incorrect_text.name(), text)
        current = (colors.current_text.name(), text)
        remaining = colors.remaining_text.name()
    else:
        correct, incorrect, current = FALLBACK_CORRECT, FALLBACK_INCORRECT, FALLBACK_CURRENT
        remaining = FALLBACK_REMAINING

    parts = [_OPEN]
    for position, ch in enumerate(sample):
        if position < len(typed):
            background, foreground = correct if typed[position] == ch else incorrect
            parts.append(_highlight(background, foreground, ch))
        elif position == len(typed):
            parts.append(_highlight(*current, ch))
        else:
            parts.append(f"<span style='color: {remaining};'>{_shown(ch)}</span>")
    parts.append(_CLOSE)
    return "".join(parts)


def format_live_stats(wpm: float, accuracy: float, elapsed: int) -> StatLabels:
    """Labels for words per minute, accuracy and elapsed seconds."""
    return StatLabels(
        wpm=f"WPM: {wpm:g}",
        accuracy=f"Accuracy: {accuracy:.1f}%",
        time=f"Time: {elapsed}s",
    )


def format_results(wpm: float, accuracy: float, elapsed: int) -> str:
    """Summary shown when a test is finished."""
    return (
        f"Test Complete!\nFinal WPM: {wpm:g}\n"
        f"Accuracy: {accuracy:.1f}%\nTime: {elapsed}s"
    )


def format_ready_message(difficulty: int, duration: int) -> str:
    """Prompt shown before a standard test starts."""
    return (
        f"Click 'Start Test' to begin {_difficulty_name(difficulty)} "
        f"difficulty test ({duration} seconds)..."
    )


def format_lesson_ready_message(title: str, level: int, description: str) -> str:
    """Prompt shown before a lesson starts."""
    return f"Ready for {title} (Level {level})\n{description}\nClick 'Start Test' to begin..."


def format_user_stats(
    username: str, stats: UserStats, personal_bests: Iterable[TestResult]
) -> str:
    """Report of a user's totals followed by the best result per difficulty."""
    lines = [
        f"=== {username}'s Statistics ===\n\n"
        f"Total Tests: {stats.total_tests}\n"
        f"Average WPM: {stats.average_wpm:.1f}\n"
        f"Best WPM: {stats.best_wpm:.1f}\n"
        f"Average Accuracy: {stats.average_accuracy:.1f}%\n"
        f"Best Accuracy: {stats.best_accuracy:.1f}%\n"
        f"Total Time: {stats.total_time_spent // 60} minutes\n\n"
        "Personal Bests:\n"
    ]
    lines.extend(
        f"- {_difficulty_name(best.difficulty)}: {best.wpm:.1f} WPM "
        f"({best.accuracy:.1f}% accuracy)\n"
        for best in personal_bests
    )
    return "".join(lines)