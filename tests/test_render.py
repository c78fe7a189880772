import pytest

from keystrider.render import (
    FALLBACK_CORRECT,
    FALLBACK_CURRENT,
    FALLBACK_INCORRECT,
    FALLBACK_REMAINING,
    format_lesson_ready_message,
    format_live_stats,
    format_ready_message,
    format_results,
    format_user_stats,
    render_progress_html,
)
from keystrider.statistics import TestResult, UserStats
from keystrider.theme import DARK_COLORS, LIGHT_COLORS
from keystrider.typing import Difficulty


def test_html_is_wrapped_in_monospace_span():
    html = render_progress_html("abc", "", LIGHT_COLORS)
    assert html.startswith("<span style='font-family: monospace; font-size: 14px;'>")
    assert html.endswith("</span>")


def test_one_span_per_sample_character():
    sample = "hello world"
    html = render_progress_html(sample, "hel", LIGHT_COLORS)
    assert html.count("<span") == len(sample) + 1


def test_correct_incorrect_current_and_remaining_colors():
    c = LIGHT_COLORS
    html = render_progress_html("abcd", "ax", c)
    fg = c.foreground.name()
    assert f"<span style='background-color: {c.correct_text.name()}; color: {fg};'>a</span>" in html
    assert f"<span style='background-color: {c.incorrect_text.name()}; color: {fg};'>b</span>" in html
    assert f"<span style='background-color: {c.current_text.name()}; color: {fg};'>c</span>" in html
    assert f"<span style='color: {c.remaining_text.name()};'>d</span>" in html


def test_wrong_character_shows_sample_character():
    html = render_progress_html("a", "z", DARK_COLORS)
    assert ">a</span>" in html
    assert ">z</span>" not in html


def test_spaces_become_nbsp():
    html = render_progress_html("a b", "", LIGHT_COLORS)
    assert "&nbsp;" in html
    assert "> </span>" not in html


def test_fallback_colors_without_theme():
    html = render_progress_html("abcd", "ax", None)
    assert f"background-color: {FALLBACK_CORRECT[0]}; color: {FALLBACK_CORRECT[1]};'>a" in html
    assert f"background-color: {FALLBACK_INCORRECT[0]}; color: {FALLBACK_INCORRECT[1]};'>b" in html
    assert f"background-color: {FALLBACK_CURRENT[0]}; color: {FALLBACK_CURRENT[1]};'>c" in html
    assert f"color: {FALLBACK_REMAINING};'>d" in html
    assert FALLBACK_REMAINING == "#696969"


def test_typed_beyond_sample_has_no_current_marker():
    c = LIGHT_COLORS
    html = render_progress_html("ab", "abc", c)
    assert c.current_text.name() not in html
    assert html.count("<span") == 3


def test_live_stats_initial_values():
    labels = format_live_stats(0.0, 100.0, 0)
    assert labels.wpm == "WPM: 0"
    assert labels.accuracy == "Accuracy: 100.0%"
    assert labels.time == "Time: 0s"


def test_live_stats_accuracy_one_decimal():
    labels = format_live_stats(42.0, 87.25, 12)
    assert labels.accuracy.startswith("Accuracy: ")
    assert labels.accuracy.endswith("%")
    assert labels.time == "Time: 12s"
    assert labels.wpm == "WPM: 42"


def test_results_text():
    text = format_results(30.0, 95.0, 45)
    assert text.splitlines() == [
        "Test Complete!",
        "Final WPM: 30",
        "Accuracy: 95.0%",
        "Time: 45s",
    ]


@pytest.mark.parametrize(
    "difficulty, name",
    [(Difficulty.EASY, "Easy"), (Difficulty.MEDIUM, "Medium"), (Difficulty.HARD, "Hard")],
)
def test_ready_message(difficulty, name):
    assert format_ready_message(difficulty, 60) == (
        f"Click 'Start Test' to begin {name} difficulty test (60 seconds)..."
    )


def test_ready_message_rejects_unknown_difficulty():
    with pytest.raises(ValueError):
        format_ready_message(7, 60)


def test_lesson_ready_message():
    text = format_lesson_ready_message("Home Row Keys", 3, "Practice the foundation keys")
    assert text == (
        "Ready for Home Row Keys (Level 3)\n"
        "Practice the foundation keys\n"
        "Click 'Start Test' to begin..."
    )


def test_user_stats_report():
    stats = UserStats(
        username="alice",
        total_tests=4,
        average_wpm=40.0,
        best_wpm=55.5,
        average_accuracy=90.0,
        best_accuracy=99.0,
        total_time_spent=125,
    )
    bests = [
        TestResult(username="alice", difficulty=0, wpm=55.5, accuracy=99.0),
        TestResult(username="alice", difficulty=2, wpm=30.0, accuracy=85.0),
    ]
    text = format_user_stats("alice", stats, bests)
    assert text.startswith("=== alice's Statistics ===\n\n")
    assert "Total Tests: 4\n" in text
    assert "Best WPM: 55.5\n" in text
    assert "Total Time: 2 minutes\n" in text
    assert text.endswith(
        "Personal Bests:\n"
        "- Easy: 55.5 WPM (99.0% accuracy)\n"
        "- Hard: 30.0 WPM (85.0% accuracy)\n"
    )


def test_user_stats_without_bests_ends_with_heading():
    text = format_user_stats("bob", UserStats(username="bob"), [])
    assert text.endswith("Personal Bests:\n")
    assert "Total Tests: 0\n" in text
    assert "Average WPM: 0.0\n" in text