"""The typing trainer application and its console entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from keystrider.lessons import LessonManager, LessonType
from keystrider.render import (
    StatLabels,
    format_lesson_ready_message,
    format_live_stats,
    format_ready_message,
    format_results,
    format_user_stats,
    render_progress_html,
)
from keystrider.sound import SoundManager, SoundType
from keystrider.statistics import StatisticsError, StatisticsManager, TestResult
from keystrider.theme import ThemeManager
from keystrider.typing import Difficulty, TestMode, TypingTest

log = logging.getLogger(__name__)

GUEST = "Guest"
ACHIEVEMENT_ACCURACY = 95.0
RESET_LABELS = StatLabels("WPM: 0", "Accuracy: 100%", "Time: 0s")


class TypingApp:
    """Ties a typing test to lessons, sound, theme and stored statistics.

    The attributes mirror what a window shows: ``display`` is the sample-text
    panel, ``labels`` the live statistics, ``progress`` the progress bar.
    """

    def __init__(
        self,
        stats: StatisticsManager | None = None,
        lessons: LessonManager | None = None,
        sound: SoundManager | None = None,
        theme: ThemeManager | None = None,
        typing_test: TypingTest | None = None,
    ) -> None:
        self.stats = stats if stats is not None else StatisticsManager()
        self.lessons = lessons if lessons is not None else LessonManager()
        self.sound = sound if sound is not None else SoundManager()
        self.theme = theme if theme is not None else ThemeManager()
        self.typing_test = typing_test if typing_test is not None else TypingTest(self.lessons)

        self.current_user = GUEST
        self.input_text = ""
        self.input_enabled = False
        self.start_enabled = True
        self.progress = 0
        self.progress_visible = False
        self.lesson_controls_visible = self.typing_test.test_mode == TestMode.LESSON_MODE
        self.difficulty_visible = not self.lesson_controls_visible
        self.labels = RESET_LABELS
        self.display = ""
        self.style_sheet = ""
        self._last_input_length = 0

        self.typing_test.add_listener(self.update_stats)
        self.theme.add_listener(self._apply_current_theme)

        if GUEST not in self.stats.all_users():
            self.stats.create_user(GUEST)

        self._apply_current_theme()

    # -- test lifecycle ----------------------------------------------------

    def start_test(self) -> None:
        """Open the input and start timing a new test."""
        self.input_enabled = True
        self.input_text = ""
        self._last_input_length = 0
        self.start_enabled = False
        self.progress_visible = True
        self.sound.play_sound(SoundType.TEST_START)
        self.typing_test.start_test()
        self._update_text_display()

    def reset_test(self) -> None:
        """Stop any test and show what the next one will be."""
        self.input_text = ""
        self._last_input_length = 0
        self.input_enabled = False
        self.start_enabled = True
        self.progress_visible = False
        self.labels = RESET_LABELS

        self.typing_test.reset_test()

        if self.typing_test.test_mode == TestMode.LESSON_MODE:
            lesson_type = self.typing_test.lesson_type
            self.display = format_lesson_ready_message(
                self.lessons.lesson_title(lesson_type),
                self.typing_test.lesson_level,
                self.lessons.lesson_description(lesson_type),
            )
        else:
            self.display = format_ready_message(
                self.typing_test.difficulty, self.typing_test.test_duration
            )

    def type_text(self, text: str) -> None:
        """Replace the input with ``text``; ignored while the input is closed."""
        if not self.input_enabled:
            return
        self.input_text = text
        self.typing_test.on_text_changed(text)
        self._update_text_display()

    def update_stats(self) -> None:
        """Refresh the statistics; on completion store the result and show it."""
        test = self.typing_test
        self.labels = format_live_stats(test.wpm, test.accuracy, test.elapsed_time)
        self.progress = test.progress

        if not test.is_complete:
            return

        self.input_enabled = False
        self.start_enabled = True
        self.progress_visible = False

        result = TestResult(
            username=self.current_user,
            difficulty=int(test.difficulty),
            wpm=test.wpm,
            accuracy=test.accuracy,
            time_spent=test.elapsed_time,
            correct_characters=test.correct_characters,
            total_characters=test.total_characters,
        )
        try:
            self.stats.save_test_result(result)
        except (StatisticsError, ValueError) as exc:
            log.debug("Failed to save test result: %s", exc)

        if test.accuracy >= ACHIEVEMENT_ACCURACY:
            self.sound.play_sound(SoundType.ACHIEVEMENT)
        else:
            self.sound.play_sound(SoundType.TEST_COMPLETE)

        self.display = format_results(test.wpm, test.accuracy, test.elapsed_time)

    def _update_text_display(self) -> None:
        sample = self.typing_test.sample_text
        typed = self.input_text
        if not sample or not self.input_enabled:
            return

        if self._last_input_length < len(typed) <= len(sample):
            last = len(typed) - 1
            self.sound.play_keystroke_sound(typed[last] == sample[last])
        self._last_input_length = len(typed)

        self.display = render_progress_html(sample, typed, self.theme.colors)

    def _apply_current_theme(self) -> None:
        self.style_sheet = self.theme.generate_style_sheet()
        self._update_text_display()

    # -- settings ----------------------------------------------------------

    def set_difficulty(self, difficulty: Difficulty) -> None:
        self.typing_test.difficulty = difficulty
        if not self.input_enabled:
            self._update_text_display()

    def set_duration(self, seconds: int) -> None:
        self.typing_test.test_duration = seconds

    def set_mode(self, mode: TestMode) -> None:
        """Switch between standard tests and lessons."""
        self.typing_test.test_mode = mode
        lesson = self.typing_test.test_mode == TestMode.LESSON_MODE
        self.lesson_controls_visible = lesson
        self.difficulty_visible = not lesson
        if not self.input_enabled:
            self._update_text_display()

    def set_lesson(self, lesson_type: LessonType, level: int) -> None:
        """Choose the lesson and its level (held to 1..5)."""
        self.typing_test.lesson_type = lesson_type
        self.typing_test.lesson_level = level
        if not self.input_enabled:
            self._update_text_display()

    def set_sound_enabled(self, enabled: bool) -> None:
        """Turn sound on or off; turning it off also silences keystrokes."""
        self.sound.enabled = enabled
        if not enabled:
            self.sound.keystroke_sounds_enabled = False

    def set_user(self, name: str) -> None:
        """Switch to ``name`` (blank means the guest), creating the user if new."""
        new_user = name.strip() or GUEST
        if new_user == self.current_user:
            return
        self.current_user = new_user
        if not self.stats.user_exists(new_user):
            self.stats.create_user(new_user)

    def user_stats_text(self) -> str:
        """Statistics report for the current user."""
        user = self.current_user
        return format_user_stats(
            user, self.stats.user_stats(user), self.stats.personal_bests(user)
        )


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="keystrider", description="Typing speed test.")
    parser.add_argument("--user", default=GUEST, help="user to record results for")
    parser.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in Difficulty],
        default=Difficulty.MEDIUM.name.lower(),
    )
    parser.add_argument("--duration", type=int, default=60, help="test length in seconds")
    parser.add_argument(
        "--lesson",
        choices=[t.name.lower() for t in LessonType],
        help="practise a lesson instead of a standard test",
    )
    parser.add_argument("--level", type=int, default=1, help="lesson level, 1 to 5")
    parser.add_argument("--database", type=Path, help="statistics database file")
    parser.add_argument("--settings", type=Path, help="theme settings file")
    parser.add_argument("--stats", action="store_true", help="show the user's statistics")
    return parser


def _prompt(text: str) -> str | None:
    print(text, end="", flush=True)
    line = sys.stdin.readline()
    if not line:
        return None
    return line.rstrip("\n")


def main(argv: list[str] | None = None) -> int:
    """Run typing tests on the console until the user stops."""
    args = _parser().parse_args(argv)
    with StatisticsManager(args.database) as stats:
        theme = ThemeManager(args.settings)
        try:
            app = TypingApp(stats=stats, theme=theme)
            app.set_user(args.user)
            if args.stats:
                print(app.user_stats_text(), end="")
                return 0

            app.set_duration(args.duration)
            if args.lesson:
                app.set_mode(TestMode.LESSON_MODE)
                app.set_lesson(LessonType[args.lesson.upper()], args.level)
            else:
                app.set_difficulty(Difficulty[args.difficulty.upper()])

            while True:
                app.reset_test()
                print(app.display)
                if _prompt("Press Enter to start...") is None:
                    break
                app.start_test()
                print(app.typing_test.sample_text)
                line = _prompt("> ")
                if line is None:
                    break
                app.type_text(line)
                app.typing_test.update_timer()
                if app.typing_test.is_complete:
                    print(app.display)
                else:
                    print("\n".join(app.labels))
                answer = _prompt("Try again? (y/n): ")
                if answer is None or answer.strip().lower() != "y":
                    break
        finally:
            theme.save_settings()
    return 0