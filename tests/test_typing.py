import random

import pytest

from keystrider.lessons import HOME_ROW_CHARS, LESSON_CONTENT, LESSON_NOT_FOUND, LessonType
from keystrider.typing import (
    EASY_SENTENCES,
    HARD_SENTENCES,
    MEDIUM_SENTENCES,
    Difficulty,
    TestMode,
    TypingTest,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_test(seed=1):
    clock = FakeClock()
    test = TypingTest(rng=random.Random(seed), clock=clock)
    return test, clock


def words_of(sentences):
    return {word for sentence in sentences for word in sentence.split()}


def test_defaults():
    test, _ = make_test()
    assert test.difficulty == Difficulty.MEDIUM
    assert test.test_duration == 60
    assert test.test_mode == TestMode.STANDARD_TEST
    assert test.lesson_level == 1
    assert test.accuracy == 100.0
    assert test.wpm == 0.0
    assert test.progress == 0
    assert not test.is_complete


@pytest.mark.parametrize(
    "difficulty, pool",
    [
        (Difficulty.EASY, EASY_SENTENCES),
        (Difficulty.MEDIUM, MEDIUM_SENTENCES),
        (Difficulty.HARD, HARD_SENTENCES),
    ],
)
@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_standard_sample_text_uses_pool(difficulty, pool, seed):
    test, _ = make_test(seed)
    test.difficulty = difficulty
    text = test.sample_text
    assert 0 < len(text) <= 250
    assert set(text.split()) <= words_of(pool)
    assert any(text.startswith(sentence) for sentence in pool)


def test_perfect_typing_gives_full_accuracy():
    test, clock = make_test()
    test.start_test()
    test.on_text_changed(test.sample_text[:20])
    assert test.accuracy == 100.0
    assert test.correct_characters == 20
    assert test.total_characters == 20


def test_wpm_counts_whole_words_of_correct_characters():
    test, clock = make_test()
    test.start_test()
    clock.now = 30.0
    test.on_text_changed(test.sample_text[:50])
    assert test.wpm == pytest.approx(20.0)


def test_wpm_zero_when_no_time_passed():
    test, _ = make_test()
    test.start_test()
    test.on_text_changed(test.sample_text[:10])
    assert test.wpm == 0.0


def test_mistake_lowers_accuracy():
    test, _ = make_test()
    test.start_test()
    typed = test.sample_text[:9] + "#"
    test.on_text_changed(typed)
    assert test.correct_characters == 9
    assert test.accuracy == pytest.approx(90.0)


def test_empty_input_keeps_full_accuracy():
    test, _ = make_test()
    test.start_test()
    test.on_text_changed("")
    assert test.accuracy == 100.0
    assert test.total_characters == 0


def test_input_ignored_before_start():
    test, _ = make_test()
    test.on_text_changed("abc")
    assert test.total_characters == 0
    assert test.progress == 0


def test_typing_whole_sample_completes():
    test, _ = make_test()
    test.start_test()
    test.on_text_changed(test.sample_text)
    assert test.is_complete
    assert not test.is_active
    assert test.progress == 100
    test.on_text_changed("")
    assert test.total_characters == len(test.sample_text)


def test_progress_capped_at_hundred():
    test, _ = make_test()
    test.start_test()
    test.on_text_changed(test.sample_text + "xx")
    assert test.progress == 100


def test_timer_ends_test_at_duration():
    test, clock = make_test()
    test.test_duration = 15
    test.start_test()
    clock.now = 14.5
    test.update_timer()
    assert test.elapsed_time == 14
    assert not test.is_complete
    clock.now = 15.0
    test.update_timer()
    assert test.elapsed_time == 15
    assert test.is_complete


def test_timer_tick_before_start_does_nothing():
    test, _ = make_test()
    calls = []
    test.add_listener(lambda: calls.append(1))
    test.update_timer()
    assert calls == []
    assert test.elapsed_time == 0


def test_listeners_notified():
    test, _ = make_test()
    calls = []
    test.add_listener(lambda: calls.append(1))
    test.start_test()
    assert len(calls) == 2
    test.on_text_changed("a")
    assert len(calls) == 3


def test_reset_clears_statistics():
    test, clock = make_test()
    test.start_test()
    clock.now = 10.0
    test.on_text_changed(test.sample_text[:5] + "#")
    test.update_timer()
    test.reset_test()
    assert test.total_characters == 0
    assert test.correct_characters == 0
    assert test.accuracy == 100.0
    assert test.wpm == 0.0
    assert test.elapsed_time == 0
    assert not test.is_active


def test_lesson_level_is_clamped():
    test, _ = make_test()
    test.lesson_level = 9
    assert test.lesson_level == 5
    test.lesson_level = 0
    assert test.lesson_level == 1


def test_lesson_type_change_in_standard_mode_keeps_text():
    test, _ = make_test()
    before = test.sample_text
    test.lesson_type = LessonType.NUMBERS
    assert test.sample_text == before
    assert test.lesson_type == LessonType.NUMBERS


def test_lesson_mode_short_drill_falls_back_to_content():
    test, _ = make_test()
    test.test_mode = TestMode.LESSON_MODE
    text = test.sample_text
    assert 0 < len(text) <= 100
    allowed = set("".join(LESSON_CONTENT[LessonType.HOME_ROW])) | {" "}
    assert set(text) <= allowed


def test_lesson_mode_top_level_uses_character_drill():
    test, _ = make_test()
    test.test_mode = TestMode.LESSON_MODE
    test.lesson_level = 5
    text = test.sample_text
    assert len(text) >= 50
    assert len(text.replace(" ", "")) == 60
    assert set(text) <= set(HOME_ROW_CHARS) | {" "}


def test_lesson_mode_common_words_without_content():
    test, _ = make_test()
    test.test_mode = TestMode.LESSON_MODE
    test.lesson_type = LessonType.COMMON_WORDS
    assert test.sample_text == LESSON_NOT_FOUND


def test_switching_back_to_standard_mode():
    test, _ = make_test()
    test.test_mode = TestMode.LESSON_MODE
    test.test_mode = TestMode.STANDARD_TEST
    assert set(test.sample_text.split()) <= words_of(MEDIUM_SENTENCES)