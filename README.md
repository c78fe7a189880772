# keystrider

A typing speed test and keyboard trainer for the terminal. It offers timed
tests at three difficulty levels and lessons that grow step by step (home row,
top row, bottom row, numbers, punctuation, common words, letter pairs,
programming symbols and more). Results are kept per user in a local SQLite
database. Colour themes (light, dark, high contrast, custom) and font settings
are stored in a JSON settings file.

## Installation

```
pip install keystrider
```

To run the test suite as well:

```
pip install "keystrider[test]"
pytest
```

## Running the trainer

```
keystrider
```

Each round goes like this:

1. A ready message names the difficulty and duration, or the lesson and level.
2. Press Enter. The sample text is printed and timing starts.
3. Type the text on one line and press Enter.
4. If the line is as long as the sample, or the time is up, the test is over:
   the final WPM, accuracy and time are shown and the result is saved for the
   current user. Otherwise the current WPM, accuracy and time are shown.
5. Answer `y` to go again; anything else ends the session.

Options:

- `--user NAME`: the user results are recorded for (default `Guest`; a new
  name creates the user)
- `--difficulty {easy,medium,hard}`: difficulty of a standard test (default
  `medium`)
- `--duration SECONDS`: test length (default 60)
- `--lesson TYPE`: practise a lesson instead of a standard test; one of
  `home_row`, `top_row`, `bottom_row`, `numbers`, `punctuation`,
  `common_words`, `finger_specific`, `bigrams`, `trigrams`, `programming`
- `--level N`: lesson level, held to 1 to 5 (default 1)
- `--database PATH`: statistics database file
- `--settings PATH`: theme settings file
- `--stats`: print the user's statistics and personal bests, then exit

By default the database is `typing_stats.db` in the per-user data directory,
and the theme settings are `themes.json` in the per-user configuration
directory. The settings file is written when the session ends.

## How results are measured

- **Accuracy** is the share of typed characters that match the sample at the
  same position. It is 100% before anything is typed.
- **WPM** counts each whole five correct characters as one word and divides by
  the elapsed minutes.
- A test ends when the typed text is as long as the sample, or when the elapsed
  whole seconds reach the chosen duration.

## Using it as a library

Lesson drills:

```python
import random
from keystrider.lessons import LessonManager, LessonType

lessons = LessonManager(random.Random(7))
print(lessons.lesson_title(LessonType.HOME_ROW))
print(lessons.progressive_lesson(LessonType.HOME_ROW, 3))
```

A typing test with your own clock:

```python
from keystrider.typing import TypingTest

now = [0.0]
test = TypingTest(clock=lambda: now[0])
test.start_test()
now[0] = 30.0
test.on_text_changed(test.sample_text[:50])
print(test.wpm, test.accuracy, test.progress)
```

Keeping statistics:

```python
from keystrider.statistics import StatisticsManager, TestResult

with StatisticsManager("stats.db") as stats:
    stats.create_user("alice")
    stats.save_test_result(TestResult(username="alice", wpm=42.0, accuracy=97.5))
    print(stats.all_users())
    print(stats.user_stats("alice"))
```

Database failures raise `StatisticsError`; an empty user name raises
`ValueError`.

The modules are:

- `keystrider.typing`: `TypingTest`, with `Difficulty` and `TestMode`
- `keystrider.lessons`: `LessonManager` and `LessonType`
- `keystrider.statistics`: `StatisticsManager`, `TestResult`, `UserStats`,
  `StatisticsError` and `default_database_path`
- `keystrider.theme`: `ThemeManager`, `ThemeType`, `ThemeColors`, `FontSize`,
  `Color` and `default_settings_path`
- `keystrider.sound`: `SoundManager`, `SoundType` and `Beep`
- `keystrider.render`: text and HTML formatting of progress, prompts and results
- `keystrider.app`: `TypingApp`, which connects all of the above, and `main`,
  the console entry point

## What it does not do

- There is no graphical window. `ThemeManager.generate_style_sheet` and
  `render_progress_html` produce a style sheet and coloured HTML, but nothing in
  the package displays them; the console session prints plain text.
- No sound is played. `SoundManager` describes each sound as `Beep` values and
  hands them to a callable you supply; by default they are only logged.
- The console reads a whole line at a time, so there is no live per-keystroke
  feedback while typing.