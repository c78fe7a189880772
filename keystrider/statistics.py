"""Persistent typing-test results and per-user statistics in SQLite."""

from __future__ import annotations

import logging
import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from platformdirs import user_data_dir

log = logging.getLogger(__name__)

DATABASE_FILE = "typing_stats.db"
APP_NAME = "keystrider"

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT UNIQUE NOT NULL,
        created_date DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS test_results (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT NOT NULL,
        timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
        difficulty INTEGER NOT NULL,
        wpm REAL NOT NULL,
        accuracy REAL NOT NULL,
        time_spent INTEGER NOT NULL,
        correct_characters INTEGER NOT NULL,
        total_characters INTEGER NOT NULL,
        FOREIGN KEY (username) REFERENCES users(username)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_username ON test_results(username)",
    "CREATE INDEX IF NOT EXISTS idx_timestamp ON test_results(timestamp)",
    "CREATE INDEX IF NOT EXISTS idx_difficulty ON test_results(difficulty)",
)

_RESULT_COLUMNS = (
    "id, username, timestamp, difficulty, wpm, accuracy, "
    "time_spent, correct_characters, total_characters"
)


class StatisticsError(Exception):
    """A database operation on the statistics store failed."""


@dataclass
class TestResult:
    """One finished test. ``difficulty`` is 0 for easy, 1 for medium, 2 for hard."""

    __test__ = False  # keep pytest from collecting this class

    username: str = ""
    difficulty: int = 1
    wpm: float = 0.0
    accuracy: float = 0.0
    time_spent: int = 0
    correct_characters: int = 0
    total_characters: int = 0
    timestamp: datetime | None = None
    id: int = -1


@dataclass
class UserStats:
    """Totals and bests over all of a user's tests."""

    username: str
    total_tests: int = 0
    average_wpm: float = 0.0
    best_wpm: float = 0.0
    average_accuracy: float = 0.0
    best_accuracy: float = 0.0
    total_time_spent: int = 0
    last_test_date: datetime | None = None


def default_database_path() -> Path:
    """Location of the database in the user's data directory, created if missing."""
    directory = Path(user_data_dir(APP_NAME))
    directory.mkdir(parents=True, exist_ok=True)
    return directory / DATABASE_FILE


def _parse_timestamp(value: object) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def _row_to_result(row: sqlite3.Row) -> TestResult:
    return TestResult(
        id=int(row["id"]),
        username=str(row["username"]),
        timestamp=_parse_timestamp(row["timestamp"]),
        difficulty=int(row["difficulty"]),
        wpm=float(row["wpm"]),
        accuracy=float(row["accuracy"]),
        time_spent=int(row["time_spent"]),
        correct_characters=int(row["correct_characters"]),
        total_characters=int(row["total_characters"]),
    )


@contextmanager
def _errors(action: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as exc:
        log.debug("Error %s: %s", action, exc)
        raise StatisticsError(f"error {action}: {exc}") from exc


class StatisticsManager:
    """Stores users and test results and answers questions about them."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = path if path is not None else default_database_path()
        with _errors("opening database"):
            self._conn = sqlite3.connect(self.path)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                for statement in _SCHEMA:
                    self._conn.execute(statement)

    def __enter__(self) -> StatisticsManager:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    # -- users -------------------------------------------------------------

    def create_user(self, username: str) -> bool:
        """Add ``username``; False if it already exists."""
        if not username:
            raise ValueError("username must not be empty")
        if self.user_exists(username):
            return False
        with _errors("creating user"), self._conn:
            self._conn.execute("INSERT INTO users (username) VALUES (?)", (username,))
        return True

    def all_users(self) -> list[str]:
        with _errors("listing users"):
            rows = self._conn.execute("SELECT username FROM users ORDER BY username")
            return [str(row[0]) for row in rows]

    def user_exists(self, username: str) -> bool:
        with _errors("looking up user"):
            row = self._conn.execute(
                "SELECT COUNT(*) FROM users WHERE username = ?", (username,)
            ).fetchone()
        return row[0] > 0

    # -- results -----------------------------------------------------------

    def save_test_result(self, result: TestResult) -> None:
        """Store ``result``, creating its user first if needed."""
        if not result.username:
            raise ValueError("test result needs a username")
        if not self.user_exists(result.username):
            self.create_user(result.username)
        with _errors("saving test result"), self._conn:
            self._conn.execute(
                """
                INSERT INTO test_results
                (username, difficulty, wpm, accuracy, time_spent,
                 correct_characters, total_characters)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    result.username,
                    int(result.difficulty),
                    float(result.wpm),
                    float(result.accuracy),
                    int(result.time_spent),
                    int(result.correct_characters),
                    int(result.total_characters),
                ),
            )

    def _results(self, action: str, sql: str, params: tuple[object, ...]) -> list[TestResult]:
        with _errors(action):
            return [_row_to_result(row) for row in self._conn.execute(sql, params)]

    def test_history(self, username: str, limit: int = 50) -> list[TestResult]:
        """Newest results of ``username`` first, at most ``limit`` of them."""
        return self._results(
            "reading test history",
            f"""
            SELECT {_RESULT_COLUMNS} FROM test_results
            WHERE username = ?
            ORDER BY timestamp DESC, id DESC
            LIMIT ?
            """,
            (username, limit),
        )

    def test_history_by_difficulty(
        self, username: str, difficulty: int, limit: int = 50
    ) -> list[TestResult]:
        """Like :meth:`test_history`, restricted to one difficulty."""
        return self._results(
            "reading test history",
            f"""
            SELECT {_RESULT_COLUMNS} FROM test_results
            WHERE username = ? AND difficulty = ?
            ORDER BY timestamp DESC, id DESC
            LIMIT ?
            """,
            (username, int(difficulty), limit),
        )

    # -- statistics --------------------------------------------------------

    def user_stats(self, username: str) -> UserStats:
        with _errors("reading user statistics"):
            row = self._conn.execute(
                """
                SELECT COUNT(*), AVG(wpm), MAX(wpm), AVG(accuracy),
                       MAX(accuracy), SUM(time_spent), MAX(timestamp)
                FROM test_results
                WHERE username = ?
                """,
                (username,),
            ).fetchone()
        total, avg_wpm, best_wpm, avg_acc, best_acc, total_time, last = row
        return UserStats(
            username=username,
            total_tests=int(total or 0),
            average_wpm=float(avg_wpm or 0.0),
            best_wpm=float(best_wpm or 0.0),
            average_accuracy=float(avg_acc or 0.0),
            best_accuracy=float(best_acc or 0.0),
            total_time_spent=int(total_time or 0),
            last_test_date=_parse_timestamp(last),
        )

    def personal_bests(self, username: str) -> list[TestResult]:
        """The best-WPM result for each difficulty, ordered by difficulty."""
        return self._results(
            "reading personal bests",
            f"""
            SELECT {_RESULT_COLUMNS} FROM test_results r1
            WHERE username = ? AND wpm = (
                SELECT MAX(wpm) FROM test_results r2
                WHERE r2.username = r1.username AND r2.difficulty = r1.difficulty
            )
            GROUP BY difficulty
            ORDER BY difficulty
            """,
            (username,),
        )

    def recent_tests(self, username: str, days: int = 7) -> list[TestResult]:
        """Results from the last ``days`` days, newest first."""
        return self._results(
            "reading recent tests",
            f"""
            SELECT {_RESULT_COLUMNS} FROM test_results
            WHERE username = ? AND timestamp >= datetime('now', '-' || ? || ' days')
            ORDER BY timestamp DESC, id DESC
            """,
            (username, int(days)),
        )

    # -- maintenance -------------------------------------------------------

    def clear_user_data(self, username: str) -> None:
        """Delete a user and all of the user's results."""
        with _errors("clearing user data"), self._conn:
            self._conn.execute("DELETE FROM test_results WHERE username = ?", (username,))
            self._conn.execute("DELETE FROM users WHERE username = ?", (username,))

    def clear_all_data(self) -> None:
        """Delete every user and every result."""
        with _errors("clearing all data"), self._conn:
            self._conn.execute("DELETE FROM test_results")
            self._conn.execute("DELETE FROM users")