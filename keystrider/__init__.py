"""Typing speed tests and keyboard lessons, with per-user statistics, themes and a console trainer."""

__version__ = "1.0.0"