"""Colour themes, font settings and their persistence."""

from __future__ import annotations

import colorsys
import json
import logging
import os
from collections.abc import Callable
from dataclasses import asdict, dataclass, fields, replace
from enum import IntEnum
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

log = logging.getLogger(__name__)

APP_NAME = "keystrider"
SETTINGS_FILE = "themes.json"
DEFAULT_FONT_FAMILY = "Arial"
MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 24
LARGE_TEXT_STEP = 2
CUSTOM_THEME_GROUP = "CustomTheme"


@dataclass(frozen=True)
class Color:
    """An opaque RGB colour with 8-bit channels."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")

    @staticmethod
    def from_name(name: str) -> Color:
        """Parse ``#rrggbb`` or ``#rgb``."""
        text = name.strip()
        if not text.startswith("#"):
            raise ValueError(f"not a colour name: {name!r}")
        digits = text[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) != 6:
            raise ValueError(f"not a colour name: {name!r}")
        try:
            value = int(digits, 16)
        except ValueError:
            raise ValueError(f"not a colour name: {name!r}") from None
        return Color((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def name(self) -> str:
        """The colour as ``#rrggbb``."""
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def _hsv(self) -> tuple[float, float, float]:
        return colorsys.rgb_to_hsv(self.red / 255, self.green / 255, self.blue / 255)

    @staticmethod
    def _from_hsv(hue: float, saturation: float, value: float) -> Color:
        r, g, b = colorsys.hsv_to_rgb(hue, saturation, value)
        return Color(*(min(255, max(0, round(c * 255))) for c in (r, g, b)))

    def lighter(self, factor: int = 150) -> Color:
        """Brighter colour: value scaled by ``factor``/100, spilling into saturation."""
        if factor <= 0:
            return self
        if factor < 100:
            return self.darker(10000 // factor)
        hue, saturation, value = self._hsv()
        value = value * factor / 100
        if value > 1.0:
            saturation = max(0.0, saturation - (value - 1.0))
            value = 1.0
        return Color._from_hsv(hue, saturation, value)

    def darker(self, factor: int = 200) -> Color:
        """Darker colour: value divided by ``factor``/100."""
        if factor <= 0:
            return self
        if factor < 100:
            return self.lighter(10000 // factor)
        hue, saturation, value = self._hsv()
        return Color._from_hsv(hue, saturation, value * 100 / factor)


BLACK = Color(0, 0, 0)


class ThemeType(IntEnum):
    LIGHT_THEME = 0
    DARK_THEME = 1
    HIGH_CONTRAST_THEME = 2
    CUSTOM_THEME = 3


class FontSize(IntEnum):
    SMALL_FONT = 10
    MEDIUM_FONT = 12
    LARGE_FONT = 14
    EXTRA_LARGE_FONT = 16
    HUGE_FONT = 18


@dataclass(frozen=True)
class ThemeColors:
    """Every colour a theme defines."""

    background: Color = BLACK
    foreground: Color = BLACK
    primary_accent: Color = BLACK
    secondary_accent: Color = BLACK
    correct_text: Color = BLACK
    incorrect_text: Color = BLACK
    current_text: Color = BLACK
    remaining_text: Color = BLACK
    button_background: Color = BLACK
    button_text: Color = BLACK
    input_background: Color = BLACK
    input_text: Color = BLACK
    border: Color = BLACK
    success: Color = BLACK
    warning: Color = BLACK
    error: Color = BLACK


LIGHT_COLORS = ThemeColors(
    background=Color(255, 255, 255),
    foreground=Color(33, 37, 41),
    primary_accent=Color(0, 123, 255),
    secondary_accent=Color(108, 117, 125),
    correct_text=Color(40, 167, 69),
    incorrect_text=Color(220, 53, 69),
    current_text=Color(23, 162, 184),
    remaining_text=Color(108, 117, 125),
    button_background=Color(0, 123, 255),
    button_text=Color(255, 255, 255),
    input_background=Color(255, 255, 255),
    input_text=Color(33, 37, 41),
    border=Color(206, 212, 218),
    success=Color(40, 167, 69),
    warning=Color(255, 193, 7),
    error=Color(220, 53, 69),
)

DARK_COLORS = ThemeColors(
    background=Color(33, 37, 41),
    foreground=Color(248, 249, 250),
    primary_accent=Color(0, 123, 255),
    secondary_accent=Color(108, 117, 125),
    correct_text=Color(40, 167, 69),
    incorrect_text=Color(220, 53, 69),
    current_text=Color(23, 162, 184),
    remaining_text=Color(108, 117, 125),
    button_background=Color(0, 123, 255),
    button_text=Color(255, 255, 255),
    input_background=Color(52, 58, 64),
    input_text=Color(248, 249, 250),
    border=Color(73, 80, 87),
    success=Color(40, 167, 69),
    warning=Color(255, 193, 7),
    error=Color(220, 53, 69),
)

HIGH_CONTRAST_COLORS = ThemeColors(
    background=Color(0, 0, 0),
    foreground=Color(255, 255, 255),
    primary_accent=Color(255, 255, 0),
    secondary_accent=Color(128, 128, 128),
    correct_text=Color(0, 255, 0),
    incorrect_text=Color(255, 0, 0),
    current_text=Color(0, 255, 255),
    remaining_text=Color(192, 192, 192),
    button_background=Color(255, 255, 0),
    button_text=Color(0, 0, 0),
    input_background=Color(255, 255, 255),
    input_text=Color(0, 0, 0),
    border=Color(255, 255, 255),
    success=Color(0, 255, 0),
    warning=Color(255, 255, 0),
    error=Color(255, 0, 0),
)


def default_settings_path() -> Path:
    """Location of the theme settings file in the user's configuration directory."""
    return Path(user_config_dir(APP_NAME)) / SETTINGS_FILE


def _colors_to_names(colors: ThemeColors) -> dict[str, str]:
    return {key: color.name() for key, color in vars(colors).items()}


def _colors_from_names(data: dict[str, Any]) -> ThemeColors:
    values: dict[str, Color] = {}
    for field in fields(ThemeColors):
        raw = data.get(field.name)
        try:
            values[field.name] = Color.from_name(str(raw)) if raw is not None else BLACK
        except ValueError:
            values[field.name] = BLACK
    return ThemeColors(**values)


class ThemeManager:
    """Current theme, fonts and accessibility options, stored in a JSON file."""

    def __init__(self, settings_path: str | os.PathLike[str] | None = None) -> None:
        self.settings_path = Path(
            settings_path if settings_path is not None else default_settings_path()
        )
        self._listeners: list[Callable[[], None]] = []
        self._theme = ThemeType.LIGHT_THEME
        self._colors = ThemeColors()
        self._font_family = DEFAULT_FONT_FAMILY
        self._font_size = int(FontSize.MEDIUM_FONT)
        self._high_contrast = False
        self._large_text = False
        self._themes: dict[ThemeType, ThemeColors] = {
            ThemeType.LIGHT_THEME: LIGHT_COLORS,
            ThemeType.DARK_THEME: DARK_COLORS,
            ThemeType.HIGH_CONTRAST_THEME: HIGH_CONTRAST_COLORS,
        }
        self.load_settings()

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` whenever the theme or the font changes."""
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in self._listeners:
            callback()

    # -- themes ------------------------------------------------------------

    def apply_theme(self, theme: ThemeType) -> None:
        """Switch to ``theme``, adding high-contrast adjustments when enabled."""
        theme = ThemeType(theme)
        self._theme = theme
        if theme in self._themes:
            self._colors = self._themes[theme]
        if self._high_contrast and theme != ThemeType.HIGH_CONTRAST_THEME:
            self._colors = replace(
                self._colors,
                correct_text=self._colors.correct_text.darker(150),
                incorrect_text=self._colors.incorrect_text.lighter(150),
                border=self._colors.border.darker(200),
            )
        self._notify()

    def set_custom_theme(self, colors: ThemeColors) -> None:
        self._theme = ThemeType.CUSTOM_THEME
        self._colors = colors
        self._themes[ThemeType.CUSTOM_THEME] = colors
        self._notify()

    @property
    def current_theme(self) -> ThemeType:
        return self._theme

    @property
    def colors(self) -> ThemeColors:
        return self._colors

    # -- fonts -------------------------------------------------------------

    @property
    def font_family(self) -> str:
        return self._font_family

    @font_family.setter
    def font_family(self, family: str) -> None:
        self._font_family = family
        self._notify()

    @property
    def font_size(self) -> int:
        return self._font_size

    def set_font_size(self, size: int) -> None:
        """Set the font size; a preset is taken as is, any other size is held to 8..24."""
        if isinstance(size, FontSize):
            self._font_size = int(size)
        else:
            self._font_size = min(max(int(size), MIN_FONT_SIZE), MAX_FONT_SIZE)
        if self._large_text:
            self._font_size += LARGE_TEXT_STEP
        self._notify()

    # -- accessibility -----------------------------------------------------

    @property
    def high_contrast_mode(self) -> bool:
        return self._high_contrast

    @high_contrast_mode.setter
    def high_contrast_mode(self, enabled: bool) -> None:
        self._high_contrast = bool(enabled)
        if self._high_contrast and self._theme != ThemeType.HIGH_CONTRAST_THEME:
            self.apply_theme(self._theme)

    @property
    def large_text_mode(self) -> bool:
        return self._large_text

    @large_text_mode.setter
    def large_text_mode(self, enabled: bool) -> None:
        self._large_text = bool(enabled)
        if self._large_text:
            self._font_size += LARGE_TEXT_STEP
        else:
            self._font_size = max(MIN_FONT_SIZE, self._font_size - LARGE_TEXT_STEP)
        self._notify()

    # -- persistence -------------------------------------------------------

    def _read_settings(self) -> dict[str, Any]:
        try:
            data = json.loads(self.settings_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            log.debug("Ignoring unreadable settings %s: %s", self.settings_path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def save_settings(self) -> None:
        """Write the current settings, keeping any stored custom theme."""
        data = self._read_settings()
        data.update(
            theme=int(self._theme),
            fontFamily=self._font_family,
            fontSize=self._font_size,
            highContrast=self._high_contrast,
            largeText=self._large_text,
        )
        if self._theme == ThemeType.CUSTOM_THEME:
            data[CUSTOM_THEME_GROUP] = _colors_to_names(self._colors)
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        self.settings_path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def load_settings(self) -> None:
        """Read stored settings, falling back to defaults, then apply the theme."""
        data = self._read_settings()
        try:
            self._theme = ThemeType(int(data.get("theme", ThemeType.LIGHT_THEME)))
        except (TypeError, ValueError):
            self._theme = ThemeType.LIGHT_THEME
        self._font_family = str(data.get("fontFamily", DEFAULT_FONT_FAMILY))
        try:
            self._font_size = int(data.get("fontSize", FontSize.MEDIUM_FONT))
        except (TypeError, ValueError):
            self._font_size = int(FontSize.MEDIUM_FONT)
        self._high_contrast = bool(data.get("highContrast", False))
        self._large_text = bool(data.get("largeText", False))

        custom = data.get(CUSTOM_THEME_GROUP)
        if self._theme == ThemeType.CUSTOM_THEME and isinstance(custom, dict):
            self._themes[ThemeType.CUSTOM_THEME] = _colors_from_names(custom)

        self.apply_theme(self._theme)

    # -- style sheets ------------------------------------------------------

    def generate_style_sheet(self) -> str:
        """A Qt-style sheet for the whole window built from the current theme."""
        c = self._colors
        return (
            f"QMainWindow {{ background-color: {c.background.name()}; "
            f"color: {c.foreground.name()}; }}"
            + self._button_style()
            + self._input_style()
            + self._label_style()
            + self._progress_bar_style()
            + self._combo_box_style()
            + self._check_box_style()
            + self._slider_style()
        )

    def _button_style(self) -> str:
        c = self._colors
        return (
            "QPushButton {"
            f"    background-color: {c.button_background.name()};"
            f"    color: {c.button_text.name()};"
            f"    border: 1px solid {c.border.name()};"
            "    border-radius: 4px;"
            "    padding: 6px 12px;"
            f"    font-family: {self._font_family};"
            f"    font-size: {self._font_size}px;"
            "}"
            "QPushButton:hover {"
            f"    background-color: {c.button_background.lighter(110).name()};"
            "}"
            "QPushButton:pressed {"
            f"    background-color: {c.button_background.darker(110).name()};"
            "}"
            "QPushButton:disabled {"
            f"    background-color: {c.secondary_accent.name()};"
            f"    color: {c.remaining_text.name()};"
            "}"
        )

    def _input_style(self) -> str:
        c = self._colors
        return (
            "QLineEdit {"
            f"    background-color: {c.input_background.name()};"
            f"    color: {c.input_text.name()};"
            f"    border: 1px solid {c.border.name()};"
            "    border-radius: 4px;"
            "    padding: 6px;"
            f"    font-family: {self._font_family};"
            f"    font-size: {self._font_size}px;"
            "}"
            "QLineEdit:focus {"
            f"    border: 2px solid {c.primary_accent.name()};"
            "}"
        )

    def _label_style(self) -> str:
        return (
            "QLabel {"
            f"    color: {self._colors.foreground.name()};"
            f"    font-family: {self._font_family};"
            f"    font-size: {self._font_size}px;"
            "}"
        )

    def _progress_bar_style(self) -> str:
        c = self._colors
        return (
            "QProgressBar {"
            f"    border: 1px solid {c.border.name()};"
            "    border-radius: 4px;"
            f"    background-color: {c.input_background.name()};"
            "    text-align: center;"
            "}"
            "QProgressBar::chunk {"
            f"    background-color: {c.primary_accent.name()};"
            "    border-radius: 3px;"
            "}"
        )

    def _combo_box_style(self) -> str:
        c = self._colors
        return (
            "QComboBox {"
            f"    background-color: {c.input_background.name()};"
            f"    color: {c.input_text.name()};"
            f"    border: 1px solid {c.border.name()};"
            "    border-radius: 4px;"
            "    padding: 4px;"
            f"    font-family: {self._font_family};"
            f"    font-size: {self._font_size}px;"
            "}"
            "QComboBox:hover {"
            f"    border: 2px solid {c.primary_accent.name()};"
            "}"
            "QComboBox::drop-down {"
            "    border: none;"
            "}"
            "QComboBox::down-arrow {"
            "    width: 12px;"
            "    height: 12px;"
            "}"
        )

    def _check_box_style(self) -> str:
        c = self._colors
        return (
            "QCheckBox {"
            f"    color: {c.foreground.name()};"
            f"    font-family: {self._font_family};"
            f"    font-size: {self._font_size}px;"
            "}"
            "QCheckBox::indicator {"
            "    width: 16px;"
            "    height: 16px;"
            f"    border: 1px solid {c.border.name()};"
            "    border-radius: 3px;"
            f"    background-color: {c.input_background.name()};"
            "}"
            "QCheckBox::indicator:checked {"
            f"    background-color: {c.primary_accent.name()};"
            "}"
        )

    def _slider_style(self) -> str:
        c = self._colors
        return (
            "QSlider::groove:horizontal {"
            f"    border: 1px solid {c.border.name()};"
            "    height: 6px;"
            f"    background: {c.input_background.name()};"
            "    border-radius: 3px;"
            "}"
            "QSlider::handle:horizontal {"
            f"    background: {c.primary_accent.name()};"
            f"    border: 1px solid {c.border.name()};"
            "    width: 16px;"
            "    border-radius: 8px;"
            "    margin-top: -5px;"
            "    margin-bottom: -5px;"
            "}"
            "QSlider::sub-page:horizontal {"
            f"    background: {c.primary_accent.name()};"
            "    border-radius: 3px;"
            "}"
        )


__all__ = [
    "Color",
    "FontSize",
    "ThemeColors",
    "ThemeManager",
    "ThemeType",
    "default_settings_path",
    "asdict",
]