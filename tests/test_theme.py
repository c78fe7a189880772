import json

import pytest

from keystrider.theme import (
    Color,
    FontSize,
    ThemeColors,
    ThemeManager,
    ThemeType,
    default_settings_path,
)


@pytest.fixture
def settings_file(tmp_path):
    return tmp_path / "config" / "themes.json"


@pytest.fixture
def manager(settings_file):
    return ThemeManager(settings_file)


def _custom_colors():
    return ThemeColors(
        background=Color(10, 20, 30),
        foreground=Color(200, 210, 220),
        primary_accent=Color(1, 2, 3),
        border=Color(90, 80, 70),
    )


@pytest.mark.parametrize("color", [Color(0, 0, 0), Color(255, 255, 255), Color(33, 37, 41)])
def test_color_name_round_trip(color):
    assert Color.from_name(color.name()) == color


def test_color_name_format():
    assert Color(255, 255, 255).name() == "#ffffff"
    assert Color.from_name("#fff") == Color(255, 255, 255)


@pytest.mark.parametrize("bad", ["ffffff", "#12345", "#gggggg", ""])
def test_color_from_name_rejects_garbage(bad):
    with pytest.raises(ValueError):
        Color.from_name(bad)


def test_color_channel_range_checked():
    with pytest.raises(ValueError):
        Color(256, 0, 0)


def test_lighter_and_darker_identity_at_100():
    color = Color(40, 167, 69)
    assert color.lighter(100) == color
    assert color.darker(100) == color


def test_darker_reduces_brightness_and_lighter_raises_it():
    color = Color(40, 167, 69)
    assert max(color.darker(150).red, color.darker(150).green, color.darker(150).blue) < 167
    lighter = color.lighter(150)
    assert max(lighter.red, lighter.green, lighter.blue) > 167


def test_lighter_below_100_is_darker():
    color = Color(220, 53, 69)
    assert color.lighter(50) == color.darker(200)


def test_non_positive_factor_returns_same_colour():
    color = Color(1, 2, 3)
    assert color.lighter(0) == color
    assert color.darker(-5) == color


def test_defaults(manager):
    assert manager.current_theme == ThemeType.LIGHT_THEME
    assert manager.colors.background.name() == "#ffffff"
    assert manager.font_family == "Arial"
    assert manager.font_size == FontSize.MEDIUM_FONT
    assert manager.high_contrast_mode is False
    assert manager.large_text_mode is False


def test_apply_dark_theme(manager):
    manager.apply_theme(ThemeType.DARK_THEME)
    assert manager.current_theme == ThemeType.DARK_THEME
    assert manager.colors.background == Color(33, 37, 41)
    assert manager.colors.input_background == Color(52, 58, 64)


def test_high_contrast_adjusts_regular_theme(manager):
    plain = manager.colors
    manager.high_contrast_mode = True
    assert manager.colors.correct_text == plain.correct_text.darker(150)
    assert manager.colors.incorrect_text == plain.incorrect_text.lighter(150)
    assert manager.colors.border == plain.border.darker(200)
    assert manager.colors.background == plain.background


def test_high_contrast_theme_left_alone(manager):
    manager.high_contrast_mode = True
    manager.apply_theme(ThemeType.HIGH_CONTRAST_THEME)
    assert manager.colors.correct_text == Color(0, 255, 0)
    assert manager.colors.border == Color(255, 255, 255)


def test_custom_theme(manager):
    custom = _custom_colors()
    manager.set_custom_theme(custom)
    assert manager.current_theme == ThemeType.CUSTOM_THEME
    assert manager.colors == custom


@pytest.mark.parametrize(
    "size, expected",
    [(100, 24), (3, 8), (15, 15), (FontSize.HUGE_FONT, 18), (FontSize.SMALL_FONT, 10)],
)
def test_set_font_size(manager, size, expected):
    manager.set_font_size(size)
    assert manager.font_size == expected


def test_large_text_mode_adds_and_removes_step(manager):
    manager.large_text_mode = True
    assert manager.font_size == 14
    manager.set_font_size(FontSize.LARGE_FONT)
    assert manager.font_size == 16
    manager.large_text_mode = False
    assert manager.font_size == 14


def test_large_text_off_never_below_minimum(manager):
    manager.set_font_size(8)
    manager.large_text_mode = False
    assert manager.font_size == 8


def test_listeners_notified(manager):
    calls = []
    manager.add_listener(lambda: calls.append(1))
    manager.apply_theme(ThemeType.DARK_THEME)
    manager.font_family = "Georgia"
    manager.set_font_size(FontSize.SMALL_FONT)
    assert len(calls) == 3
    assert manager.font_family == "Georgia"


def test_settings_round_trip(settings_file, manager):
    manager.font_family = "Verdana"
    manager.set_font_size(FontSize.LARGE_FONT)
    manager.apply_theme(ThemeType.DARK_THEME)
    manager.save_settings()

    reloaded = ThemeManager(settings_file)
    assert reloaded.current_theme == ThemeType.DARK_THEME
    assert reloaded.font_family == "Verdana"
    assert reloaded.font_size == 14
    assert reloaded.colors == manager.colors


def test_custom_theme_persisted(settings_file, manager):
    custom = _custom_colors()
    manager.set_custom_theme(custom)
    manager.save_settings()

    reloaded = ThemeManager(settings_file)
    assert reloaded.current_theme == ThemeType.CUSTOM_THEME
    assert reloaded.colors == custom


def test_saved_file_uses_stored_keys(settings_file, manager):
    manager.high_contrast_mode = True
    manager.save_settings()
    data = json.loads(settings_file.read_text(encoding="utf-8"))
    assert data["theme"] == int(ThemeType.LIGHT_THEME)
    assert data["fontFamily"] == "Arial"
    assert data["highContrast"] is True
    assert data["largeText"] is False

    reloaded = ThemeManager(settings_file)
    assert reloaded.high_contrast_mode is True
    assert reloaded.large_text_mode is False
    assert reloaded.colors == manager.colors


def test_corrupt_settings_fall_back_to_defaults(settings_file):
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text("{not json", encoding="utf-8")
    manager = ThemeManager(settings_file)
    assert manager.current_theme == ThemeType.LIGHT_THEME
    assert manager.font_family == "Arial"


def test_style_sheet_reflects_theme_and_font(manager):
    manager.apply_theme(ThemeType.DARK_THEME)
    manager.font_family = "Courier"
    sheet = manager.generate_style_sheet()
    dark_bg = Color(33, 37, 41).name()
    assert sheet.startswith(f"QMainWindow {{ background-color: {dark_bg};")
    assert "font-family: Courier;" in sheet
    assert f"font-size: {manager.font_size}px;" in sheet
    for selector in ("QPushButton {", "QLineEdit {", "QLabel {", "QProgressBar {",
                     "QComboBox {", "QCheckBox {", "QSlider::groove:horizontal {"):
        assert selector in sheet


def test_style_sheet_hover_uses_lighter_button(manager):
    sheet = manager.generate_style_sheet()
    hover = manager.colors.button_background.lighter(110).name()
    assert f"QPushButton:hover {{    background-color: {hover};}}" in sheet


def test_default_settings_path_name():
    assert default_settings_path().name == "themes.json"