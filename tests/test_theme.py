"""Tests for ui.theme, driven by AppConfig.theme."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from core.config import AppConfig
from ui.theme import ThemeManager, stylesheet_path


@pytest.fixture
def fake_app(qapp):
    return MagicMock()


class TestStylesheetPath:
    @pytest.mark.parametrize("theme", ["light", "dark"])
    def test_shipped_themes_exist(self, theme):
        path = Path(stylesheet_path(theme))
        assert path.name == f"{theme}.qss"
        assert path.is_file()

    def test_unknown_theme_uses_light(self):
        assert Path(stylesheet_path("neon")).name == "light.qss"


class TestThemeManager:
    def test_sets_font_on_creation(self, fake_app):
        ThemeManager(fake_app)
        fake_app.setFont.assert_called_once()

    def test_applies_configured_stylesheet(self, fake_app):
        manager = ThemeManager(fake_app)
        manager.apply_config(AppConfig(theme="dark"))
        expected = Path(stylesheet_path("dark")).read_text(encoding="utf-8")
        fake_app.setStyleSheet.assert_called_once_with(expected)
        assert manager.current_theme == "dark"

    def test_unchanged_theme_not_reapplied(self, fake_app):
        manager = ThemeManager(fake_app)
        manager.apply_config(AppConfig(theme="light"))
        manager.apply_config(AppConfig(theme="light", api_key="new-key"))
        assert fake_app.setStyleSheet.call_count == 1

    def test_switching_theme(self, fake_app):
        manager = ThemeManager(fake_app)
        manager.apply_config(AppConfig(theme="light"))
        manager.apply_config(AppConfig(theme="dark"))
        assert fake_app.setStyleSheet.call_count == 2
        assert manager.current_theme == "dark"

    def test_missing_stylesheet_falls_back_to_qt_defaults(self, fake_app, monkeypatch, tmp_dir):
        monkeypatch.setattr("ui.theme.stylesheet_path", lambda theme: str(tmp_dir / "gone.qss"))
        manager = ThemeManager(fake_app)
        manager.apply_config(AppConfig(theme="dark"))
        fake_app.setStyleSheet.assert_called_once_with("")
