"""Stylesheet handling: keeps the application look in step with AppConfig.theme."""

import logging
import sys

from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QApplication

from core.config import DEFAULT_THEME, THEMES, AppConfig
from core.utils import get_asset_path

logger = logging.getLogger(__name__)


def stylesheet_path(theme: str) -> str:
    """Path of the QSS file for a theme name; unknown names use the default."""
    if theme not in THEMES:
        theme = DEFAULT_THEME
    return get_asset_path(f"assets/styles/{theme}.qss")


def _platform_font() -> QFont:
    if sys.platform == "darwin":
        font = QFont(".AppleSystemUIFont", 13)
    elif sys.platform == "win32":
        font = QFont("Segoe UI", 10)
    else:
        font = QFont("Ubuntu", 10)
    font.setHintingPreference(QFont.HintingPreference.PreferNoHinting)
    return font


class ThemeManager:
    """Applies the stylesheet named by the current configuration.

    Persisting the choice is the Settings tab's job (``save_theme``); this
    class only reacts to each new ``AppConfig``.
    """

    def __init__(self, app: QApplication):
        self._app = app
        self._applied = None
        self._app.setFont(_platform_font())

    @property
    def current_theme(self):
        return self._applied

    def apply_config(self, config: AppConfig):
        if config.theme == self._applied:
            return
        path = stylesheet_path(config.theme)
        try:
            with open(path, "r", encoding="utf-8") as f:
                qss = f.read()
        except FileNotFoundError:
            logger.warning("Stylesheet %s not found, using Qt defaults", path)
            qss = ""
        self._app.setStyleSheet(qss)
        self._applied = config.theme
        logger.debug("Applied %s theme", config.theme)
