"""DermaDiagnostic: AI-assisted skin lesion screening.

Entry point for the desktop application.
"""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

import i18n
from core.config import SETTINGS_APP, SETTINGS_ORG, get_settings, load_config
from ui.theme import ThemeManager


def setup_logging():
    level = os.getenv("DERMADIAGNOSTIC_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Application entry point."""
    # Handle PyInstaller frozen app
    if getattr(sys, "frozen", False):
        os.chdir(os.path.dirname(sys.executable))

    setup_logging()

    app = QApplication(sys.argv)
    app.setApplicationName(SETTINGS_APP)
    app.setApplicationVersion("1.0.0")
    app.setOrganizationName(SETTINGS_ORG)

    # Initialize i18n before any UI
    i18n.init()

    config = load_config(get_settings())
    theme_manager = ThemeManager(app)
    theme_manager.apply_config(config)
    if not config.has_api_key:
        logging.getLogger(__name__).warning(
            "No Gemini API key configured; set GEMINI_API_KEY or use the Settings tab"
        )

    # Import main window after i18n so module-level t() calls resolve
    from ui.main_window import MainWindow

    window = MainWindow(theme_manager, config)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
