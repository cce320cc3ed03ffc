"""Application settings tab: Gemini API key and model, language, theme."""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.config import (
    DEFAULT_MODEL,
    AppConfig,
    get_settings,
    load_config,
    save_api_settings,
    save_theme,
)
from i18n import DEFAULT_LANGUAGE, LANGUAGES, set_language, t

SUGGESTED_MODELS = (
    DEFAULT_MODEL,
    "gemini-1.5-pro",
    "gemini-2.0-flash",
    "gemini-2.5-flash",
)

APP_VERSION = "1.0.0"


def _section_header(text: str) -> QLabel:
    header = QLabel(text)
    header.setProperty("class", "sectionTitle")
    header.setStyleSheet("font-size: 16px; margin-top: 12px;")
    return header


class SettingsWidget(QWidget):
    """User-facing settings. Emits ``config_changed`` after a save."""

    config_changed = pyqtSignal(object)  # AppConfig

    def __init__(self, config: AppConfig, parent=None):
        super().__init__(parent)
        self._config = config
        self._setup_ui()

    def _setup_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        title = QLabel(t("settings.title"))
        title.setProperty("class", "sectionTitle")
        subtitle = QLabel(t("settings.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")
        subtitle.setWordWrap(True)

        layout.addWidget(title)
        layout.addWidget(subtitle)

        # --- Gemini section ---
        layout.addWidget(_section_header(t("settings.gemini")))

        self._key_edit = QLineEdit(self._config.api_key)
        self._key_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self._key_edit.setPlaceholderText(t("settings.api_key_placeholder"))
        layout.addWidget(QLabel(t("settings.api_key")))
        layout.addWidget(self._key_edit)

        self._model_combo = QComboBox()
        self._model_combo.setEditable(True)
        self._model_combo.addItems(SUGGESTED_MODELS)
        self._model_combo.setCurrentText(self._config.model)
        layout.addWidget(QLabel(t("settings.model")))
        layout.addWidget(self._model_combo)

        self._key_status = QLabel()
        self._key_status.setStyleSheet("font-size: 11px;")
        layout.addWidget(self._key_status)
        self._refresh_key_status()

        save_row = QHBoxLayout()
        save_btn = QPushButton(t("settings.save"))
        save_btn.setObjectName("primaryButton")
        save_btn.clicked.connect(self._on_save)
        save_row.addWidget(save_btn)
        save_row.addStretch()
        layout.addLayout(save_row)

        # --- Language section ---
        layout.addWidget(_section_header(t("settings.language")))

        lang_row = QHBoxLayout()
        self._lang_combo = QComboBox()
        current = get_settings().value("language", DEFAULT_LANGUAGE)
        for code, info in LANGUAGES.items():
            self._lang_combo.addItem(f"{info['native_name']} ({info['name']})", code)
            if code == current:
                self._lang_combo.setCurrentIndex(self._lang_combo.count() - 1)
        self._lang_combo.currentIndexChanged.connect(self._on_language_changed)
        lang_row.addWidget(self._lang_combo)
        lang_row.addStretch()
        layout.addLayout(lang_row)

        lang_note = QLabel(t("settings.language_restart"))
        lang_note.setStyleSheet("font-size: 11px; color: #888; font-style: italic;")
        layout.addWidget(lang_note)

        # --- Theme section ---
        layout.addWidget(_section_header(t("settings.theme")))

        theme_row = QHBoxLayout()
        light_btn = QPushButton(t("settings.theme_light"))
        light_btn.setProperty("class", "secondaryButton")
        light_btn.clicked.connect(lambda: self._on_theme_selected("light"))

        dark_btn = QPushButton(t("settings.theme_dark"))
        dark_btn.setProperty("class", "secondaryButton")
        dark_btn.clicked.connect(lambda: self._on_theme_selected("dark"))

        theme_row.addWidget(light_btn)
        theme_row.addWidget(dark_btn)
        theme_row.addStretch()
        layout.addLayout(theme_row)

        # --- About section ---
        layout.addWidget(_section_header(t("settings.about")))

        about_text = QLabel(
            f"{t('about.description')}\n"
            f"{t('about.version', version=APP_VERSION)}"
        )
        about_text.setProperty("class", "sectionSubtitle")
        about_text.setWordWrap(True)
        layout.addWidget(about_text)

        layout.addStretch()
        scroll.setWidget(container)
        outer.addWidget(scroll)

    def _refresh_key_status(self):
        if self._config.has_api_key:
            self._key_status.setText(t("settings.api_key_ok"))
            self._key_status.setStyleSheet("font-size: 11px; color: #22C55E;")
        else:
            self._key_status.setText(t("settings.api_key_missing"))
            self._key_status.setStyleSheet("font-size: 11px; color: #F59E0B;")

    def _on_save(self):
        settings = get_settings()
        save_api_settings(settings, self._key_edit.text(), self._model_combo.currentText())
        self._config = load_config(settings)
        self._refresh_key_status()
        self.config_changed.emit(self._config)
        QMessageBox.information(self, t("common.success"), t("settings.saved"))

    def _on_theme_selected(self, theme: str):
        settings = get_settings()
        save_theme(settings, theme)
        self._config = load_config(settings)
        self.config_changed.emit(self._config)

    def _on_language_changed(self, index: int):
        set_language(self._lang_combo.itemData(index))

    def cleanup(self):
        pass
