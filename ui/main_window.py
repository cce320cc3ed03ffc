"""Main application window with sidebar navigation and stacked content."""

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from core.config import AppConfig
from core.utils import FlowMode
from i18n import t
from ui.diagnosis_widget import DiagnosisWidget
from ui.settings_widget import SettingsWidget
from ui.theme import ThemeManager

SINGLE_TAB = 0
MULTI_TAB = 1
SETTINGS_TAB = 2


class MainWindow(QMainWindow):
    """Sidebar with the two diagnosis flows and settings."""

    def __init__(self, theme_manager: ThemeManager, config: AppConfig):
        super().__init__()
        self._theme_manager = theme_manager
        self._config = config
        self._nav_buttons = []
        self.setWindowTitle(t("app.title"))
        self.setMinimumSize(860, 620)
        self.resize(1000, 720)
        self._setup_ui()
        self._setup_menu_bar()
        self._switch_tab(SETTINGS_TAB if not config.has_api_key else SINGLE_TAB)

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        main_layout.addWidget(self._create_sidebar())

        self._stack = QStackedWidget()
        self._stack.setObjectName("contentArea")

        self._single_widget = DiagnosisWidget(FlowMode.SINGLE, self._config)
        self._multi_widget = DiagnosisWidget(FlowMode.MULTI, self._config)
        self._settings_widget = SettingsWidget(self._config)
        self._settings_widget.config_changed.connect(self._on_config_changed)

        self._stack.addWidget(self._single_widget)
        self._stack.addWidget(self._multi_widget)
        self._stack.addWidget(self._settings_widget)

        main_layout.addWidget(self._stack, 1)

    def _create_sidebar(self) -> QWidget:
        sidebar = QWidget()
        sidebar.setObjectName("sidebar")
        sidebar.setFixedWidth(220)

        layout = QVBoxLayout(sidebar)
        layout.setContentsMargins(12, 16, 12, 16)
        layout.setSpacing(4)

        logo = QLabel(t("app.title"))
        logo.setObjectName("sidebarLogo")
        layout.addWidget(logo)

        subtitle = QLabel(t("app.subtitle"))
        subtitle.setObjectName("sidebarSubtitle")
        subtitle.setWordWrap(True)
        subtitle.setStyleSheet("font-size: 11px; color: #888; padding-bottom: 12px;")
        layout.addWidget(subtitle)

        section = QLabel(t("sidebar.diagnosis"))
        section.setProperty("class", "sidebarSection")
        layout.addWidget(section)

        nav_items = [
            (t("sidebar.single"), "\U0001f4f7", SINGLE_TAB),
            (t("sidebar.multi"), "\U0001f5bc", MULTI_TAB),
        ]
        for label, icon, index in nav_items:
            layout.addWidget(self._nav_button(f"  {icon}  {label}", index))

        layout.addStretch()
        layout.addWidget(self._nav_button(f"  ⚙️  {t('sidebar.settings')}", SETTINGS_TAB))
        return sidebar

    def _nav_button(self, text: str, index: int) -> QPushButton:
        btn = QPushButton(text)
        btn.setProperty("class", "navButton")
        btn.clicked.connect(lambda checked, idx=index: self._switch_tab(idx))
        self._nav_buttons.append(btn)
        return btn

    def _switch_tab(self, index: int):
        """Change active tab and update button styling."""
        self._stack.setCurrentIndex(index)
        for i, btn in enumerate(self._nav_buttons):
            btn.setProperty("active", "true" if i == index else "false")
            btn.style().unpolish(btn)
            btn.style().polish(btn)

    def _setup_menu_bar(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu(t("menu.file"))
        quit_action = QAction(t("menu.quit"), self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        nav_menu = menu_bar.addMenu(t("menu.navigate"))
        nav_shortcuts = [
            (t("sidebar.single"), "Ctrl+1", SINGLE_TAB),
            (t("sidebar.multi"), "Ctrl+2", MULTI_TAB),
            (t("sidebar.settings"), "Ctrl+,", SETTINGS_TAB),
        ]
        for label, shortcut, index in nav_shortcuts:
            action = QAction(label, self)
            action.setShortcut(shortcut)
            action.triggered.connect(lambda checked, i=index: self._switch_tab(i))
            nav_menu.addAction(action)

    def _on_config_changed(self, config: AppConfig):
        self._config = config
        self._theme_manager.apply_config(config)
        self._single_widget.set_config(config)
        self._multi_widget.set_config(config)

    def closeEvent(self, event):
        """Wait for in-flight requests before closing."""
        for w in (self._single_widget, self._multi_widget, self._settings_widget):
            w.cleanup()
        QApplication.processEvents()
        event.accept()
