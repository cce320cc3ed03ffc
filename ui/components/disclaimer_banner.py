"""Medical disclaimer banner shown on the diagnosis tabs and result card."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QWidget

from i18n import t


class DisclaimerBanner(QWidget):
    """Amber warning banner. Cannot be dismissed.

    ``text_key`` selects the i18n message: the short banner on top of each
    tab, or the longer reminder under a diagnosis.
    """

    def __init__(self, text_key: str = "disclaimer.banner", parent=None):
        super().__init__(parent)
        self.setObjectName("disclaimerBanner")
        self._text_key = text_key
        self._setup_ui()

    def _setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(10)

        icon_label = QLabel("⚠")
        icon_label.setProperty("class", "disclaimerIcon")
        icon_label.setFixedWidth(24)
        icon_label.setAlignment(Qt.AlignmentFlag.AlignTop)

        self._text_label = QLabel(t(self._text_key))
        self._text_label.setProperty("class", "disclaimerText")
        self._text_label.setWordWrap(True)

        layout.addWidget(icon_label)
        layout.addWidget(self._text_label, 1)
