"""Diagnosis result card: condition, description, treatments, advice."""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.utils import DiagnosisResult
from i18n import t
from ui.components.disclaimer_banner import DisclaimerBanner


def _section_title(text: str) -> QLabel:
    label = QLabel(text)
    label.setProperty("class", "sectionTitle")
    label.setStyleSheet("font-size: 15px; margin-top: 8px;")
    return label


def _body(text: str = "") -> QLabel:
    label = QLabel(text)
    label.setWordWrap(True)
    label.setProperty("class", "sectionSubtitle")
    return label


class DiagnosisCard(QWidget):
    """Shows the most recent diagnosis and the new-consultation action."""

    new_consultation = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("resultCard")
        self._setup_ui()
        self.hide()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(8)

        title = QLabel(t("results.title"))
        title.setProperty("class", "sectionSubtitle")

        self._condition_label = QLabel("")
        self._condition_label.setObjectName("conditionLabel")
        self._condition_label.setStyleSheet("font-size: 22px; font-weight: bold;")
        self._condition_label.setWordWrap(True)

        self._unrecognized_label = _body(t("results.unrecognized"))
        self._unrecognized_label.setStyleSheet("font-size: 12px; font-style: italic;")

        self._description_label = _body()
        self._medications_label = _body()
        self._advice_label = _body()

        self._disclaimer = DisclaimerBanner(text_key="disclaimer.result")

        action_row = QHBoxLayout()
        action_row.addStretch()
        self._new_btn = QPushButton(t("results.new_consultation"))
        self._new_btn.setObjectName("primaryButton")
        self._new_btn.clicked.connect(self.new_consultation.emit)
        action_row.addWidget(self._new_btn)

        layout.addWidget(title)
        layout.addWidget(self._condition_label)
        layout.addWidget(self._unrecognized_label)
        layout.addWidget(_section_title(t("results.description")))
        layout.addWidget(self._description_label)
        layout.addWidget(_section_title(t("results.medications")))
        layout.addWidget(self._medications_label)
        layout.addWidget(_section_title(t("results.advice")))
        layout.addWidget(self._advice_label)
        layout.addWidget(self._disclaimer)
        layout.addLayout(action_row)

    def show_result(self, result: DiagnosisResult):
        """Display a diagnosis. The label is shown even when unrecognized."""
        self._condition_label.setText(result.condition.upper() or "—")
        self._unrecognized_label.setVisible(not result.recognized)
        self._description_label.setText(result.description)
        self._medications_label.setText(
            "\n".join(f"• {med}" for med in result.medications)
        )
        self._advice_label.setText(result.advice)
        self.show()

    def reset(self):
        """Clear results and hide."""
        self._condition_label.clear()
        self._description_label.clear()
        self._medications_label.clear()
        self._advice_label.clear()
        self.hide()
