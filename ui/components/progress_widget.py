"""Busy indicator shown while a diagnosis request is in flight."""

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QVBoxLayout,
    QWidget,
)

from i18n import t


class ProgressWidget(QWidget):
    """Indeterminate bar plus status message. Requests cannot be cancelled."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()
        self.hide()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 8)
        layout.setSpacing(8)

        self._bar = QProgressBar()
        self._bar.setTextVisible(False)
        self._bar.setFixedHeight(8)

        status_row = QHBoxLayout()
        status_row.setSpacing(12)

        self._status_label = QLabel("")
        self._status_label.setProperty("class", "progressStatus")

        self._step_label = QLabel("")
        self._step_label.setProperty("class", "progressPercent")

        status_row.addWidget(self._status_label, 1)
        status_row.addWidget(self._step_label)

        layout.addWidget(self._bar)
        layout.addLayout(status_row)

    def start(self):
        """Show the spinner in busy (indeterminate) mode."""
        self._bar.setRange(0, 0)
        self._status_label.setText(t("progress.analyzing"))
        self._step_label.setText("")
        self.show()

    def update_progress(self, current: int, total: int, message: str):
        self._status_label.setText(message)
        if total > 0:
            self._step_label.setText(f"{min(current, total)}/{total}")

    def reset(self):
        """Hide and reset the widget."""
        self._bar.setRange(0, 100)
        self._bar.setValue(0)
        self._status_label.setText("")
        self._step_label.setText("")
        self.hide()
