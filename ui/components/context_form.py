"""Patient context form shown after picking photos in multi-photo mode."""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QFormLayout, QLabel, QLineEdit, QVBoxLayout, QWidget

from core.prompt_builder import CONTEXT_LABELS
from core.utils import PatientContext
from i18n import t


class ContextForm(QWidget):
    """Five optional free-text fields. Every edit is reported immediately."""

    field_changed = pyqtSignal(str, str)  # field name, value

    def __init__(self, parent=None):
        super().__init__(parent)
        self._inputs = {}
        self._setup_ui()
        self.hide()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 8)
        layout.setSpacing(8)

        header = QLabel(t("form.title"))
        header.setStyleSheet("font-weight: bold;")
        header.setWordWrap(True)
        layout.addWidget(header)

        form = QFormLayout()
        form.setSpacing(8)
        for name, _ in CONTEXT_LABELS:
            line = QLineEdit()
            line.setPlaceholderText(t(f"form.{name}_placeholder"))
            line.textChanged.connect(lambda text, n=name: self.field_changed.emit(n, text))
            self._inputs[name] = line
            form.addRow(QLabel(t(f"form.{name}")), line)
        layout.addLayout(form)

    def set_context(self, context: PatientContext):
        for name, line in self._inputs.items():
            line.blockSignals(True)
            line.setText(getattr(context, name))
            line.blockSignals(False)

    def set_editable(self, editable: bool):
        for line in self._inputs.values():
            line.setReadOnly(not editable)

    def clear(self):
        self.set_context(PatientContext())
