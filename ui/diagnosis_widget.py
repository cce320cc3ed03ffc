"""Skin diagnosis tab, used for both the single and the multi photo flow."""

import logging
from typing import List, Optional

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.config import AppConfig
from core.errors import DermaError, InvalidTransition
from core.flow_controller import FlowController
from core.utils import (
    DiagnosisResult,
    FlowMode,
    FlowState,
    ImageRef,
    validate_skin_image,
)
from i18n import t
from ui.components.context_form import ContextForm
from ui.components.diagnosis_card import DiagnosisCard
from ui.components.disclaimer_banner import DisclaimerBanner
from ui.components.image_picker import ImagePicker
from ui.components.progress_widget import ProgressWidget
from workers.diagnosis_worker import DiagnosisWorker

logger = logging.getLogger(__name__)


class DiagnosisWidget(QWidget):
    """Pick photos, optionally describe the lesion, ask Gemini, show advice.

    All flow decisions live in FlowController; this widget only forwards
    user actions to it and redraws itself from the resulting state.
    """

    def __init__(self, mode: FlowMode, config: AppConfig, parent=None):
        super().__init__(parent)
        self._mode = mode
        self._worker: Optional[DiagnosisWorker] = None
        self._controller = FlowController(mode, config, on_change=self._on_state_changed)
        self._setup_ui()
        self._connect_signals()
        self._on_state_changed(self._controller.state)

    @property
    def controller(self) -> FlowController:
        return self._controller

    def _setup_ui(self):
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        prefix = self._mode.value

        self._disclaimer = DisclaimerBanner()

        title = QLabel(t(f"{prefix}.title"))
        title.setProperty("class", "sectionTitle")

        subtitle = QLabel(t(f"{prefix}.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")
        subtitle.setWordWrap(True)

        self._picker = ImagePicker(
            allow_multiple=self._mode is FlowMode.MULTI,
            allow_camera=self._mode is FlowMode.SINGLE,
            instruction_text=t(f"{prefix}.instructions"),
        )

        self._form = ContextForm()

        buttons_row = QHBoxLayout()
        buttons_row.setSpacing(12)

        self._analyze_btn = QPushButton(t("diagnosis.analyze_button"))
        self._analyze_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton(t("diagnosis.reset_button"))
        self._reset_btn.setProperty("class", "secondaryButton")

        buttons_row.addWidget(self._analyze_btn)
        buttons_row.addWidget(self._reset_btn)
        buttons_row.addStretch()

        self._progress = ProgressWidget()
        self._result_card = DiagnosisCard()

        layout.addWidget(self._disclaimer)
        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addWidget(self._picker)
        layout.addWidget(self._form)
        layout.addLayout(buttons_row)
        layout.addWidget(self._progress)
        layout.addWidget(self._result_card)
        layout.addStretch()

        scroll.setWidget(container)
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(scroll)

    def _connect_signals(self):
        self._picker.browse_requested.connect(self._on_browse)
        self._picker.camera_requested.connect(self._on_camera)
        self._picker.files_dropped.connect(self._on_files_dropped)
        self._form.field_changed.connect(self._on_field_changed)
        self._analyze_btn.clicked.connect(self._on_analyze)
        self._reset_btn.clicked.connect(self._on_reset)
        self._result_card.new_consultation.connect(self._on_reset)

    # --- Rendering ---

    def _on_state_changed(self, state: FlowState):
        if not hasattr(self, "_picker"):
            return
        ready = state is FlowState.READY
        analyzing = state is FlowState.ANALYZING
        holding = ready or analyzing

        self._picker.set_enabled_actions(state is FlowState.IDLE)
        self._form.setVisible(self._controller.form_visible and state is not FlowState.RESULT)
        self._form.set_editable(ready)

        self._analyze_btn.setVisible(holding)
        self._analyze_btn.setEnabled(self._controller.analyze_enabled)
        self._analyze_btn.setText(
            t("diagnosis.analyzing_button") if analyzing else t("diagnosis.analyze_button")
        )
        self._reset_btn.setVisible(holding)
        self._reset_btn.setEnabled(self._controller.reset_enabled)

        if analyzing:
            self._progress.start()
        else:
            self._progress.reset()

        if state is FlowState.RESULT:
            self._result_card.show_result(self._controller.diagnosis)
        else:
            self._result_card.reset()

    # --- Selection ---

    def _warn(self, message: str):
        QMessageBox.warning(self, t("common.notice"), message)

    def _on_browse(self):
        try:
            self._controller.begin_selection()
        except InvalidTransition:
            return
        paths = self._picker.open_file_dialog()
        if not paths:
            self._controller.cancel_selection()
            return
        self._accept_selection(paths)

    def _on_camera(self):
        from core.image_source import capture_from_camera

        try:
            self._controller.begin_selection()
        except InvalidTransition:
            return
        try:
            frame = capture_from_camera(quality=self._controller.config.image_quality)
        except DermaError as e:
            self._controller.cancel_selection()
            self._warn(e.user_message())
            return
        self._accept_selection([frame])

    def _on_files_dropped(self, paths: List[str]):
        if self._controller.state is not FlowState.IDLE:
            return
        self._accept_selection(paths)

    def _accept_selection(self, refs: List[ImageRef]):
        for ref in refs:
            if isinstance(ref, (bytes, bytearray)):
                continue
            validation = validate_skin_image(str(ref))
            if not validation.valid:
                if self._controller.state is FlowState.SELECTING:
                    self._controller.cancel_selection()
                self._warn(validation.error_message)
                return
        try:
            self._controller.select_images(refs)
        except DermaError as e:
            self._warn(e.user_message())
            return
        self._picker.show_images(self._controller.images)

    def _on_field_changed(self, name: str, value: str):
        if self._controller.state is FlowState.READY:
            self._controller.update_context(**{name: value})

    # --- Analysis ---

    def _on_analyze(self):
        try:
            self._controller.begin_analysis()
        except DermaError as e:
            self._warn(e.user_message())
            return

        self._worker = DiagnosisWorker(
            self._controller.config,
            self._mode,
            self._controller.images,
            self._controller.context,
            parent=self,
        )
        self._worker.progress.connect(self._progress.update_progress)
        self._worker.finished.connect(self._on_finished)
        self._worker.error.connect(self._on_error)
        self._worker.start()

    def _release_worker(self):
        worker, self._worker = self._worker, None
        if worker is not None:
            worker.wait()
            worker.deleteLater()

    def _on_finished(self, result: DiagnosisResult):
        self._release_worker()
        self._controller.complete_analysis(result)

    def _on_error(self, message: str):
        self._release_worker()
        self._controller.fail_analysis()
        QMessageBox.critical(self, t("common.error"), message)

    def _on_reset(self):
        try:
            self._controller.reset()
        except InvalidTransition:
            return
        self._picker.reset()
        self._form.clear()

    # --- Lifecycle ---

    def set_config(self, config: AppConfig):
        """Use new settings for the next analysis."""
        self._controller.set_config(config)

    def cleanup(self):
        if self._worker and self._worker.isRunning():
            if not self._worker.wait(5000):
                logger.warning("Diagnosis worker still running at shutdown, terminating")
                self._worker.terminate()
                self._worker.wait(2000)
