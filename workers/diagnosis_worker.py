"""Background worker that runs one diagnosis request off the UI thread."""

import logging
from typing import Optional, Sequence

from PyQt6.QtCore import QThread, pyqtSignal

from core.config import AppConfig
from core.diagnosis import DiagnosisPipeline
from core.errors import DermaError
from core.utils import FlowMode, ImageRef, PatientContext

logger = logging.getLogger(__name__)


class DiagnosisWorker(QThread):
    """Encodes the images, calls Gemini and resolves the reply.

    There is no cancel: once started the worker always ends with exactly
    one of ``finished`` or ``error``.
    """

    progress = pyqtSignal(int, int, str)  # step, total, message
    finished = pyqtSignal(object)          # DiagnosisResult
    error = pyqtSignal(str)                # user-facing message

    def __init__(
        self,
        config: AppConfig,
        mode: FlowMode,
        images: Sequence[ImageRef],
        context: Optional[PatientContext] = None,
        pipeline: Optional[DiagnosisPipeline] = None,
        parent=None,
    ):
        super().__init__(parent)
        self._mode = mode
        self._images = tuple(images)
        # Snapshot so later typing in the form cannot change an in-flight request.
        self._context = PatientContext(**vars(context)) if context else None
        self._pipeline = pipeline or DiagnosisPipeline(config)

    def run(self):
        try:
            result = self._pipeline.run(
                self._mode,
                self._images,
                self._context,
                on_progress=lambda s, t, m: self.progress.emit(s, t, m),
            )
            self.finished.emit(result)
        except DermaError as e:
            self.error.emit(e.user_message())
        except Exception as e:
            logger.exception("Unexpected failure during diagnosis")
            from i18n import t
            self.error.emit(t("error.unexpected", detail=str(e)))
