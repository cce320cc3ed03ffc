"""Photo picker: gallery dialog, drag and drop, optional camera, thumbnails."""

from pathlib import Path
from typing import List, Sequence

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor, QDragEnterEvent, QDropEvent, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.utils import SUPPORTED_IMAGE_EXTENSIONS, ImageRef, describe_image_ref
from i18n import t

THUMBNAIL_SIZE = 100


def _pixmap_for(ref: ImageRef) -> QPixmap:
    if isinstance(ref, (bytes, bytearray)):
        image = QImage.fromData(bytes(ref))
        return QPixmap.fromImage(image)
    return QPixmap(str(ref))


class ImagePicker(QWidget):
    """Lets the user choose photos and previews the ones being held.

    The picker never decides whether a selection is acceptable; it only
    reports what the user chose through its signals.
    """

    browse_requested = pyqtSignal()
    camera_requested = pyqtSignal()
    files_dropped = pyqtSignal(list)  # list of paths

    def __init__(self, allow_multiple: bool, allow_camera: bool = False,
                 instruction_text: str = "", parent=None):
        super().__init__(parent)
        self._allow_multiple = allow_multiple
        self._allow_camera = allow_camera
        self._instruction_text = instruction_text
        self._has_images = False
        self._drag_over = False
        self.setAcceptDrops(True)
        self.setObjectName("imagePicker")
        self.setMinimumHeight(180)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._icon_label = QLabel("\U0001f4f7")
        self._icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._icon_label.setProperty("class", "dropZoneIcon")

        self._text_label = QLabel(self._instruction_text)
        self._text_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._text_label.setWordWrap(True)
        self._text_label.setProperty("class", "dropZoneText")

        self._buttons_row = QWidget()
        buttons_layout = QHBoxLayout(self._buttons_row)
        buttons_layout.setContentsMargins(0, 0, 0, 0)
        buttons_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        gallery_key = "picker.select_photos" if self._allow_multiple else "picker.select_photo"
        self._gallery_btn = QPushButton(t(gallery_key))
        self._gallery_btn.setObjectName("primaryButton")
        self._gallery_btn.clicked.connect(self.browse_requested.emit)
        buttons_layout.addWidget(self._gallery_btn)

        if self._allow_camera:
            self._camera_btn = QPushButton(t("picker.take_photo"))
            self._camera_btn.setProperty("class", "secondaryButton")
            self._camera_btn.clicked.connect(self.camera_requested.emit)
            buttons_layout.addWidget(self._camera_btn)

        self._count_label = QLabel()
        self._count_label.setProperty("class", "dropZoneFileInfo")
        self._count_label.setStyleSheet("font-weight: bold;")
        self._count_label.hide()

        self._thumbs = QWidget()
        self._thumbs_layout = QHBoxLayout(self._thumbs)
        self._thumbs_layout.setContentsMargins(0, 0, 0, 0)
        self._thumbs_layout.setSpacing(8)
        self._thumbs_layout.setAlignment(Qt.AlignmentFlag.AlignLeft)

        self._thumbs_scroll = QScrollArea()
        self._thumbs_scroll.setWidgetResizable(True)
        self._thumbs_scroll.setFrameShape(QScrollArea.Shape.NoFrame)
        self._thumbs_scroll.setFixedHeight(THUMBNAIL_SIZE + 24)
        self._thumbs_scroll.setWidget(self._thumbs)
        self._thumbs_scroll.hide()

        layout.addWidget(self._icon_label)
        layout.addWidget(self._text_label)
        layout.addWidget(self._buttons_row)
        layout.addWidget(self._count_label)
        layout.addWidget(self._thumbs_scroll)

    # --- Dialogs ---

    def open_file_dialog(self) -> List[str]:
        """Show the gallery dialog. Returns an empty list when cancelled."""
        ext_filter = " ".join(f"*{e}" for e in sorted(SUPPORTED_IMAGE_EXTENSIONS))
        name_filter = f"{t('picker.filter_name')} ({ext_filter})"
        if self._allow_multiple:
            paths, _ = QFileDialog.getOpenFileNames(
                self, t("picker.dialog_title_multi"), "", name_filter,
            )
            return list(paths)
        path, _ = QFileDialog.getOpenFileName(
            self, t("picker.dialog_title_single"), "", name_filter,
        )
        return [path] if path else []

    # --- Display ---

    def show_images(self, refs: Sequence[ImageRef]):
        """Replace the placeholder with thumbnails of the held images."""
        self._clear_thumbnails()
        for ref in refs:
            thumb = QLabel()
            thumb.setFixedSize(THUMBNAIL_SIZE, THUMBNAIL_SIZE)
            thumb.setAlignment(Qt.AlignmentFlag.AlignCenter)
            pixmap = _pixmap_for(ref)
            if pixmap.isNull():
                thumb.setText(describe_image_ref(ref))
                thumb.setWordWrap(True)
            else:
                thumb.setPixmap(pixmap.scaled(
                    THUMBNAIL_SIZE, THUMBNAIL_SIZE,
                    Qt.AspectRatioMode.KeepAspectRatio,
                    Qt.TransformationMode.SmoothTransformation,
                ))
            thumb.setToolTip(describe_image_ref(ref))
            self._thumbs_layout.addWidget(thumb)

        self._count_label.setText(t("picker.selected_count", count=len(refs)))
        self._has_images = True
        self._icon_label.hide()
        self._text_label.hide()
        self._buttons_row.hide()
        self._count_label.show()
        self._thumbs_scroll.show()
        self.update()

    def set_enabled_actions(self, enabled: bool):
        self._gallery_btn.setEnabled(enabled)
        if self._allow_camera:
            self._camera_btn.setEnabled(enabled)

    def reset(self):
        """Drop the thumbnails and show the placeholder again."""
        self._clear_thumbnails()
        self._has_images = False
        self._drag_over = False
        self._count_label.hide()
        self._thumbs_scroll.hide()
        self._icon_label.show()
        self._text_label.show()
        self._buttons_row.show()
        self.update()

    def _clear_thumbnails(self):
        while self._thumbs_layout.count():
            item = self._thumbs_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

    # --- Drag and drop ---

    @staticmethod
    def _is_supported(file_path: str) -> bool:
        return Path(file_path).suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS

    def dragEnterEvent(self, event: QDragEnterEvent):
        if self._has_images or not event.mimeData().hasUrls():
            return
        paths = [u.toLocalFile() for u in event.mimeData().urls()]
        if paths and all(self._is_supported(p) for p in paths):
            event.acceptProposedAction()
            self._drag_over = True
            self.update()

    def dragLeaveEvent(self, event):
        self._drag_over = False
        self.update()

    def dropEvent(self, event: QDropEvent):
        self._drag_over = False
        paths = [u.toLocalFile() for u in event.mimeData().urls()]
        paths = [p for p in paths if self._is_supported(p)]
        if paths:
            self.files_dropped.emit(paths)
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        if self._drag_over:
            pen = QPen(QColor("#007AFF"), 2, Qt.PenStyle.DashLine)
        elif self._has_images:
            pen = QPen(QColor("#34C759"), 2, Qt.PenStyle.SolidLine)
        else:
            pen = QPen(QColor("#888888"), 2, Qt.PenStyle.DashLine)

        pen.setDashPattern([8, 4])
        painter.setPen(pen)
        painter.drawRoundedRect(self.rect().adjusted(1, 1, -1, -1), 12, 12)
        painter.end()
