"""Camera capture for the single-photo flow."""

import logging

import cv2

from core.errors import PermissionDenied, SelectionError

logger = logging.getLogger(__name__)


def capture_from_camera(device_index: int = 0, quality: float = 0.8) -> bytes:
    """Grab one frame from a local camera and return it as JPEG bytes.

    Raises PermissionDenied when the device cannot be opened, which is how
    OpenCV reports both a refused permission and a missing camera.
    """
    cap = cv2.VideoCapture(device_index)
    try:
        if not cap.isOpened():
            logger.warning("Camera %d could not be opened", device_index)
            raise PermissionDenied(f"Camera {device_index} is not accessible")

        ok, frame = cap.read()
        if not ok or frame is None:
            raise SelectionError(f"Camera {device_index} returned no frame")

        jpeg_quality = max(1, min(100, int(round(quality * 100))))
        ok, buffer = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, jpeg_quality])
        if not ok:
            raise SelectionError("Captured frame could not be encoded")
        return buffer.tobytes()
    finally:
        cap.release()
