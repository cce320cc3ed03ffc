"""Shared test fixtures for DermaDiagnostic."""

import io
import os
import tempfile
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from core.config import PLACEHOLDER_API_KEY, AppConfig
from core.errors import ConfigurationError
from core.utils import PatientContext

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeGeminiClient:
    """Stands in for GeminiClient; records every request it receives."""

    def __init__(self, reply="acné", error=None, configured=True):
        self.reply = reply
        self.error = error
        self.configured = configured
        self.calls = []

    def check_configuration(self):
        if not self.configured:
            raise ConfigurationError("not configured")

    def generate(self, prompt, images):
        self.check_configuration()
        self.calls.append((prompt, list(images)))
        if self.error:
            raise self.error
        return self.reply


def _random_image(width, height, mode="RGB"):
    channels = {"RGB": 3, "RGBA": 4}[mode]
    data = np.random.randint(0, 255, (height, width, channels), dtype=np.uint8)
    return Image.fromarray(data)


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def sample_jpeg(tmp_dir):
    """A small 224x224 JPEG photo."""
    path = tmp_dir / "lesion.jpg"
    _random_image(224, 224).save(path, format="JPEG")
    return str(path)


@pytest.fixture
def sample_png_rgba(tmp_dir):
    """A PNG with an alpha channel, which JPEG cannot store."""
    path = tmp_dir / "lesion.png"
    _random_image(120, 80, mode="RGBA").save(path, format="PNG")
    return str(path)


@pytest.fixture
def sample_large_image(tmp_dir):
    """A 2048x1536 photo, larger than the default maximum dimension."""
    path = tmp_dir / "large.jpg"
    _random_image(2048, 1536).save(path, format="JPEG")
    return str(path)


@pytest.fixture
def sample_jpeg_bytes():
    """An in-memory JPEG, as returned by a camera capture."""
    buffer = io.BytesIO()
    _random_image(64, 48).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def sample_photo_set(tmp_dir):
    """Five photos with distinct widths so their order can be checked."""
    paths = []
    for i, width in enumerate((40, 50, 60, 70, 80)):
        path = tmp_dir / f"angle_{i}.jpg"
        _random_image(width, 30).save(path, format="JPEG")
        paths.append(str(path))
    return paths


@pytest.fixture
def api_config():
    return AppConfig(api_key="test-key-123")


@pytest.fixture
def placeholder_config():
    return AppConfig(api_key=PLACEHOLDER_API_KEY)


@pytest.fixture
def patient_context():
    return PatientContext(
        affected_area="antebrazo",
        medical_history="alergia a la penicilina",
        symptoms="picazón",
        duration="dos semanas",
        external_factors="exposición solar",
    )


@pytest.fixture
def fake_client():
    return FakeGeminiClient()


@pytest.fixture(autouse=True)
def _init_i18n():
    """Initialize i18n in Spanish for all tests, without touching QSettings."""
    import i18n
    i18n.init(language="es")


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the widget tests (offscreen platform)."""
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
