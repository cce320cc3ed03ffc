"""Application configuration: Gemini credentials, model, image settings and theme.

The configuration is an immutable value built once by ``load_config`` and
handed to whatever needs it; nothing reads it from module state.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

SETTINGS_ORG = "DermaDiagnostic"
SETTINGS_APP = "DermaDiagnostic"

PLACEHOLDER_API_KEY = "TU_API_KEY_DE_GEMINI_AQUI"
DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_IMAGE_QUALITY = 0.8
DEFAULT_MAX_IMAGE_SIZE = 1024
DEFAULT_ANALYSIS_TIMEOUT_MS = 30000

THEMES = ("light", "dark")
DEFAULT_THEME = "light"


@dataclass(frozen=True)
class AppConfig:
    """Settings for one diagnosis session."""
    api_key: str = ""
    model: str = DEFAULT_MODEL
    image_quality: float = DEFAULT_IMAGE_QUALITY
    max_image_size: int = DEFAULT_MAX_IMAGE_SIZE
    analysis_timeout_ms: int = DEFAULT_ANALYSIS_TIMEOUT_MS
    theme: str = DEFAULT_THEME

    @property
    def has_api_key(self) -> bool:
        """True when a real key is set (not empty, not the placeholder)."""
        key = (self.api_key or "").strip()
        return bool(key) and key != PLACEHOLDER_API_KEY


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_settings():
    """Open the persistent QSettings store used by the Settings tab."""
    from PyQt6.QtCore import QSettings
    return QSettings(SETTINGS_ORG, SETTINGS_APP)


def load_config(settings=None, use_dotenv: bool = True) -> AppConfig:
    """Build an ``AppConfig`` from the environment and saved settings.

    Values saved from the Settings tab win over environment variables,
    which win over the defaults. ``settings`` is any object with a
    ``value(key, default)`` method; pass ``None`` to skip saved settings.
    """
    if use_dotenv:
        load_dotenv()

    api_key = os.getenv("GEMINI_API_KEY", "")
    model = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
    theme = DEFAULT_THEME

    if settings is not None:
        api_key = settings.value("api_key", "") or api_key
        model = settings.value("model", "") or model
        theme = settings.value("theme", DEFAULT_THEME)

    return AppConfig(
        api_key=api_key.strip(),
        model=model.strip() or DEFAULT_MODEL,
        image_quality=_env_float("DERMADIAGNOSTIC_IMAGE_QUALITY", DEFAULT_IMAGE_QUALITY),
        max_image_size=_env_int("DERMADIAGNOSTIC_MAX_IMAGE_SIZE", DEFAULT_MAX_IMAGE_SIZE),
        analysis_timeout_ms=_env_int("DERMADIAGNOSTIC_TIMEOUT_MS", DEFAULT_ANALYSIS_TIMEOUT_MS),
        theme=theme if theme in THEMES else DEFAULT_THEME,
    )


def save_api_settings(settings, api_key: str, model: Optional[str] = None):
    """Persist the API key and model chosen in the Settings tab."""
    settings.setValue("api_key", api_key.strip())
    if model is not None:
        settings.setValue("model", model.strip())


def save_theme(settings, theme: str):
    """Persist the stylesheet picked in the Settings tab."""
    if theme not in THEMES:
        raise ValueError(f"Unknown theme: {theme}")
    settings.setValue("theme", theme)
