"""Internationalization system for DermaDiagnostic.

Spanish is the default and the fallback language.
Usage: from i18n import t; t("key", name=value)
"""

import json
import sys
from collections import OrderedDict
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QSettings

from core.config import SETTINGS_APP, SETTINGS_ORG

DEFAULT_LANGUAGE = "es"

LANGUAGES = OrderedDict([
    ("es", {"name": "Spanish", "native_name": "Español"}),
    ("en", {"name": "English", "native_name": "English"}),
])

_translations: dict = {}
_fallback: dict = {}
_current_lang: str = DEFAULT_LANGUAGE


def _get_i18n_dir() -> Path:
    """Get the directory containing translation JSON files."""
    if getattr(sys, "frozen", False):
        return Path(sys._MEIPASS) / "i18n"
    return Path(__file__).parent


def _load_json(lang_code: str) -> dict:
    """Load a translation JSON file."""
    path = _get_i18n_dir() / f"{lang_code}.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def init(language: Optional[str] = None):
    """Initialize the translation system. Call once at app startup.

    ``language`` overrides the saved preference (used by tests).
    """
    global _translations, _fallback, _current_lang
    if language is None:
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        language = settings.value("language", DEFAULT_LANGUAGE)
    _current_lang = language if language in LANGUAGES else DEFAULT_LANGUAGE

    _fallback = _load_json(DEFAULT_LANGUAGE)
    if _current_lang != DEFAULT_LANGUAGE:
        _translations = _load_json(_current_lang)
    else:
        _translations = _fallback


def t(key: str, **kwargs) -> str:
    """Translate a key with optional format arguments.

    Falls back: current language -> Spanish -> raw key.
    """
    text = _translations.get(key) or _fallback.get(key) or key
    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return text
    return text


def get_current_language() -> str:
    """Get the current language code."""
    return _current_lang


def set_language(code: str):
    """Save language preference. Takes effect on restart."""
    settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
    settings.setValue("language", code)
