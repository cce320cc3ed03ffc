"""Shared enums, dataclasses, image validation and formatting helpers."""

import os
import sys
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Callable, Tuple, Union


# --- Type aliases ---

ProgressCallback = Callable[[int, int, str], None]  # (step, total, message)
ImageRef = Union[str, Path, bytes]  # file path or in-memory image bytes


# --- Constants ---

MIN_MULTI_IMAGES = 3
MAX_MULTI_IMAGES = 5
IMAGE_MIME_TYPE = "image/jpeg"


# --- Enums ---

class FlowMode(Enum):
    SINGLE = "single"
    MULTI = "multi"

    @property
    def image_bounds(self) -> Tuple[int, int]:
        """Inclusive (min, max) number of images accepted in this mode."""
        if self is FlowMode.SINGLE:
            return 1, 1
        return MIN_MULTI_IMAGES, MAX_MULTI_IMAGES

    def accepts_count(self, count: int) -> bool:
        low, high = self.image_bounds
        return low <= count <= high


class FlowState(Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    READY = "ready"
    ANALYZING = "analyzing"
    RESULT = "result"


# --- Dataclasses ---

@dataclass
class PatientContext:
    """Optional free-text details the patient adds to a multi-photo request."""
    affected_area: str = ""
    medical_history: str = ""
    symptoms: str = ""
    duration: str = ""
    external_factors: str = ""

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def clear(self):
        for name in self.field_names():
            setattr(self, name, "")

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in self.field_names())


@dataclass(frozen=True)
class RecommendationRecord:
    """Canned description, medication and advice bundle for one condition."""
    description: str
    medications: Tuple[str, ...]
    advice: str


@dataclass(frozen=True)
class DiagnosisResult:
    """A recommendation record merged with the label the model returned."""
    condition: str
    description: str
    medications: Tuple[str, ...]
    advice: str
    recognized: bool = True

    @classmethod
    def from_record(cls, condition: str, record: RecommendationRecord,
                    recognized: bool = True) -> "DiagnosisResult":
        return cls(
            condition=condition,
            description=record.description,
            medications=tuple(record.medications),
            advice=record.advice,
            recognized=recognized,
        )


@dataclass
class ValidationResult:
    """Result of image validation."""
    valid: bool
    error_message: str = ""
    image_width: int = 0
    image_height: int = 0
    file_size_bytes: int = 0


# --- Paths ---

def get_asset_path(relative_path: str) -> str:
    """Get absolute path to an asset file, handling PyInstaller frozen apps."""
    if getattr(sys, "frozen", False):
        base = Path(sys._MEIPASS)
    else:
        base = Path(__file__).parent.parent
    return str(base / relative_path)


# --- Validation ---

SUPPORTED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".webp"}


def validate_skin_image(file_path: str) -> ValidationResult:
    """Validate that a file is a readable photograph in a supported format."""
    from i18n import t

    if not file_path:
        return ValidationResult(valid=False, error_message=t("validation.no_file"))

    path = Path(file_path)

    if not path.exists():
        return ValidationResult(valid=False, error_message=t("validation.file_not_found"))

    if not path.is_file():
        return ValidationResult(valid=False, error_message=t("validation.not_a_file"))

    file_size = path.stat().st_size
    if file_size == 0:
        return ValidationResult(valid=False, error_message=t("validation.empty_file"))

    ext = path.suffix.lower()
    if ext not in SUPPORTED_IMAGE_EXTENSIONS:
        return ValidationResult(
            valid=False,
            error_message=t("validation.unsupported_format", ext=ext),
        )

    try:
        from PIL import Image
        with Image.open(str(path)) as img:
            width, height = img.size
    except Exception:
        return ValidationResult(
            valid=False,
            error_message=t("validation.cannot_read_image"),
        )

    return ValidationResult(
        valid=True,
        image_width=width,
        image_height=height,
        file_size_bytes=file_size,
    )


# --- Formatting ---

def format_file_size(size_bytes: int) -> str:
    """Format byte count as human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"


def describe_image_ref(ref: ImageRef) -> str:
    """Short human-readable name for an image reference, for logs and labels."""
    if isinstance(ref, (bytes, bytearray)):
        return f"<captura {format_file_size(len(ref))}>"
    if isinstance(ref, str) and ref.startswith("data:"):
        return "<data uri>"
    return os.path.basename(str(ref))
