"""Image loading, downscaling and base64 encoding for the Gemini request."""

import base64
import io
import re
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image, ImageOps, UnidentifiedImageError

from core.errors import EncodingError
from core.utils import ImageRef, ProgressCallback, describe_image_ref

_DATA_URI_PREFIX = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)


class ImageEncoder:
    """Turns image references into base64 JPEG payloads.

    Every payload is re-encoded as JPEG so it matches the ``image/jpeg``
    MIME type the request declares, and downscaled so its longest side
    is at most ``max_image_size`` pixels.
    """

    def __init__(self, max_image_size: int = 1024, quality: float = 0.8):
        self._max_image_size = max_image_size
        self._quality = quality

    @property
    def jpeg_quality(self) -> int:
        """Quality factor (0..1) mapped to Pillow's 1..95 JPEG scale."""
        return max(1, min(95, int(round(self._quality * 100))))

    @staticmethod
    def strip_data_uri(text: str) -> str:
        """Remove a leading ``data:<mime>;base64,`` prefix if present."""
        return _DATA_URI_PREFIX.sub("", text.strip(), count=1)

    @staticmethod
    def load_image(ref: ImageRef) -> Image.Image:
        """Open an image from a file path, a data URI or a byte buffer."""
        try:
            if isinstance(ref, (bytes, bytearray)):
                img = Image.open(io.BytesIO(bytes(ref)))
            elif isinstance(ref, str) and _DATA_URI_PREFIX.match(ref.strip()):
                raw = base64.b64decode(ImageEncoder.strip_data_uri(ref), validate=True)
                img = Image.open(io.BytesIO(raw))
            else:
                path = Path(ref)
                if not path.is_file():
                    raise EncodingError(f"Image not found: {path}", name=path.name)
                img = Image.open(path)
            img.load()
            return img
        except EncodingError:
            raise
        except (OSError, UnidentifiedImageError, ValueError) as e:
            raise EncodingError(
                f"Cannot read image {describe_image_ref(ref)}: {e}",
                name=describe_image_ref(ref),
            ) from e

    def to_jpeg_bytes(self, ref: ImageRef) -> bytes:
        """Load, orient, downscale and re-encode an image as JPEG."""
        img = self.load_image(ref)
        try:
            img = ImageOps.exif_transpose(img)
            if img.mode != "RGB":
                img = img.convert("RGB")
            if max(img.size) > self._max_image_size:
                img.thumbnail(
                    (self._max_image_size, self._max_image_size),
                    Image.Resampling.LANCZOS,
                )
            buffer = io.BytesIO()
            img.save(buffer, format="JPEG", quality=self.jpeg_quality)
            return buffer.getvalue()
        except (OSError, ValueError) as e:
            raise EncodingError(
                f"Cannot convert image {describe_image_ref(ref)}: {e}",
                name=describe_image_ref(ref),
            ) from e

    def encode(self, ref: ImageRef) -> str:
        """Encode one image as base64 text without any data-URI prefix."""
        return base64.b64encode(self.to_jpeg_bytes(ref)).decode("ascii")

    def encode_all(
        self,
        refs: Sequence[ImageRef],
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[str]:
        """Encode images one at a time, returning payloads in input order."""
        payloads = []
        total = len(refs)
        for index, ref in enumerate(refs, start=1):
            if on_progress:
                on_progress(index, total, describe_image_ref(ref))
            payloads.append(self.encode(ref))
        return payloads
