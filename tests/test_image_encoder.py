"""Tests for core.image_encoder module."""

import base64
import io

import pytest
from PIL import Image

from core.errors import EncodingError
from core.image_encoder import ImageEncoder


def _decode(payload):
    return Image.open(io.BytesIO(base64.b64decode(payload)))


class TestEncode:
    def test_payload_is_plain_base64_jpeg(self, sample_jpeg):
        payload = ImageEncoder().encode(sample_jpeg)
        assert not payload.startswith("data:")
        raw = base64.b64decode(payload, validate=True)
        assert raw[:3] == b"\xff\xd8\xff"

    def test_large_image_downscaled(self, sample_large_image):
        img = _decode(ImageEncoder(max_image_size=1024).encode(sample_large_image))
        assert max(img.size) <= 1024
        assert img.size == (1024, 768)

    def test_small_image_not_upscaled(self, sample_jpeg):
        img = _decode(ImageEncoder(max_image_size=1024).encode(sample_jpeg))
        assert img.size == (224, 224)

    def test_rgba_converted_to_rgb(self, sample_png_rgba):
        img = _decode(ImageEncoder().encode(sample_png_rgba))
        assert img.format == "JPEG"
        assert img.mode == "RGB"

    def test_bytes_input(self, sample_jpeg_bytes):
        img = _decode(ImageEncoder().encode(sample_jpeg_bytes))
        assert img.size == (64, 48)

    def test_data_uri_input(self, sample_jpeg_bytes):
        uri = "data:image/jpeg;base64," + base64.b64encode(sample_jpeg_bytes).decode("ascii")
        img = _decode(ImageEncoder().encode(uri))
        assert img.size == (64, 48)

    def test_missing_file(self, tmp_dir):
        with pytest.raises(EncodingError):
            ImageEncoder().encode(str(tmp_dir / "nope.jpg"))

    def test_garbage_file(self, tmp_dir):
        bad = tmp_dir / "bad.png"
        bad.write_bytes(b"\x00\x01garbage")
        with pytest.raises(EncodingError):
            ImageEncoder().encode(str(bad))

    def test_garbage_bytes(self):
        with pytest.raises(EncodingError):
            ImageEncoder().encode(b"definitely not an image")

    def test_padded_data_uri_input(self, sample_jpeg_bytes):
        uri = "data:image/jpeg;base64," + base64.b64encode(sample_jpeg_bytes).decode("ascii")
        img = _decode(ImageEncoder().encode(f"  {uri}\n"))
        assert img.size == (64, 48)

    def test_invalid_data_uri(self):
        with pytest.raises(EncodingError):
            ImageEncoder().encode("data:image/jpeg;base64,@@@not-base64@@@")


class TestEncodeAll:
    def test_order_preserved(self, sample_photo_set):
        payloads = ImageEncoder().encode_all(sample_photo_set)
        widths = [_decode(p).size[0] for p in payloads]
        assert widths == [40, 50, 60, 70, 80]

    def test_progress_reported_per_image(self, sample_photo_set):
        calls = []
        ImageEncoder().encode_all(
            sample_photo_set[:3],
            on_progress=lambda i, n, name: calls.append((i, n, name)),
        )
        assert calls == [
            (1, 3, "angle_0.jpg"),
            (2, 3, "angle_1.jpg"),
            (3, 3, "angle_2.jpg"),
        ]

    def test_stops_at_first_failure(self, sample_photo_set, tmp_dir):
        refs = [sample_photo_set[0], str(tmp_dir / "missing.jpg"), sample_photo_set[1]]
        with pytest.raises(EncodingError):
            ImageEncoder().encode_all(refs)


class TestHelpers:
    @pytest.mark.parametrize("quality, expected", [
        (0.8, 80),
        (0.0, 1),
        (1.0, 95),
        (0.555, 56),
    ])
    def test_jpeg_quality(self, quality, expected):
        assert ImageEncoder(quality=quality).jpeg_quality == expected

    def test_strip_data_uri(self):
        assert ImageEncoder.strip_data_uri("data:image/png;base64,QUJD") == "QUJD"
        assert ImageEncoder.strip_data_uri("QUJD") == "QUJD"
        assert ImageEncoder.strip_data_uri("  DATA:image/jpeg;base64,QUJD ") == "QUJD"
