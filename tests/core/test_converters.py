"""
Tests for image decoding, encoding and conversions
"""

import base64
import io

import numpy as np
import pytest
from PIL import Image

from conftest import encode_png, solid_image
from core.exceptions import DecodeFailure, EncodingFailure
from core.image.converters import (
    decode_image,
    encode_jpeg,
    ensure_rgb,
    numpy_to_pil,
    pil_to_numpy,
    to_base64,
    to_data_uri,
)
from core.image.processors import create_thumbnail, resize_image


class TestDecode:
    """decode_image()"""

    def test_png(self, before_image):
        decoded = decode_image(encode_png(before_image), "before")

        assert decoded.shape == (600, 800, 3)
        assert decoded.dtype == np.uint8
        np.testing.assert_array_equal(decoded, before_image)

    def test_transparency_flattened_to_white(self):
        rgba = np.zeros((10, 10, 4), dtype=np.uint8)
        decoded = decode_image(encode_png(rgba))

        assert (decoded == 255).all()

    def test_grayscale_becomes_rgb(self):
        gray = np.full((8, 6), 77, dtype=np.uint8)
        decoded = decode_image(encode_png(gray))

        assert decoded.shape == (8, 6, 3)
        assert (decoded == 77).all()

    def test_exif_orientation_applied(self):
        """JPEG tagged as rotated is decoded upright"""
        exif = Image.Exif()
        exif[0x0112] = 6  # rotate 90 CW on display
        buffer = io.BytesIO()
        Image.new("RGB", (40, 20), (10, 20, 30)).save(buffer, format="JPEG", exif=exif)

        decoded = decode_image(buffer.getvalue())
        assert decoded.shape[:2] == (40, 20)

    @pytest.mark.parametrize("data", [b"", b"definitely not an image", b"\x89PNG\r\n\x1a\n"])
    def test_invalid_bytes(self, data):
        with pytest.raises(DecodeFailure) as exc_info:
            decode_image(data, "after")

        assert exc_info.value.detail["source"] == "after"
        assert exc_info.value.is_upload_error

    def test_truncated_file(self, before_image):
        data = encode_png(before_image)
        with pytest.raises(DecodeFailure):
            decode_image(data[: len(data) // 2])


class TestEncode:
    """JPEG encoding and transport helpers"""

    def test_encode_jpeg(self, after_image):
        data = encode_jpeg(after_image)

        with Image.open(io.BytesIO(data)) as decoded:
            assert decoded.format == "JPEG"
            assert decoded.size == (400, 300)

    def test_quality_affects_size(self, before_image):
        assert len(encode_jpeg(before_image, 95)) > len(encode_jpeg(before_image, 30))

    def test_encoding_failure(self, monkeypatch, after_image):
        def broken_save(self, *args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(Image.Image, "save", broken_save)
        with pytest.raises(EncodingFailure) as exc_info:
            encode_jpeg(after_image)

        assert "disk full" in exc_info.value.message
        assert not exc_info.value.is_upload_error

    def test_data_uri(self):
        uri = to_data_uri(b"\xff\xd8abc")

        assert uri.startswith("data:image/jpeg;base64,")
        assert base64.b64decode(uri.split(",", 1)[1]) == b"\xff\xd8abc"

    def test_to_base64_encodes_arrays(self, after_image):
        data = base64.b64decode(to_base64(after_image))
        assert data[:2] == b"\xff\xd8"


class TestConversions:
    """Array/PIL helpers"""

    def test_round_trip_pil(self, after_image):
        np.testing.assert_array_equal(pil_to_numpy(numpy_to_pil(after_image)), after_image)

    def test_ensure_rgb_rgba(self):
        rgba = np.zeros((4, 4, 4), dtype=np.uint8)
        rgba[..., 0] = 255
        rgba[..., 3] = 255

        rgb = ensure_rgb(rgba)
        assert rgb.shape == (4, 4, 3)
        assert tuple(rgb[0, 0]) == (255, 0, 0)


class TestProcessors:
    """Resize and thumbnails"""

    def test_resize_same_size_is_identity(self, after_image):
        assert resize_image(after_image, 400, 300) is after_image

    def test_resize_exact(self, before_image):
        assert resize_image(before_image, 123, 45).shape == (45, 123, 3)
        assert resize_image(before_image, 1600, 1200).shape == (1200, 1600, 3)

    def test_thumbnail(self, before_image):
        thumb, thumb_base64 = create_thumbnail(before_image, width=320)

        assert thumb.shape == (240, 320, 3)
        with Image.open(io.BytesIO(base64.b64decode(thumb_base64))) as decoded:
            assert decoded.size == (320, 240)

    def test_thumbnail_never_enlarges(self):
        thumb, _ = create_thumbnail(solid_image(100, 50, (1, 2, 3)), width=320)
        assert thumb.shape == (50, 100, 3)
