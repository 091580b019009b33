"""
Image format conversion utilities.

Handles conversions between the formats the compositor touches:
- Encoded bytes (JPEG, PNG, WebP, ...) from the caller
- NumPy arrays (RGB, uint8) used as raster surfaces
- PIL Images used for text drawing and encoding
- Base64 strings and data URIs handed back to the caller
"""

import base64
import io
import logging
from typing import Union

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from core.constants import EncodingConstants, LayoutConstants
from core.exceptions import DecodeFailure, EncodingFailure

logger = logging.getLogger(__name__)


class ImageConverters:
    """Utilities for converting between image formats."""

    @staticmethod
    def numpy_to_pil(image: np.ndarray) -> Image.Image:
        """
        Convert NumPy array (RGB) to PIL Image.

        Args:
            image: NumPy array in RGB or grayscale format

        Returns:
            PIL Image in RGB format
        """
        return Image.fromarray(ImageConverters.ensure_rgb(image))

    @staticmethod
    def pil_to_numpy(image: Image.Image) -> np.ndarray:
        """
        Convert PIL Image to an RGB NumPy array.

        Transparent pixels are flattened onto white, the same way a
        browser draws a transparent image onto a white canvas.

        Args:
            image: PIL Image in any mode

        Returns:
            NumPy array of shape (height, width, 3), dtype uint8
        """
        if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
            rgba = image.convert("RGBA")
            background = Image.new("RGBA", rgba.size, LayoutConstants.SEPARATOR_COLOR + (255,))
            background.alpha_composite(rgba)
            image = background

        return np.array(image.convert("RGB"), dtype=np.uint8)

    @staticmethod
    def ensure_rgb(image: np.ndarray) -> np.ndarray:
        """
        Ensure image is a 3-channel RGB uint8 array.

        Args:
            image: Grayscale, RGB or RGBA array

        Returns:
            Image in RGB format
        """
        if image.ndim == 2:
            return cv2.cvtColor(image.astype(np.uint8), cv2.COLOR_GRAY2RGB)
        if image.shape[2] == 4:
            return ImageConverters.pil_to_numpy(Image.fromarray(image.astype(np.uint8)))
        return image.astype(np.uint8, copy=False)

    @staticmethod
    def decode_image(data: bytes, source: str = "image") -> np.ndarray:
        """
        Decode encoded image bytes into an RGB array.

        EXIF orientation is applied so the result matches what a viewer
        displays.

        Args:
            data: Encoded image bytes
            source: Name of the source ("before"/"after") for error reporting

        Returns:
            NumPy array in RGB format

        Raises:
            DecodeFailure: If the bytes are empty or not a decodable image
        """
        if not data:
            raise DecodeFailure(source, "empty input")

        try:
            with Image.open(io.BytesIO(data)) as pil_image:
                pil_image.load()
                pil_image = ImageOps.exif_transpose(pil_image)
                array = ImageConverters.pil_to_numpy(pil_image)
        except (UnidentifiedImageError, Image.DecompressionBombError) as e:
            raise DecodeFailure(source, str(e)) from e
        except (OSError, EOFError, ValueError, SyntaxError) as e:
            # Truncated or corrupt files surface as OSError/SyntaxError from plugins
            raise DecodeFailure(source, str(e)) from e

        logger.debug(f"Decoded {source} image: {array.shape[1]}x{array.shape[0]}")
        return array

    @staticmethod
    def encode_jpeg(
        image: Union[np.ndarray, Image.Image], quality: int = EncodingConstants.JPEG_QUALITY
    ) -> bytes:
        """
        Encode image to JPEG bytes.

        Args:
            image: RGB NumPy array or PIL Image
            quality: JPEG quality (1-100)

        Returns:
            Encoded JPEG bytes

        Raises:
            EncodingFailure: If the surface cannot be serialized
        """
        try:
            if isinstance(image, np.ndarray):
                image = ImageConverters.numpy_to_pil(image)

            buffer = io.BytesIO()
            image.convert("RGB").save(
                buffer, format=EncodingConstants.OUTPUT_FORMAT, quality=quality, optimize=True
            )
            return buffer.getvalue()

        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Failed to encode JPEG: {e}")
            raise EncodingFailure(EncodingConstants.OUTPUT_FORMAT, str(e)) from e

    @staticmethod
    def to_base64(
        image: Union[np.ndarray, Image.Image, bytes],
        quality: int = EncodingConstants.JPEG_QUALITY,
    ) -> str:
        """
        Convert image to base64 string.

        Args:
            image: Input image (NumPy array, PIL Image, or already encoded bytes)
            quality: JPEG quality used when the image still needs encoding

        Returns:
            Base64 encoded string
        """
        if isinstance(image, bytes):
            return base64.b64encode(image).decode("utf-8")

        return base64.b64encode(ImageConverters.encode_jpeg(image, quality)).decode("utf-8")

    @staticmethod
    def to_data_uri(data: bytes, mime_type: str = EncodingConstants.OUTPUT_MIME_TYPE) -> str:
        """Wrap encoded bytes into an embeddable data URI."""
        return f"data:{mime_type};base64,{ImageConverters.to_base64(data)}"


numpy_to_pil = ImageConverters.numpy_to_pil
pil_to_numpy = ImageConverters.pil_to_numpy
ensure_rgb = ImageConverters.ensure_rgb
decode_image = ImageConverters.decode_image
encode_jpeg = ImageConverters.encode_jpeg
to_base64 = ImageConverters.to_base64
to_data_uri = ImageConverters.to_data_uri
