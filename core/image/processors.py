"""
Image processing operations.

Handles image manipulation tasks:
- Resizing to an exact placed size
- Preview thumbnail creation
"""

import logging
from typing import Tuple, Union

import cv2
import numpy as np
from PIL import Image

from core.constants import ImageConstants
from core.image.converters import numpy_to_pil, pil_to_numpy, to_base64

logger = logging.getLogger(__name__)


def resize_image(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Resize image to an exact size.

    Area interpolation is used when shrinking, bicubic when enlarging.

    Args:
        image: Input image as NumPy array
        width: Target width
        height: Target height

    Returns:
        Resized image as NumPy array (the input itself if already that size)
    """
    h, w = image.shape[:2]
    if (w, h) == (width, height):
        return image

    if width < w or height < h:
        interpolation = cv2.INTER_AREA
    else:
        interpolation = cv2.INTER_CUBIC

    return cv2.resize(image, (width, height), interpolation=interpolation)


def create_thumbnail(
    image: Union[np.ndarray, Image.Image],
    width: int = ImageConstants.DEFAULT_THUMBNAIL_WIDTH,
    quality: int = ImageConstants.THUMBNAIL_JPEG_QUALITY,
) -> Tuple[np.ndarray, str]:
    """
    Create preview thumbnail from image.

    Args:
        image: Input image (NumPy array or PIL Image)
        width: Maximum thumbnail width in pixels
        quality: JPEG quality of the base64 payload

    Returns:
        Tuple of (thumbnail as NumPy array, thumbnail as base64 JPEG string)
    """
    width = max(ImageConstants.MIN_THUMBNAIL_WIDTH, min(width, ImageConstants.MAX_THUMBNAIL_WIDTH))

    if isinstance(image, np.ndarray):
        pil_image = numpy_to_pil(image)
    else:
        pil_image = image.copy()

    # Width is the only bound; thumbnail() keeps aspect and never enlarges
    pil_image.thumbnail((width, pil_image.height), Image.Resampling.LANCZOS)

    thumb_array = pil_to_numpy(pil_image)
    thumb_base64 = to_base64(pil_image, quality=quality)

    logger.debug(f"Created thumbnail {pil_image.width}x{pil_image.height}")
    return thumb_array, thumb_base64
