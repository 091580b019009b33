"""
Pytest configuration and fixtures for compositor tests
"""

import io

import cv2
import numpy as np
import pytest
from PIL import Image

from config import Settings
from core.compositor import Compositor
from core.label_renderer import LabelRenderer
from services.compositor_service import CompositorService


def encode_png(image: np.ndarray) -> bytes:
    """Encode an RGB/RGBA array as PNG bytes"""
    buffer = io.BytesIO()
    Image.fromarray(image).save(buffer, format="PNG")
    return buffer.getvalue()


def solid_image(width: int, height: int, color) -> np.ndarray:
    """Create a single-color RGB image"""
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[:] = color
    return image


@pytest.fixture
def before_image():
    """800x600 test image with some content"""
    image = np.full((600, 800, 3), 90, dtype=np.uint8)
    cv2.rectangle(image, (100, 100), (300, 300), (255, 255, 255), -1)
    cv2.circle(image, (600, 400), 80, (200, 40, 40), -1)
    return image


@pytest.fixture
def after_image():
    """400x300 test image with some content"""
    image = np.full((300, 400, 3), 160, dtype=np.uint8)
    cv2.rectangle(image, (50, 50), (150, 150), (0, 0, 0), -1)
    cv2.circle(image, (300, 200), 40, (40, 200, 40), -1)
    return image


@pytest.fixture
def white_image():
    """Pure white 400x300 image"""
    return solid_image(400, 300, (255, 255, 255))


@pytest.fixture
def black_image():
    """Pure black 400x300 image"""
    return solid_image(400, 300, (0, 0, 0))


@pytest.fixture
def before_png(before_image):
    """Before image encoded as PNG"""
    return encode_png(before_image)


@pytest.fixture
def after_png(after_image):
    """After image encoded as PNG"""
    return encode_png(after_image)


@pytest.fixture
def settings():
    """Default settings, isolated from the environment"""
    return Settings(_env_file=None)


@pytest.fixture
def compositor():
    """Compositor with default configuration"""
    return Compositor()


@pytest.fixture
def label_renderer():
    """Label renderer with default fonts"""
    return LabelRenderer()


@pytest.fixture
def compositor_service(compositor, settings):
    """CompositorService instance for testing"""
    return CompositorService(compositor=compositor, settings=settings)
