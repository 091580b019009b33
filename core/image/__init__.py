"""
Image utilities for the compositor.

This package provides focused image utilities:
- converters: Decoding, encoding and format conversions (NumPy, PIL, base64, data URI)
- processors: Image operations (resize, thumbnail)
"""

from core.image import processors
from core.image.converters import ImageConverters

__all__ = ["ImageConverters", "processors"]
