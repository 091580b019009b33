"""
Core modules for the before/after compositor
"""

from .compositor import CompositeImage, Compositor
from .exceptions import (
    CompositorError,
    DecodeFailure,
    EncodingFailure,
    InvalidImageDimensions,
    LayoutOverflow,
    UnsupportedMediaType,
)
from .layout import LayoutPlan, compute_layout

__all__ = [
    "Compositor",
    "CompositeImage",
    "LayoutPlan",
    "compute_layout",
    "CompositorError",
    "DecodeFailure",
    "EncodingFailure",
    "InvalidImageDimensions",
    "LayoutOverflow",
    "UnsupportedMediaType",
]
