"""
Before/after compositor.

Runs the full pipeline for one comparison image:

1. layout computation
2. canvas allocation and image blitting
3. adaptive-contrast label badges (before label, then after label)
4. optional letterboxing into a target format
5. JPEG encoding (``render_jpeg`` only)

Each call is independent: the canvas and all derived placement data are
created inside the call and dropped when it returns.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image

from core.canvas import WorkingCanvas
from core.constants import EncodingConstants, LabelConstants, LayoutConstants
from core.image.converters import encode_jpeg, pil_to_numpy
from core.label_renderer import LabelPlacement, LabelRenderer
from core.layout import LayoutPlan, compute_layout
from core.reflow import reflow
from core.utils.decorators import timed
from schemas.composite import CompositionOptions

logger = logging.getLogger(__name__)

ImageInput = Union[np.ndarray, Image.Image]


@dataclass(frozen=True)
class CompositeImage:
    """Output of one compose() call"""

    pixels: np.ndarray
    plan: LayoutPlan
    labels: List[LabelPlacement]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) of the final image."""
        return (self.pixels.shape[1], self.pixels.shape[0])


def _as_array(image: ImageInput) -> np.ndarray:
    if isinstance(image, Image.Image):
        return pil_to_numpy(image)
    if isinstance(image, np.ndarray):
        return image
    raise TypeError(f"Unsupported image type: {type(image).__name__}")


def _image_size(image: np.ndarray) -> Tuple[int, int]:
    """(width, height) of an array image."""
    height, width = image.shape[:2]
    return (width, height)


class Compositor:
    """
    Composites two images into one labeled comparison image.

    The compositor holds only configuration; it is safe to reuse one
    instance for many calls.
    """

    def __init__(
        self,
        separator: int = LayoutConstants.SEPARATOR_PX,
        jpeg_quality: int = EncodingConstants.JPEG_QUALITY,
        font_path: Optional[str] = None,
        font_candidates: Sequence[str] = LabelConstants.FONT_CANDIDATES,
    ):
        """
        Initialize compositor.

        Args:
            separator: Width of the white band between images
            jpeg_quality: JPEG quality used by render_jpeg
            font_path: Optional bold sans-serif font file for labels
            font_candidates: Font names tried when font_path is unset or fails
        """
        self.separator = separator
        self.jpeg_quality = jpeg_quality
        self.label_renderer = LabelRenderer(font_path=font_path, font_candidates=font_candidates)

    @timed
    def compose(
        self,
        before: ImageInput,
        after: ImageInput,
        options: Optional[CompositionOptions] = None,
    ) -> CompositeImage:
        """
        Build the composite as an RGB array.

        Args:
            before: Decoded before image (RGB array or PIL Image, not modified)
            after: Decoded after image (RGB array or PIL Image, not modified)
            options: Labels, orientation and target format

        Returns:
            CompositeImage with the final pixels and the placements used

        Raises:
            InvalidImageDimensions: If either image has an empty dimension
            LayoutOverflow: If a badge does not fit inside its image
        """
        options = options or CompositionOptions()
        before = _as_array(before)
        after = _as_array(after)

        plan = compute_layout(
            _image_size(before), _image_size(after), options.orientation, self.separator
        )

        canvas = WorkingCanvas(plan.canvas, LayoutConstants.SEPARATOR_COLOR)
        canvas.blit(before, plan.before)
        canvas.blit(after, plan.after)

        placements = self.label_renderer.plan_labels(
            plan, options.before_label, options.after_label
        )
        labels = self.label_renderer.render(canvas, placements)

        pixels = reflow(canvas.pixels, options.target_format)

        logger.info(
            f"Composited {plan.canvas.width}x{plan.canvas.height} "
            f"({options.orientation.value}) -> {pixels.shape[1]}x{pixels.shape[0]} "
            f"({options.target_format.value})"
        )
        return CompositeImage(pixels=pixels, plan=plan, labels=labels)

    def encode(self, composite: CompositeImage) -> bytes:
        """
        Encode a composite as JPEG.

        Raises:
            EncodingFailure: If serialization fails
        """
        return encode_jpeg(composite.pixels, self.jpeg_quality)

    def render_jpeg(
        self,
        before: ImageInput,
        after: ImageInput,
        options: Optional[CompositionOptions] = None,
    ) -> bytes:
        """Compose and encode in one step (image in, JPEG bytes out)."""
        return self.encode(self.compose(before, after, options))
