"""
Working canvas for a single composite.

The canvas is a mutable RGB surface. Render passes run in sequence and
each one reads the pixels left by the previous pass, so sampling and
drawing always go through the same instance.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from core.constants import LayoutConstants
from core.exceptions import LayoutOverflow
from core.image.converters import ensure_rgb
from core.image.processors import resize_image
from schemas.common import Region, Size

logger = logging.getLogger(__name__)


class WorkingCanvas:
    """
    RGB pixel surface owned by one compositing call.

    Every read or write rectangle is checked against the canvas bounds;
    an out-of-bounds rectangle is a layout defect and raises
    LayoutOverflow instead of being clipped.
    """

    def __init__(
        self,
        size: Size,
        background: Tuple[int, int, int] = LayoutConstants.SEPARATOR_COLOR,
    ):
        """
        Allocate canvas filled with a solid background.

        Args:
            size: Canvas size
            background: RGB fill color
        """
        self.size = size
        self.pixels = np.empty((size.height, size.width, 3), dtype=np.uint8)
        self.pixels[:] = background

    @property
    def width(self) -> int:
        return self.size.width

    @property
    def height(self) -> int:
        return self.size.height

    @property
    def region(self) -> Region:
        """Full canvas as a region."""
        return Region(x=0, y=0, width=self.width, height=self.height)

    def check_bounds(self, region: Region, what: str = "canvas") -> None:
        """
        Ensure region lies inside the canvas.

        Raises:
            LayoutOverflow: If any part of the region is outside
        """
        if not self.region.contains(region):
            raise LayoutOverflow(what, region.bounds, self.region.bounds)

    def blit(self, image: np.ndarray, region: Region) -> None:
        """
        Draw image scaled to fill a region.

        Args:
            image: Source RGB image (not modified)
            region: Destination region on the canvas
        """
        self.check_bounds(region, "blit")
        scaled = resize_image(ensure_rgb(image), region.width, region.height)
        self.pixels[region.y : region.y2, region.x : region.x2] = scaled

    def sample_mean(self, region: Region) -> Tuple[int, int, int]:
        """
        Mean RGB color of the current pixels inside a region.

        Channel means are floored to integers.

        Args:
            region: Non-empty region inside the canvas

        Returns:
            (r, g, b) tuple
        """
        self.check_bounds(region, "sample")
        if region.area_pixels == 0:
            raise LayoutOverflow("empty sample", region.bounds, self.region.bounds)

        patch = self.pixels[region.y : region.y2, region.x : region.x2].reshape(-1, 3)
        totals = patch.sum(axis=0, dtype=np.int64)
        r, g, b = (int(v) for v in totals // patch.shape[0])
        return (r, g, b)

    @contextmanager
    def drawing(self, region: Optional[Region] = None) -> Iterator[ImageDraw.ImageDraw]:
        """
        Yield a Pillow draw context over a patch of the canvas.

        Only the patch is copied; drawing coordinates are relative to the
        patch origin and anything drawn outside it is clipped. The patch
        is written back on exit.

        Args:
            region: Patch to draw on (whole canvas if omitted)

        Example:
            >>> with canvas.drawing(Region(x=10, y=10, width=50, height=20)) as draw:
            ...     draw.rounded_rectangle((0, 0, 49, 19), radius=10, fill=(255, 0, 0))
        """
        region = region or self.region
        self.check_bounds(region, "drawing")

        rows = slice(region.y, region.y2)
        cols = slice(region.x, region.x2)
        patch = Image.fromarray(np.ascontiguousarray(self.pixels[rows, cols]))
        try:
            yield ImageDraw.Draw(patch)
        finally:
            self.pixels[rows, cols] = np.asarray(patch, dtype=np.uint8)

    def to_array(self) -> np.ndarray:
        """Copy of the canvas pixels."""
        return self.pixels.copy()
