"""
Layout engine for the before/after composite.

Derives placed sizes and offsets for two images of independent aspect
ratios so they sit edge-to-edge with a shared dimension:

- horizontal: both images take the smaller of the two heights and are
  placed left-to-right
- vertical: both images take the smaller of the two widths and are
  stacked top-to-bottom

A white separator band of fixed width lies between them.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from core.constants import LayoutConstants
from core.enums import Orientation
from core.exceptions import InvalidImageDimensions
from schemas.common import Region, Size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutPlan:
    """Placement of both images and the overall canvas size"""

    orientation: Orientation
    before: Region
    after: Region
    canvas: Size
    separator: int

    @property
    def separator_region(self) -> Region:
        """Region of the white band between the two images."""
        if self.orientation == Orientation.HORIZONTAL:
            return Region(x=self.before.x2, y=0, width=self.separator, height=self.canvas.height)
        return Region(x=0, y=self.before.y2, width=self.canvas.width, height=self.separator)

    @property
    def cross_dimension(self) -> int:
        """Canvas dimension perpendicular to the compositing axis."""
        if self.orientation == Orientation.HORIZONTAL:
            return self.canvas.height
        return self.canvas.width


def _validate_size(source: str, size: Tuple[int, int]) -> None:
    width, height = size
    if width <= 0 or height <= 0:
        raise InvalidImageDimensions(source, width, height)


def _scale_floor(value: int, numerator: int, denominator: int) -> int:
    """floor(value * numerator / denominator) in exact integer arithmetic."""
    return (value * numerator) // denominator


def compute_layout(
    before_size: Tuple[int, int],
    after_size: Tuple[int, int],
    orientation: Orientation = Orientation.HORIZONTAL,
    separator: int = LayoutConstants.SEPARATOR_PX,
) -> LayoutPlan:
    """
    Compute the layout plan for two images.

    Args:
        before_size: (width, height) of the before image
        after_size: (width, height) of the after image
        orientation: Horizontal (side-by-side) or vertical (stacked)
        separator: Width of the white band between the images

    Returns:
        LayoutPlan with integer placements and canvas size

    Raises:
        InvalidImageDimensions: If a size is not positive, or an image
            would be placed with a zero-pixel dimension
    """
    _validate_size("before", before_size)
    _validate_size("after", after_size)

    (w_b, h_b), (w_a, h_a) = before_size, after_size
    orientation = Orientation(orientation)

    if orientation == Orientation.HORIZONTAL:
        common = min(h_b, h_a)
        placed_b = _scale_floor(w_b, common, h_b)
        placed_a = _scale_floor(w_a, common, h_a)
        if placed_b <= 0:
            raise InvalidImageDimensions("before", placed_b, common)
        if placed_a <= 0:
            raise InvalidImageDimensions("after", placed_a, common)

        before = Region(x=0, y=0, width=placed_b, height=common)
        after = Region(x=placed_b + separator, y=0, width=placed_a, height=common)
        canvas = Size(width=placed_b + placed_a + separator, height=common)
    else:
        common = min(w_b, w_a)
        placed_b = _scale_floor(h_b, common, w_b)
        placed_a = _scale_floor(h_a, common, w_a)
        if placed_b <= 0:
            raise InvalidImageDimensions("before", common, placed_b)
        if placed_a <= 0:
            raise InvalidImageDimensions("after", common, placed_a)

        before = Region(x=0, y=0, width=common, height=placed_b)
        after = Region(x=0, y=placed_b + separator, width=common, height=placed_a)
        canvas = Size(width=common, height=placed_b + placed_a + separator)

    logger.debug(
        f"Layout ({orientation.value}): before {before.width}x{before.height} "
        f"at ({before.x},{before.y}), after {after.width}x{after.height} "
        f"at ({after.x},{after.y}), canvas {canvas.width}x{canvas.height}"
    )

    return LayoutPlan(
        orientation=orientation,
        before=before,
        after=after,
        canvas=canvas,
        separator=separator,
    )
