"""
Adaptive-contrast label rendering.

Each source image gets one pill-shaped badge with its label. The badge
color is chosen from the contrast palette against the mean color of the
pixels the badge is about to cover, so the label stays legible without
any color hints from the caller.
"""

import logging
import math
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from PIL import ImageFont

from core.canvas import WorkingCanvas
from core.constants import LabelConstants
from core.enums import LabelAlign, Orientation
from core.exceptions import LayoutOverflow
from core.layout import LayoutPlan
from core.palette import BadgeColors, best_contrast
from schemas.common import Region

logger = logging.getLogger(__name__)


@lru_cache(maxsize=32)
def load_font(
    size: int,
    font_path: Optional[str] = None,
    candidates: Tuple[str, ...] = tuple(LabelConstants.FONT_CANDIDATES),
) -> ImageFont.FreeTypeFont:
    """
    Load a bold sans-serif font at a pixel size.

    Tries the configured font path first, then the candidate font names
    (resolved by FreeType against the system font directories), then
    Pillow's bundled font.

    Args:
        size: Font size in pixels
        font_path: Optional explicit font file
        candidates: Font file names to try in order

    Returns:
        FreeType font instance
    """
    paths = ([font_path] if font_path else []) + list(candidates)
    for path in paths:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            if path == font_path:
                logger.warning(f"Configured label font not loadable: {font_path}")

    logger.warning(f"No bold sans-serif font found, using Pillow default at {size}px")
    return ImageFont.load_default(size=size)


def is_bold(font: ImageFont.FreeTypeFont) -> bool:
    """Check whether a loaded font face has a bold style."""
    if not isinstance(font, ImageFont.FreeTypeFont):
        return False
    _, style = font.getname()
    return "bold" in (style or "").lower()


@dataclass(frozen=True)
class LabelPlacement:
    """
    Where and how one label badge is drawn.

    ``box`` is the full badge rectangle in pixels; ``bounds`` is the part
    of it that lies on the canvas, which is what gets sampled and drawn.
    """

    text: str
    anchor: Region
    align: LabelAlign
    font_size: int
    text_width: float
    box_x: float
    box_y: float
    box_width: float
    box_height: float
    box: Region
    bounds: Region
    colors: Optional[BadgeColors] = None

    @property
    def center(self) -> Tuple[float, float]:
        """Center of the badge box."""
        return (self.box_x + self.box_width / 2, self.box_y + self.box_height / 2)


class LabelRenderer:
    """
    Plans and draws the before/after label badges.

    Badges are sized from the canvas cross dimension, anchored to the
    bottom of their own image and inset from its left (before) or right
    (after) edge.
    """

    def __init__(
        self,
        font_path: Optional[str] = None,
        font_candidates: Sequence[str] = LabelConstants.FONT_CANDIDATES,
    ):
        """
        Initialize label renderer.

        Args:
            font_path: Optional bold sans-serif font file to use
            font_candidates: Font names tried when font_path is unset or fails
        """
        self.font_path = font_path
        self.font_candidates = tuple(font_candidates)

    def font(self, size: int) -> ImageFont.FreeTypeFont:
        return load_font(size, self.font_path, self.font_candidates)

    @staticmethod
    def font_size_for(plan: LayoutPlan) -> int:
        """5% of the canvas cross dimension, floored, at least 1px."""
        size = math.floor(plan.cross_dimension * LabelConstants.FONT_SIZE_RATIO)
        return max(LabelConstants.MIN_FONT_SIZE, size)

    def stroke_width_for(self, font_size: int) -> int:
        """Text stroke that stands in for bold when only a regular font loads."""
        if is_bold(self.font(font_size)):
            return 0
        return math.floor(font_size * LabelConstants.FALLBACK_STROKE_RATIO)

    def measure_text(self, text: str, font_size: int) -> float:
        """Advance width of text in pixels (0 for an empty string)."""
        if not text:
            return 0.0
        return float(self.font(font_size).getlength(text))

    def plan_label(
        self,
        plan: LayoutPlan,
        text: str,
        anchor: Region,
        align: LabelAlign,
        font_size: int,
    ) -> LabelPlacement:
        """
        Compute the badge rectangle for one label.

        Args:
            plan: Layout plan of the composite
            text: Label text
            anchor: Placed region of the image this label belongs to
            align: Inset from the left or the right edge of the anchor
            font_size: Font size in pixels

        Returns:
            LabelPlacement without colors

        Raises:
            LayoutOverflow: If no part of the badge lies on the canvas
        """
        text_width = self.measure_text(text, font_size)
        scale = 1 + 2 * LabelConstants.PADDING_RATIO

        box_height = font_size * scale
        # Empty (or zero-width) label still gets a round badge
        box_width = text_width * scale if text_width > 0 else box_height

        margin_x = math.floor(anchor.width * LabelConstants.MARGIN_RATIO)
        if plan.orientation == Orientation.HORIZONTAL:
            margin_y = math.floor(plan.canvas.height * LabelConstants.MARGIN_RATIO)
        else:
            margin_y = math.floor(anchor.height * LabelConstants.MARGIN_RATIO)

        if align == LabelAlign.LEFT:
            box_x = anchor.x + margin_x
        else:
            box_x = anchor.x2 - margin_x - box_width
        box_y = anchor.y2 - margin_y - box_height

        box = Region.from_points(
            math.floor(box_x),
            math.floor(box_y),
            math.ceil(box_x + box_width),
            math.ceil(box_y + box_height),
        )
        canvas_region = Region(x=0, y=0, width=plan.canvas.width, height=plan.canvas.height)
        bounds = box.intersection(canvas_region)
        if bounds.area_pixels == 0:
            raise LayoutOverflow(f"badge '{text}'", box.bounds, canvas_region.bounds)
        if not anchor.contains(box):
            logger.debug(f"Badge '{text}' {box.bounds} extends past its image {anchor.bounds}")

        return LabelPlacement(
            text=text,
            anchor=anchor,
            align=align,
            font_size=font_size,
            text_width=text_width,
            box_x=box_x,
            box_y=box_y,
            box_width=box_width,
            box_height=box_height,
            box=box,
            bounds=bounds,
        )

    def plan_labels(
        self, plan: LayoutPlan, before_label: str, after_label: str
    ) -> List[LabelPlacement]:
        """Plan both badges, before label first."""
        font_size = self.font_size_for(plan)
        return [
            self.plan_label(plan, before_label, plan.before, LabelAlign.LEFT, font_size),
            self.plan_label(plan, after_label, plan.after, LabelAlign.RIGHT, font_size),
        ]

    def draw_badge(
        self, canvas: WorkingCanvas, placement: LabelPlacement, colors: BadgeColors
    ) -> None:
        """
        Draw one pill badge and its text.

        Only the on-canvas part of the badge is drawn; the rest is clipped.

        Args:
            canvas: Canvas to draw on
            placement: Planned badge
            colors: Fill and text colors
        """
        box = placement.box
        # Patch-local coordinates
        ox, oy = placement.bounds.x, placement.bounds.y
        radius = math.ceil(placement.box_height * LabelConstants.CORNER_RADIUS_RATIO)

        with canvas.drawing(placement.bounds) as draw:
            draw.rounded_rectangle(
                (box.x - ox, box.y - oy, box.x2 - 1 - ox, box.y2 - 1 - oy),
                radius=radius,
                fill=colors.fill.rgb,
            )
            if placement.text:
                center_x, center_y = placement.center
                nudge = placement.font_size * LabelConstants.TEXT_NUDGE_RATIO
                stroke_width = self.stroke_width_for(placement.font_size)
                draw.text(
                    (center_x - ox, center_y + nudge - oy),
                    placement.text,
                    fill=colors.text,
                    font=self.font(placement.font_size),
                    anchor="mm",
                    stroke_width=stroke_width,
                    stroke_fill=colors.text,
                )

    def render(
        self, canvas: WorkingCanvas, placements: Sequence[LabelPlacement]
    ) -> List[LabelPlacement]:
        """
        Sample, color and draw badges in order.

        Each pass samples the canvas as left by the previous pass, so the
        order of placements is significant.

        Args:
            canvas: Canvas with both images already blitted
            placements: Planned badges, before label first

        Returns:
            Placements with their chosen colors
        """
        rendered = []
        for placement in placements:
            background = canvas.sample_mean(placement.bounds)
            colors = best_contrast(background)
            self.draw_badge(canvas, placement, colors)

            logger.debug(
                f"Label '{placement.text}' at {placement.bounds.to_dict()}: "
                f"background {background} -> {colors.fill.name} fill"
            )
            rendered.append(replace(placement, colors=colors))

        return rendered
