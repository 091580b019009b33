"""
Contrast palette for label badges.

Badge fill is picked from a small fixed palette: the color farthest (in
Euclidean RGB distance) from the local background under the badge.
The palette is an ordered tuple so that ties always resolve to the
earlier entry.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class PaletteColor:
    """Named RGB palette entry"""

    name: str
    rgb: RGB


YELLOW = PaletteColor("yellow", (255, 230, 0))
RED = PaletteColor("red", (220, 20, 20))
BLUE = PaletteColor("blue", (0, 100, 255))
BLACK = PaletteColor("black", (20, 20, 20))
WHITE = PaletteColor("white", (255, 255, 255))

# Iteration order decides ties
CONTRAST_PALETTE: Tuple[PaletteColor, ...] = (YELLOW, RED, BLUE, BLACK, WHITE)

# Fills that need dark text
DARK_TEXT_FILLS = (YELLOW, WHITE)

TEXT_BLACK: RGB = (0, 0, 0)
TEXT_WHITE: RGB = (255, 255, 255)


@dataclass(frozen=True)
class BadgeColors:
    """Fill and text colors chosen for one badge"""

    fill: PaletteColor
    text: RGB
    background: RGB
    distance: float


def color_distance(c1: Sequence[int], c2: Sequence[int]) -> float:
    """Euclidean distance between two RGB triples."""
    return math.sqrt(
        (c1[0] - c2[0]) ** 2 + (c1[1] - c2[1]) ** 2 + (c1[2] - c2[2]) ** 2
    )


def text_color_for(fill: PaletteColor) -> RGB:
    """Black text on yellow or white fills, white text otherwise."""
    return TEXT_BLACK if fill in DARK_TEXT_FILLS else TEXT_WHITE


def best_contrast(
    background: Sequence[int], palette: Sequence[PaletteColor] = CONTRAST_PALETTE
) -> BadgeColors:
    """
    Pick the palette color most different from a background color.

    Args:
        background: Mean RGB of the area the badge will cover
        palette: Ordered candidate fills

    Returns:
        BadgeColors with the chosen fill and matching text color
    """
    best = palette[0]
    best_dist = -1.0

    for color in palette:
        dist = color_distance(background, color.rgb)
        # Strictly greater: first color wins ties
        if dist > best_dist:
            best_dist = dist
            best = color

    return BadgeColors(
        fill=best,
        text=text_color_for(best),
        background=tuple(int(c) for c in background),
        distance=best_dist,
    )
