"""
Target-format reflow.

Letterboxes a finished composite into one of the fixed social-media
sizes. The composite is scaled uniformly to fit inside the target box,
centered, and the leftover margins are white. Labels are not redrawn.
"""

import logging
from typing import Tuple

import numpy as np

from core.canvas import WorkingCanvas
from core.constants import FORMAT_PRESETS, ErrorMessages, LayoutConstants
from core.enums import TargetFormat
from core.utils.enum_converter import parse_enum
from schemas.common import Region, Size

logger = logging.getLogger(__name__)


def target_size(target_format: TargetFormat) -> Tuple[int, int]:
    """
    Pixel size of a preset.

    Raises:
        KeyError: For TargetFormat.ORIGINAL, which has no fixed size
    """
    width, height, _, _ = FORMAT_PRESETS[target_format]
    return (width, height)


def fit_region(source: Tuple[int, int], target: Tuple[int, int]) -> Region:
    """
    Region a source of the given size occupies when fit into a target.

    Args:
        source: (width, height) of the composite
        target: (width, height) of the target box

    Returns:
        Centered region inside the target box
    """
    (sw, sh), (tw, th) = source, target
    scale = min(tw / sw, th / sh)

    width = min(tw, max(1, round(sw * scale)))
    height = min(th, max(1, round(sh * scale)))

    return Region(x=(tw - width) // 2, y=(th - height) // 2, width=width, height=height)


def letterbox(image: np.ndarray, target: Tuple[int, int]) -> np.ndarray:
    """
    Fit image inside a white canvas of the target size.

    Args:
        image: Composite as RGB array
        target: (width, height) of the output

    Returns:
        New RGB array of exactly the target size
    """
    src_h, src_w = image.shape[:2]
    region = fit_region((src_w, src_h), target)

    canvas = WorkingCanvas(
        Size(width=target[0], height=target[1]), LayoutConstants.SEPARATOR_COLOR
    )
    canvas.blit(image, region)

    logger.debug(
        f"Letterboxed {src_w}x{src_h} into {target[0]}x{target[1]} "
        f"as {region.width}x{region.height} at ({region.x},{region.y})"
    )
    return canvas.pixels


def reflow(image: np.ndarray, target_format: TargetFormat) -> np.ndarray:
    """
    Apply a target format to a finished composite.

    Args:
        image: Composite as RGB array
        target_format: Preset to fit into, or ORIGINAL

    Returns:
        The input array unchanged for ORIGINAL, otherwise a new letterboxed array
    """
    target_format = TargetFormat(target_format)
    if target_format == TargetFormat.ORIGINAL:
        return image

    return letterbox(image, target_size(target_format))


def parse_target_format(value) -> TargetFormat:
    """
    Parse a loosely typed format value.

    Unknown values fall back to ORIGINAL (passthrough) with a warning.
    """
    parsed = parse_enum(value, TargetFormat, None, normalize=True)
    if parsed is None:
        logger.warning(ErrorMessages.UNKNOWN_TARGET_FORMAT.format(value=value))
        return TargetFormat.ORIGINAL
    return parsed
