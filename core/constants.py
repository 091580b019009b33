"""
Constants and configuration values for the before/after compositor.
Centralizes all magic numbers and preset tables.
"""

from core.enums import TargetFormat


# Layout Constants
class LayoutConstants:
    """Constants for placing the two images on the canvas."""

    SEPARATOR_PX = 15
    SEPARATOR_COLOR = (255, 255, 255)  # RGB


# Label Constants
class LabelConstants:
    """Constants for adaptive-contrast label badges."""

    # Font size as a fraction of the canvas cross dimension
    FONT_SIZE_RATIO = 0.05
    MIN_FONT_SIZE = 1

    # Inner padding per side, as a fraction of text width / font size
    PADDING_RATIO = 0.4

    # Inset of the badge from its image edges
    MARGIN_RATIO = 0.05

    # Vertical nudge of the text baseline, fraction of font size
    TEXT_NUDGE_RATIO = 0.05

    # Pill shape: corner radius is half the badge height
    CORNER_RADIUS_RATIO = 0.5

    # Stroke that thickens text when no bold font is installed, fraction of font size
    FALLBACK_STROKE_RATIO = 0.05

    # Bold sans-serif fonts tried in order before Pillow's bundled font
    FONT_CANDIDATES = [
        "DejaVuSans-Bold.ttf",
        "LiberationSans-Bold.ttf",
        "Arial Bold.ttf",
        "arialbd.ttf",
        "Lato-Bold.ttf",
        "FreeSansBold.ttf",
    ]


# Encoding Constants
class EncodingConstants:
    """Constants for the final image encoding."""

    OUTPUT_FORMAT = "JPEG"
    OUTPUT_MIME_TYPE = "image/jpeg"
    JPEG_QUALITY = 95
    DOWNLOAD_FILENAME_PREFIX = "before-after"
    DOWNLOAD_FILENAME_EXTENSION = ".jpg"


# Image Acquisition Constants
class ImageConstants:
    """Constants related to source images and previews."""

    ALLOWED_MIME_PREFIX = "image/"

    # Thumbnail settings
    DEFAULT_THUMBNAIL_WIDTH = 320
    MIN_THUMBNAIL_WIDTH = 50
    MAX_THUMBNAIL_WIDTH = 2000
    THUMBNAIL_JPEG_QUALITY = 70


# Target format presets: (width, height, display name, ratio label)
FORMAT_PRESETS = {
    TargetFormat.INSTAGRAM_SQUARE: (1080, 1080, "Instagram Square", "1:1 (1080×1080)"),
    TargetFormat.INSTAGRAM_STORY: (1080, 1920, "Instagram Story", "9:16 (1080×1920)"),
    TargetFormat.FACEBOOK_POST: (1200, 630, "Facebook Post", "1.91:1 (1200×630)"),
    TargetFormat.TWITTER_POST: (1200, 675, "Twitter Post", "16:9 (1200×675)"),
}

# Label pair presets: (id, left label, right label, display name)
LABEL_PRESETS = [
    ("before-after", "BEFORE", "AFTER", "Before / After"),
    ("dirty-clean", "DIRTY", "CLEAN", "Dirty / Clean"),
    ("broken-fixed", "BROKEN", "FIXED", "Broken / Fixed"),
    ("clogged-clear", "CLOGGED", "CLEAR", "Clogged / Clear"),
    ("old-new", "OLD", "NEW", "Old / New"),
]


# Error Messages
class ErrorMessages:
    """Standard error messages."""

    UNKNOWN_LABEL_PRESET = "Unknown label preset: {preset_id}"
    UNKNOWN_TARGET_FORMAT = "Unknown target format {value!r}, falling back to original"
