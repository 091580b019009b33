"""
Centralized enums for the compositor.
"""

from enum import Enum


class Orientation(str, Enum):
    """How the two images are arranged on the canvas"""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class TargetFormat(str, Enum):
    """Output format: keep the composite size or letterbox into a preset"""

    ORIGINAL = "original"
    INSTAGRAM_SQUARE = "instagram-square"
    INSTAGRAM_STORY = "instagram-story"
    FACEBOOK_POST = "facebook-post"
    TWITTER_POST = "twitter-post"


class LabelAlign(str, Enum):
    """Which edge of its image a label badge is inset from"""

    LEFT = "left"
    RIGHT = "right"
