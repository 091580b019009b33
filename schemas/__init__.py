"""
Schemas Package

This package contains the Pydantic schemas for data validation and
serialization, organized by domain:

- common: geometry (Size, Region)
- composite: CompositionOptions, CompositeResult
- presets: label pair and target format presets
"""

# Re-export enums from centralized location for convenience
from core.enums import LabelAlign, Orientation, TargetFormat

# Common models (core data structures)
from .common import Region, Size

# Composite models
from .composite import CompositeResult, CompositionOptions, RenderedLabel

# Preset models
from .presets import FormatPreset, LabelPreset, get_format_presets, get_label_presets

# Explicitly declare public API for re-export
__all__ = [
    # Common models
    "Region",
    "Size",
    # Composite models
    "CompositionOptions",
    "CompositeResult",
    "RenderedLabel",
    # Preset models
    "LabelPreset",
    "FormatPreset",
    "get_label_presets",
    "get_format_presets",
    # Enums (re-exported from core.enums)
    "LabelAlign",
    "Orientation",
    "TargetFormat",
]
