"""
Preset models offered to the settings UI.

- Label pair presets (BEFORE/AFTER, DIRTY/CLEAN, ...)
- Target format presets (Instagram, Facebook, Twitter sizes)
"""

from typing import List, Optional

from pydantic import BaseModel

from core.constants import FORMAT_PRESETS, LABEL_PRESETS
from core.enums import TargetFormat


class LabelPreset(BaseModel):
    """Label pair preset"""

    id: str
    left_label: str
    right_label: str
    display_name: str


class FormatPreset(BaseModel):
    """Output format preset"""

    id: TargetFormat
    name: str
    ratio: str
    width: Optional[int] = None
    height: Optional[int] = None


def get_label_presets() -> List[LabelPreset]:
    """All label pair presets, in display order."""
    return [
        LabelPreset(id=pid, left_label=left, right_label=right, display_name=name)
        for pid, left, right, name in LABEL_PRESETS
    ]


def get_format_presets() -> List[FormatPreset]:
    """All target formats, ``original`` first."""
    presets = [FormatPreset(id=TargetFormat.ORIGINAL, name="Original", ratio="Keep size")]
    for target, (width, height, name, ratio) in FORMAT_PRESETS.items():
        presets.append(
            FormatPreset(id=target, name=name, ratio=ratio, width=width, height=height)
        )
    return presets
