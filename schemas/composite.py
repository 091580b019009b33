"""
Composite request and result models.

This module contains the models exchanged with the calling application:
- Composition options (labels, orientation, target format)
- Composite result (encoded image plus metadata)
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from core.constants import LABEL_PRESETS, EncodingConstants, ErrorMessages
from core.enums import LabelAlign, Orientation, TargetFormat
from core.image.converters import to_base64, to_data_uri

from .common import Region


class CompositionOptions(BaseModel):
    """Options for one composite"""

    model_config = {"frozen": True, "extra": "forbid"}

    before_label: str = Field("BEFORE", max_length=64, description="Label on the first image")
    after_label: str = Field("AFTER", max_length=64, description="Label on the second image")
    orientation: Orientation = Field(
        Orientation.HORIZONTAL, description="Side-by-side or stacked layout"
    )
    target_format: TargetFormat = Field(
        TargetFormat.ORIGINAL, description="Keep composite size or letterbox into a preset"
    )

    @field_validator("before_label", "after_label")
    @classmethod
    def single_line(cls, v: str) -> str:
        """Labels are drawn as a single line."""
        if "\n" in v or "\r" in v:
            raise ValueError("label must be a single line")
        return v

    @classmethod
    def from_preset(
        cls,
        preset_id: str,
        orientation: Orientation = Orientation.HORIZONTAL,
        target_format: TargetFormat = TargetFormat.ORIGINAL,
    ) -> "CompositionOptions":
        """
        Build options from a label pair preset.

        Raises:
            ValueError: If preset_id is unknown
        """
        for pid, left, right, _ in LABEL_PRESETS:
            if pid == preset_id:
                return cls(
                    before_label=left,
                    after_label=right,
                    orientation=orientation,
                    target_format=target_format,
                )
        raise ValueError(ErrorMessages.UNKNOWN_LABEL_PRESET.format(preset_id=preset_id))


class RenderedLabel(BaseModel):
    """Label badge as drawn on the composite"""

    text: str
    align: LabelAlign
    bounds: Region
    font_size: int
    fill: str
    text_color: List[int]
    background: List[int]


class CompositeResult(BaseModel):
    """Encoded composite and its metadata"""

    image_bytes: bytes = Field(..., repr=False)
    width: int
    height: int
    mime_type: str = EncodingConstants.OUTPUT_MIME_TYPE
    options: CompositionOptions
    labels: List[RenderedLabel] = []
    processing_time_ms: int = 0
    filename: str
    created_at: datetime = Field(default_factory=datetime.now)
    thumbnail_base64: Optional[str] = None

    @property
    def image_base64(self) -> str:
        """Raw base64 of the encoded image."""
        return to_base64(self.image_bytes)

    @property
    def data_uri(self) -> str:
        """Embeddable data URI of the encoded image."""
        return to_data_uri(self.image_bytes, self.mime_type)
