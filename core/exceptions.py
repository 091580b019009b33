"""
Exception hierarchy for the compositing pipeline.

Every failure aborts the whole composite. Each kind carries a stable
``code`` so callers can tell an upload-time validation error apart from
a compositing-time failure.
"""

from typing import Optional, Tuple


class CompositorError(Exception):
    """Base class for all compositor errors"""

    code = "compositor_error"
    is_upload_error = False

    def __init__(self, message: str, detail: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or {}

    def to_dict(self) -> dict:
        """Serialize error for the calling application."""
        return {"error": self.code, "message": self.message, "detail": self.detail}


class UnsupportedMediaType(CompositorError):
    """Source file is not image content"""

    code = "unsupported_media_type"
    is_upload_error = True

    def __init__(self, content_type: Optional[str], source: str = "image"):
        super().__init__(
            f"Unsupported media type for {source}: {content_type!r} (expected image/*)",
            {"content_type": content_type, "source": source},
        )


class DecodeFailure(CompositorError):
    """Source image could not be decoded"""

    code = "decode_failure"
    is_upload_error = True

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Failed to decode {source} image: {reason}", {"source": source, "reason": reason}
        )


class InvalidImageDimensions(CompositorError):
    """Image has zero or negative width/height"""

    code = "invalid_image_dimensions"

    def __init__(self, source: str, width: int, height: int):
        super().__init__(
            f"Invalid dimensions for {source} image: {width}x{height}",
            {"source": source, "width": width, "height": height},
        )


class LayoutOverflow(CompositorError):
    """Computed rectangle falls outside its allowed bounds"""

    code = "layout_overflow"

    def __init__(
        self,
        what: str,
        rect: Tuple[int, int, int, int],
        bounds: Tuple[int, int, int, int],
    ):
        super().__init__(
            f"{what} rectangle {rect} exceeds bounds {bounds}",
            {"rect": list(rect), "bounds": list(bounds)},
        )


class EncodingFailure(CompositorError):
    """Final surface could not be serialized"""

    code = "encoding_failure"

    def __init__(self, image_format: str, reason: str):
        super().__init__(
            f"Failed to encode composite as {image_format}: {reason}",
            {"format": image_format, "reason": reason},
        )
