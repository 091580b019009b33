"""
Compositor Service - Business logic around the compositing pipeline.

This service is the boundary the calling application talks to. It
validates and decodes the two uploaded sources, runs the compositor,
encodes the result and packages it for delivery (data URI, download
filename, optional preview thumbnail).
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional, Tuple

import numpy as np

from config import Settings, get_settings
from core.compositor import CompositeImage, Compositor
from core.constants import EncodingConstants, ImageConstants
from core.exceptions import CompositorError, UnsupportedMediaType
from core.image.converters import decode_image
from core.image.processors import create_thumbnail
from core.utils.decorators import timer
from core.utils.enum_converter import enum_to_string
from schemas.composite import CompositeResult, CompositionOptions, RenderedLabel

logger = logging.getLogger(__name__)


def build_download_filename(timestamp: Optional[datetime] = None) -> str:
    """
    Download filename for a composite, e.g. ``before-after-1718000000000.jpg``.

    Args:
        timestamp: Time to embed (defaults to now), written as Unix milliseconds
    """
    timestamp = timestamp or datetime.now()
    millis = int(timestamp.timestamp() * 1000)
    return (
        f"{EncodingConstants.DOWNLOAD_FILENAME_PREFIX}-{millis}"
        f"{EncodingConstants.DOWNLOAD_FILENAME_EXTENSION}"
    )


class CompositorService:
    """
    Service for before/after composite operations.

    Every failure aborts the whole request and is re-raised to the
    caller as a CompositorError subclass; nothing is retried here.
    """

    def __init__(
        self,
        compositor: Optional[Compositor] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize compositor service.

        Args:
            compositor: Compositor instance (built from settings if omitted)
            settings: Application settings (cached settings if omitted)
        """
        self.settings = settings or get_settings()
        cfg = self.settings.compositor
        self.compositor = compositor or Compositor(
            separator=cfg.separator_px,
            jpeg_quality=cfg.jpeg_quality,
            font_path=cfg.font_path,
            font_candidates=cfg.font_candidates,
        )

    @staticmethod
    def validate_upload(content_type: Optional[str], source: str = "image") -> None:
        """
        Check that an upload declares image content.

        A missing content type is left to the decoder to judge.

        Raises:
            UnsupportedMediaType: If the MIME type is not image/*
        """
        if content_type is None:
            return
        if not content_type.strip().lower().startswith(ImageConstants.ALLOWED_MIME_PREFIX):
            raise UnsupportedMediaType(content_type, source)

    def decode(
        self, data: bytes, content_type: Optional[str] = None, source: str = "image"
    ) -> np.ndarray:
        """
        Validate and decode one uploaded source.

        Raises:
            UnsupportedMediaType: If the MIME type is not image/*
            DecodeFailure: If the bytes cannot be decoded
        """
        self.validate_upload(content_type, source)
        return decode_image(data, source)

    def create_preview(
        self, data: bytes, content_type: Optional[str] = None, source: str = "image"
    ) -> str:
        """
        Base64 JPEG preview thumbnail of an uploaded source.

        Previews are generated independently of the full-resolution
        composite input.
        """
        image = self.decode(data, content_type, source)
        _, thumbnail_base64 = create_thumbnail(
            image,
            width=self.settings.thumbnail.width,
            quality=self.settings.thumbnail.jpeg_quality,
        )
        return thumbnail_base64

    def _finish(
        self, before: np.ndarray, after: np.ndarray, options: CompositionOptions
    ) -> Tuple[CompositeImage, bytes]:
        composite = self.compositor.compose(before, after, options)
        return composite, self.compositor.encode(composite)

    def _build_result(
        self,
        composite: CompositeImage,
        jpeg: bytes,
        options: CompositionOptions,
        processing_time_ms: int,
    ) -> CompositeResult:
        labels = [
            RenderedLabel(
                text=label.text,
                align=label.align,
                bounds=label.bounds,
                font_size=label.font_size,
                fill=label.colors.fill.name,
                text_color=list(label.colors.text),
                background=list(label.colors.background),
            )
            for label in composite.labels
        ]

        thumbnail = None
        if self.settings.thumbnail.enabled:
            _, thumbnail = create_thumbnail(
                composite.pixels,
                width=self.settings.thumbnail.width,
                quality=self.settings.thumbnail.jpeg_quality,
            )

        width, height = composite.size
        logger.info(
            f"Composite ready: {width}x{height} {enum_to_string(options.target_format)}, "
            f"{len(jpeg)} bytes in {processing_time_ms} ms"
        )
        return CompositeResult(
            image_bytes=jpeg,
            width=width,
            height=height,
            options=options,
            labels=labels,
            processing_time_ms=processing_time_ms,
            filename=build_download_filename(),
            thumbnail_base64=thumbnail,
        )

    def compose(
        self,
        before_data: bytes,
        after_data: bytes,
        options: Optional[CompositionOptions] = None,
        before_content_type: Optional[str] = None,
        after_content_type: Optional[str] = None,
    ) -> CompositeResult:
        """
        Decode both sources and build the encoded composite.

        Args:
            before_data: Encoded before image
            after_data: Encoded after image
            options: Composition options (defaults: BEFORE/AFTER, horizontal, original)
            before_content_type: Declared MIME type of the before upload
            after_content_type: Declared MIME type of the after upload

        Returns:
            CompositeResult with JPEG bytes and metadata

        Raises:
            CompositorError: Any failure, distinguishable by subclass
        """
        options = options or CompositionOptions()

        try:
            with timer() as t:
                before = self.decode(before_data, before_content_type, "before")
                after = self.decode(after_data, after_content_type, "after")
                composite, jpeg = self._finish(before, after, options)
        except CompositorError as e:
            logger.error(f"Composite failed [{e.code}]: {e.message}")
            raise

        return self._build_result(composite, jpeg, options, t["ms"])

    async def compose_async(
        self,
        before_data: bytes,
        after_data: bytes,
        options: Optional[CompositionOptions] = None,
        before_content_type: Optional[str] = None,
        after_content_type: Optional[str] = None,
    ) -> CompositeResult:
        """
        Async variant of compose().

        Both sources are decoded concurrently in worker threads; the
        pipeline itself then runs in a worker thread so the event loop
        stays responsive. A decode failure aborts before any canvas work.
        """
        options = options or CompositionOptions()

        try:
            with timer() as t:
                before, after = await asyncio.gather(
                    asyncio.to_thread(self.decode, before_data, before_content_type, "before"),
                    asyncio.to_thread(self.decode, after_data, after_content_type, "after"),
                )
                composite, jpeg = await asyncio.to_thread(self._finish, before, after, options)
        except CompositorError as e:
            logger.error(f"Composite failed [{e.code}]: {e.message}")
            raise

        return self._build_result(composite, jpeg, options, t["ms"])
