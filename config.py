"""
Configuration for the before/after compositor.

Settings are read from environment variables (prefix ``COMPOSITOR_``,
nested fields separated by ``__``) or a ``.env`` file, e.g.::

    COMPOSITOR_SYSTEM__LOG_LEVEL=DEBUG
    COMPOSITOR_COMPOSITOR__FONT_PATH=/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import EncodingConstants, ImageConstants, LabelConstants, LayoutConstants

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CompositorSettings(BaseModel):
    """Compositing pipeline settings"""

    separator_px: int = Field(LayoutConstants.SEPARATOR_PX, ge=0, le=500)
    jpeg_quality: int = Field(EncodingConstants.JPEG_QUALITY, ge=1, le=100)
    font_path: Optional[str] = None
    font_candidates: List[str] = Field(default_factory=lambda: list(LabelConstants.FONT_CANDIDATES))


class ThumbnailSettings(BaseModel):
    """Preview thumbnail settings"""

    width: int = Field(
        ImageConstants.DEFAULT_THUMBNAIL_WIDTH,
        ge=ImageConstants.MIN_THUMBNAIL_WIDTH,
        le=ImageConstants.MAX_THUMBNAIL_WIDTH,
    )
    jpeg_quality: int = Field(ImageConstants.THUMBNAIL_JPEG_QUALITY, ge=1, le=100)
    enabled: bool = False


class SystemSettings(BaseModel):
    """Logging and runtime settings"""

    log_level: str = "INFO"
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def valid_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="COMPOSITOR_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    environment: str = "development"
    compositor: CompositorSettings = Field(default_factory=CompositorSettings)
    thumbnail: ThumbnailSettings = Field(default_factory=ThumbnailSettings)
    system: SystemSettings = Field(default_factory=SystemSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict of all settings."""
        return self.model_dump()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.system.debug else getattr(logging, settings.system.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # Pillow logs every image plugin it tries at debug level
    logging.getLogger("PIL").setLevel(logging.WARNING)
