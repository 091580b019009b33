"""
Service layer for the before/after compositor.
"""

from .compositor_service import CompositorService, build_download_filename

__all__ = ["CompositorService", "build_download_filename"]
