"""Backend services."""

from .cache import ResponseCache
from .fetch import fetch_base_image
from .mineskin import MineSkinClient, UploadResponse
from .overlay_service import OverlayService, SkinResult

__all__ = [
    "MineSkinClient",
    "OverlayService",
    "ResponseCache",
    "SkinResult",
    "UploadResponse",
    "fetch_base_image",
]
