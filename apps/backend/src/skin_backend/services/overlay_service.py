"""
Request orchestration for the overlay backend.

One call to OverlayService.process runs the whole pipeline for a
request: validate -> cache lookup -> fetch base -> decode overlay ->
composite -> encode -> upload -> cache store. Any failure is terminal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from skin_compositor import (
    DecodeError,
    EncodeError,
    EncodingError,
    composite_skin,
    decode_overlay,
    derive_cache_key,
    encode_png,
)

from ..config import Config
from ..errors import (
    CompositeError,
    InvalidImageError,
    RemoteError,
    ValidationError,
)
from .cache import ResponseCache
from .fetch import DEFAULT_FETCH_TIMEOUT, fetch_base_image
from .mineskin import MineSkinClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkinResult:
    """Response to hand back to the caller."""
    status_code: int
    body: str
    cached: bool = False


class OverlayService:
    """
    Composites overlays onto base skins and uploads them to MineSkin.

    The service owns its clients for the lifetime of the process. They
    are shared by every request and released by close().
    """

    def __init__(
        self,
        cache: ResponseCache,
        fetch_client: httpx.Client,
        mineskin: MineSkinClient,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
    ):
        self.cache = cache
        self.fetch_client = fetch_client
        self.mineskin = mineskin
        self.fetch_timeout = fetch_timeout

    @classmethod
    def from_config(cls, config: Config) -> OverlayService:
        fetch_client = httpx.Client(timeout=config.fetch_timeout, follow_redirects=True)
        upload_client = httpx.Client(timeout=config.upload_timeout)
        return cls(
            cache=ResponseCache.from_url(config.cache_url),
            fetch_client=fetch_client,
            mineskin=MineSkinClient(upload_client, config.upload_url, config.mineskin_api_key),
            fetch_timeout=config.fetch_timeout,
        )

    def process(self, base_url: str | None, overlay: str | None) -> SkinResult:
        if not base_url or not overlay:
            raise ValidationError("Missing base URL or overlay image")

        key = derive_cache_key(base_url, overlay)
        logger.debug("Cache key %s", key)

        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Cache hit for %s", key)
            return SkinResult(status_code=200, body=cached, cached=True)

        base_image = fetch_base_image(self.fetch_client, base_url, self.fetch_timeout)

        try:
            overlay_image = decode_overlay(overlay)
        except (EncodingError, DecodeError) as e:
            raise InvalidImageError(f"Failed to decode overlay image: {e}") from e

        composite = composite_skin(base_image, overlay_image)

        try:
            png_bytes = encode_png(composite)
        except EncodeError as e:
            raise CompositeError("Failed to encode composite image") from e

        upload = self.mineskin.upload(png_bytes)
        if upload.status_code != 200:
            raise RemoteError(upload.status_code, upload.body)

        self.cache.set(key, upload.body)
        logger.info("Stored MineSkin response under %s", key)

        return SkinResult(status_code=upload.status_code, body=upload.body)

    def close(self) -> None:
        """Release the cache and HTTP clients."""
        self.fetch_client.close()
        self.mineskin.close()
        self.cache.close()
