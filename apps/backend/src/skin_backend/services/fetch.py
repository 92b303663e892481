"""Base image download."""

from __future__ import annotations

import logging
import time

import httpx
from PIL import Image

from skin_compositor import DecodeError, decode_png

from ..errors import ContentTypeError, FetchError, InvalidImageError

logger = logging.getLogger(__name__)

PNG_CONTENT_TYPE = "image/png"
DEFAULT_FETCH_TIMEOUT = 10.0


def _read_before(resp: httpx.Response, deadline: float, timeout: float) -> bytes:
    """Read the body, giving up once the whole exchange passes `deadline`."""
    chunks = []
    for chunk in resp.iter_bytes():
        if time.monotonic() > deadline:
            raise FetchError(
                f"Failed to fetch base image: failed to fetch image: "
                f"timed out after {timeout:g}s"
            )
        chunks.append(chunk)
    return b"".join(chunks)


def fetch_base_image(
    client: httpx.Client,
    url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> Image.Image:
    """
    Download the base image and decode it.

    `timeout` bounds the whole request, body included; the client's own
    timeout only bounds each network operation. Only responses declared
    as image/png are decoded; the HTTP status itself is not checked.
    """
    deadline = time.monotonic() + timeout
    try:
        with client.stream("GET", url) as resp:
            content_type = resp.headers.get("content-type", "")
            if not content_type.startswith(PNG_CONTENT_TYPE):
                raise ContentTypeError(
                    f"Failed to fetch base image: invalid content type: {content_type} "
                    f"(expected {PNG_CONTENT_TYPE})"
                )
            data = _read_before(resp, deadline, timeout)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(f"Failed to fetch base image: failed to fetch image: {e}") from e

    try:
        img = decode_png(data)
    except DecodeError as e:
        raise InvalidImageError(f"Failed to fetch base image: {e}") from e

    logger.debug("Fetched base image %s (%dx%d)", url, img.width, img.height)
    return img
