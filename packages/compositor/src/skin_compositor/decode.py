"""
PNG decoding for base and overlay images.

The base image arrives as raw bytes fetched over HTTP, the overlay as a
base64 string that may carry a data-URI prefix. Both end up as RGBA
Pillow images.
"""

from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, EncodingError

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:image/png;base64,"


def decode_png(data: bytes) -> Image.Image:
    """
    Decode PNG bytes into an RGBA image.

    Raises DecodeError: If the bytes are not a PNG Pillow can read
    """
    try:
        img = Image.open(BytesIO(data))
        if img.format != "PNG":
            raise DecodeError(f"failed to decode PNG: unexpected format {img.format}")
        img.load()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        EOFError,
        SyntaxError,
        ValueError,
    ) as e:
        raise DecodeError(f"failed to decode PNG: {e}") from e

    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img


def strip_data_uri(payload: str) -> str:
    if payload.startswith(DATA_URI_PREFIX):
        return payload[len(DATA_URI_PREFIX):]
    return payload


def decode_overlay(payload: str) -> Image.Image:
    """
    Decode a base64 overlay, with or without the data-URI prefix.

    Raises EncodingError: If the payload is not valid base64
    Raises DecodeError: If the decoded bytes are not a PNG
    """
    # line breaks are allowed, as in MIME-wrapped base64
    encoded = strip_data_uri(payload).replace("\r", "").replace("\n", "")
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"failed to decode base64: {e}") from e

    logger.debug("Decoded overlay payload: %d bytes", len(raw))
    return decode_png(raw)
