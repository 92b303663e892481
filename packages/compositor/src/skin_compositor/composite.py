"""
Skin compositing and chroma keying.

This module handles the image half of a request:
1. Blend the base onto a transparent canvas of the base's size
2. Blend the overlay on top at the same origin
3. Key out every pixel whose RGB is exactly CHROMA_KEY
"""

from __future__ import annotations

import logging
from io import BytesIO

import numpy as np
from PIL import Image

from .errors import EncodeError

logger = logging.getLogger(__name__)

CHROMA_KEY: tuple[int, int, int] = (0, 0, 254)

TRANSPARENT = (0, 0, 0, 0)


def _fit_to_canvas(img: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Place an image at the origin of a transparent canvas, cropping any overflow."""
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    if img.size == size:
        return img
    # crop pads with transparent pixels past the source edges
    return img.crop((0, 0) + size)


def apply_chroma_key(img: Image.Image) -> Image.Image:
    """
    Return a copy of the image with every CHROMA_KEY pixel made fully transparent.

    Matching is exact on the visible, alpha-premultiplied 8-bit RGB, so a
    half-transparent (0, 0, 254) is kept and an almost opaque (0, 0, 255)
    can match. Keyed pixels are zeroed on all four channels.
    """
    rgba = np.array(img.convert("RGBA"), dtype=np.uint8)
    rgb = rgba[..., :3].astype(np.uint32)
    alpha = rgba[..., 3:].astype(np.uint32)
    visible = (rgb * alpha + 127) // 255
    mask = np.all(visible == np.array(CHROMA_KEY, dtype=np.uint32), axis=-1)

    keyed = int(np.count_nonzero(mask))
    if keyed:
        rgba[mask] = TRANSPARENT
    logger.debug("Chroma key removed %d pixels", keyed)

    return Image.fromarray(rgba)


def composite_skin(base: Image.Image, overlay: Image.Image) -> Image.Image:
    """
    Composite `overlay` over `base` and strip the chroma key.

    The result always has the base's dimensions. An overlay of a different
    size is anchored at the top-left corner; outside the overlap it
    leaves the base untouched.
    """
    size = base.size
    out = Image.new("RGBA", size, TRANSPARENT)
    out = Image.alpha_composite(out, _fit_to_canvas(base, size))
    out = Image.alpha_composite(out, _fit_to_canvas(overlay, size))

    if overlay.size != size:
        logger.debug("Overlay size %s differs from base size %s", overlay.size, size)

    return apply_chroma_key(out)


def encode_png(img: Image.Image) -> bytes:
    """
    Serialize an image to PNG bytes.

    Raises EncodeError: If Pillow fails to write the image
    """
    buffer = BytesIO()
    try:
        img.save(buffer, format="PNG")
    except (OSError, ValueError) as e:
        raise EncodeError(f"failed to encode PNG: {e}") from e
    return buffer.getvalue()
