from __future__ import annotations

import base64
from io import BytesIO

import pytest
from PIL import Image


@pytest.fixture
def solid_image():
    """Factory for single-color RGBA images."""
    def make(color, size=(2, 2)):
        return Image.new("RGBA", size, color)
    return make


@pytest.fixture
def png_bytes():
    def encode(img: Image.Image, fmt: str = "PNG") -> bytes:
        buffer = BytesIO()
        img.save(buffer, format=fmt)
        return buffer.getvalue()
    return encode


@pytest.fixture
def png_b64(png_bytes):
    def encode(img: Image.Image) -> str:
        return base64.b64encode(png_bytes(img)).decode("ascii")
    return encode
