"""Exceptions raised by the compositing engine."""

from __future__ import annotations


class CompositorError(Exception):
    """Base Exception for image decoding and encoding."""
    pass


class DecodeError(CompositorError):
    """Raised when bytes are not a valid PNG image."""
    pass


class EncodingError(CompositorError):
    """Raised when an overlay string is not valid base64."""
    pass


class EncodeError(CompositorError):
    """Raised when a composite can't be serialized to PNG."""
    pass
