"""
Request failures of the overlay service.

Every failure aborts the request with a single plain-text response.
The status code lives on the exception class.
"""

from __future__ import annotations


class OverlayError(Exception):
    """Base Exception for a failed overlay request."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(OverlayError):
    """Raised when a required form field is missing or empty."""
    status_code = 400


class FetchError(OverlayError):
    """Raised when the base image can't be fetched."""
    status_code = 400


class ContentTypeError(FetchError):
    """Raised when the base image is not served as image/png."""
    pass


class InvalidImageError(OverlayError):
    """Raised when the base or overlay payload is not a decodable PNG."""
    status_code = 400


class CompositeError(OverlayError):
    """Raised when the composite can't be serialized."""
    pass


class UploadError(OverlayError):
    """Raised when the upload request to MineSkin fails in transport."""
    pass


class RemoteError(OverlayError):
    """Raised when MineSkin answers with a non-200 status."""

    def __init__(self, status: int, body: str):
        self.remote_status = status
        self.body = body
        super().__init__(f"Failed to upload skin to MineSkin: {body}")


class CacheWriteError(OverlayError):
    """Raised when a successful upload can't be stored in the cache."""
    pass
