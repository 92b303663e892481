"""
MineSkin upload client.

Uploads a skin PNG as a multipart form file and hands back the raw
response. Status handling is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from ..config import USER_AGENT
from ..errors import UploadError

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "file"
UPLOAD_FILENAME = "skin.png"


@dataclass(frozen=True)
class UploadResponse:
    status_code: int
    body: str


class MineSkinClient:
    """Thin wrapper around an httpx client authenticated for MineSkin."""

    def __init__(self, client: httpx.Client, upload_url: str, api_key: str):
        self._client = client
        self.upload_url = upload_url
        self._api_key = api_key

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "User-Agent": USER_AGENT,
        }

    def upload(self, png_bytes: bytes) -> UploadResponse:
        """
        POST the skin to the upload endpoint.

        Raises UploadError: If the request fails before a response arrives
        """
        files = {UPLOAD_FIELD: (UPLOAD_FILENAME, png_bytes, "image/png")}
        try:
            resp = self._client.post(self.upload_url, files=files, headers=self._headers())
        except httpx.HTTPError as e:
            raise UploadError(f"Failed to send request to MineSkin: {e}") from e

        logger.info("MineSkin upload answered %d (%d bytes)", resp.status_code, len(resp.content))
        return UploadResponse(status_code=resp.status_code, body=resp.text)

    def close(self) -> None:
        self._client.close()
