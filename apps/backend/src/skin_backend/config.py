"""Configuration management for the overlay backend."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_UPLOAD_URL = "https://api.mineskin.org/generate/upload"
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
USER_AGENT = "Mineskin-Overlay/1.0 (Discord: per.ny)"


def _parse_timeout(value: str | None) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(frozen=True)
class Config:
    """Backend configuration loaded from environment variables."""

    mineskin_api_key: str = ""
    redis_url: str = ""
    upload_url: str = DEFAULT_UPLOAD_URL
    upload_timeout: float | None = None
    fetch_timeout: float = 10.0
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def load(cls) -> Config:
        """Load configuration from environment variables."""
        return cls(
            mineskin_api_key=os.getenv("MINESKIN_API_KEY", ""),
            redis_url=os.getenv("REDIS_URL", ""),
            upload_url=os.getenv("MINESKIN_UPLOAD_URL", DEFAULT_UPLOAD_URL),
            upload_timeout=_parse_timeout(os.getenv("MINESKIN_TIMEOUT")),
            fetch_timeout=float(os.getenv("OVERLAY_FETCH_TIMEOUT", "10.0")),
            host=os.getenv("OVERLAY_HOST", "0.0.0.0"),
            port=int(os.getenv("OVERLAY_PORT", "8080")),
        )

    @property
    def cache_url(self) -> str:
        return self.redis_url or DEFAULT_REDIS_URL

    def missing_settings(self) -> list[str]:
        """Names of settings the service needs but that were left unset."""
        missing = []
        if not self.mineskin_api_key:
            missing.append("MINESKIN_API_KEY")
        if not self.redis_url:
            missing.append("REDIS_URL")
        return missing
