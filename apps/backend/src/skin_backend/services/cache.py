"""
Response cache backed by Redis.

Reads are best effort: any Redis failure is logged and treated as a
miss. Writes must succeed, a failed write fails the request.
"""

from __future__ import annotations

import logging

import redis

from ..errors import CacheWriteError

logger = logging.getLogger(__name__)


class ResponseCache:
    """Stores MineSkin responses by cache key, without expiry."""

    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> ResponseCache:
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, key: str) -> str | None:
        try:
            value = self._client.get(key)
        except redis.RedisError as e:
            logger.warning("Cache read failed for %s, treating as miss: %s", key, e)
            return None

        if not value:
            return None
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except redis.RedisError as e:
            raise CacheWriteError(f"Failed to set cache: {e}") from e

    def close(self) -> None:
        self._client.close()
