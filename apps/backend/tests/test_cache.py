import pytest
import redis

from skin_backend.errors import CacheWriteError
from skin_backend.services import ResponseCache


class BrokenRedis:
    def get(self, key):
        raise redis.TimeoutError("read timed out")

    def set(self, key, value):
        raise redis.TimeoutError("write timed out")


class StaticRedis:
    def __init__(self, value):
        self.value = value

    def get(self, key):
        return self.value


def test_read_error_is_a_miss():
    assert ResponseCache(BrokenRedis()).get("key") is None


def test_empty_value_is_a_miss():
    assert ResponseCache(StaticRedis("")).get("key") is None


def test_hit_returns_value():
    assert ResponseCache(StaticRedis('{"a": 1}')).get("key") == '{"a": 1}'


def test_write_error_raises():
    with pytest.raises(CacheWriteError, match="write timed out"):
        ResponseCache(BrokenRedis()).set("key", "value")


def test_from_url_does_not_connect():
    cache = ResponseCache.from_url("redis://localhost:1/0")

    assert isinstance(cache, ResponseCache)
    cache.close()
