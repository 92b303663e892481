from __future__ import annotations

import base64
from io import BytesIO

import httpx
import pytest
import redis
from PIL import Image

from skin_backend import Config, create_app
from skin_backend.services import MineSkinClient, OverlayService, ResponseCache

UPLOAD_URL = "https://mineskin.example/generate/upload"
MINESKIN_BODY = '{"uuid": "abc", "texture": {"url": "https://textures.example/out.png"}}'


class MemoryRedis:
    """Dict-backed stand-in for the two Redis calls the cache makes."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = False):
        self.data: dict[str, str] = {}
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.gets: list[str] = []
        self.closed = False

    def get(self, key):
        self.gets.append(key)
        if self.fail_reads:
            raise redis.ConnectionError("connection refused")
        return self.data.get(key)

    def set(self, key, value):
        if self.fail_writes:
            raise redis.ConnectionError("connection refused")
        self.data[key] = value
        return True

    def close(self):
        self.closed = True


def encode_png(img: Image.Image) -> bytes:
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def extract_png(multipart_body: bytes) -> Image.Image:
    """Pull the PNG file part out of a multipart request body."""
    start = multipart_body.index(b"\x89PNG")
    end = multipart_body.index(b"IEND", start) + 8
    return Image.open(BytesIO(multipart_body[start:end])).convert("RGBA")


class Upstream:
    """Scripted base image host and MineSkin endpoint."""

    def __init__(self):
        self.base_png = encode_png(Image.new("RGBA", (2, 2), (120, 80, 40, 255)))
        self.base_content_type = "image/png"
        self.fetch_error: Exception | None = None
        self.upload_status = 200
        self.upload_body = MINESKIN_BODY
        self.upload_error: Exception | None = None
        self.fetches: list[httpx.Request] = []
        self.uploads: list[httpx.Request] = []

    def handle_fetch(self, request: httpx.Request) -> httpx.Response:
        self.fetches.append(request)
        if self.fetch_error is not None:
            raise self.fetch_error
        return httpx.Response(
            200,
            headers={"content-type": self.base_content_type},
            content=self.base_png,
        )

    def handle_upload(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.uploads.append(request)
        if self.upload_error is not None:
            raise self.upload_error
        return httpx.Response(self.upload_status, text=self.upload_body)

    def uploaded_image(self, index: int = -1) -> Image.Image:
        return extract_png(self.uploads[index].content)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def memory_redis():
    return MemoryRedis()


@pytest.fixture
def service(upstream, memory_redis):
    fetch_client = httpx.Client(transport=httpx.MockTransport(upstream.handle_fetch))
    upload_client = httpx.Client(transport=httpx.MockTransport(upstream.handle_upload))
    svc = OverlayService(
        cache=ResponseCache(memory_redis),
        fetch_client=fetch_client,
        mineskin=MineSkinClient(upload_client, UPLOAD_URL, "secret-key"),
    )
    yield svc
    svc.close()


@pytest.fixture
def app(service):
    app = create_app(Config(mineskin_api_key="secret-key"), service=service)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def overlay_b64():
    def encode(img: Image.Image, prefix: str = "") -> str:
        return prefix + base64.b64encode(encode_png(img)).decode("ascii")
    return encode
