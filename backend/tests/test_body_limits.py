import asyncio

import pytest
from fastapi import HTTPException

from constants import UploadKind
from utils.body_limits import UploadBodyLimitMiddleware, upload_body_limits

LIMITS = {"/api/thumbnail_upload/": 1024}


def scope_for(path, headers=()):
    return {"type": "http", "method": "POST", "path": path, "headers": list(headers)}


async def drain(scope, receive, send):
    while True:
        message = await receive()
        if not message.get("more_body"):
            break
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": b"ok"})


class EndlessBody:
    """Client that keeps sending 1 KiB chunks and never finishes."""

    def __init__(self):
        self.chunks_sent = 0

    async def __call__(self):
        self.chunks_sent += 1
        return {"type": "http.request", "body": b"x" * 1024, "more_body": True}


class Collector:
    def __init__(self):
        self.messages = []

    async def __call__(self, message):
        self.messages.append(message)

    @property
    def status(self):
        return self.messages[0]["status"]


def test_limits_cover_each_upload_endpoint(app_config):
    limits = upload_body_limits(app_config)

    assert limits == {
        "/api/thumbnail_upload/": app_config.max_thumbnail_bytes,
        "/api/video_upload/": app_config.max_video_bytes,
    }
    assert set(limits) == {f"/api/{kind.route_name}/" for kind in UploadKind}


def test_declared_oversized_body_is_refused_unread():
    client = EndlessBody()
    send = Collector()
    middleware = UploadBodyLimitMiddleware(drain, LIMITS, overhead=0)
    headers = [(b"content-length", str(5 << 20).encode())]

    asyncio.run(middleware(scope_for("/api/thumbnail_upload/v1", headers), client, send))

    assert send.status == 413
    assert client.chunks_sent == 0
    assert b"1024 bytes" in send.messages[1]["body"]


def test_streamed_body_is_cut_off_past_the_ceiling():
    client = EndlessBody()
    middleware = UploadBodyLimitMiddleware(drain, LIMITS, overhead=1024)

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(middleware(scope_for("/api/thumbnail_upload/v1"), client, Collector()))

    assert exc_info.value.status_code == 413
    # 2 KiB allowed, the third chunk crosses it
    assert client.chunks_sent == 3


def test_body_within_ceiling_passes_through():
    chunks = iter([
        {"type": "http.request", "body": b"x" * 600, "more_body": True},
        {"type": "http.request", "body": b"x" * 400, "more_body": False},
    ])

    async def receive():
        return next(chunks)

    send = Collector()
    middleware = UploadBodyLimitMiddleware(drain, LIMITS, overhead=0)
    asyncio.run(middleware(scope_for("/api/thumbnail_upload/v1"), receive, send))

    assert send.status == 200


def test_other_paths_are_not_limited():
    client = EndlessBody()
    calls = []

    async def app(scope, receive, send):
        for _ in range(10):
            await receive()
        calls.append(scope["path"])

    middleware = UploadBodyLimitMiddleware(app, LIMITS, overhead=0)
    asyncio.run(middleware(scope_for("/api/videos"), client, Collector()))

    assert calls == ["/api/videos"]
    assert client.chunks_sent == 10
