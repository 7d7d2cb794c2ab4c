import re
import uuid

import pytest
from fastapi.testclient import TestClient

from conftest import JWT_SECRET
from main import create_app
from services.auth_service import create_access_token
from services.upload_service import UploadService


@pytest.fixture
def client(app_config):
    app = create_app(app_config, setup_logging=False)
    with TestClient(app) as client:
        yield client


def auth(user_id):
    return {"Authorization": f"Bearer {create_access_token(user_id, JWT_SECRET)}"}


@pytest.fixture
def video_id(client):
    response = client.post("/api/videos", json={"title": "Boots demo", "description": "laces"}, headers=auth("u1"))
    assert response.status_code == 201
    return response.json()["id"]


def test_health(client):
    assert client.get("/api/health").json()["status"] == "ok"


def test_create_and_fetch_video(client, video_id):
    response = client.get(f"/api/videos/{video_id}", headers=auth("u1"))

    assert response.status_code == 200
    body = response.json()
    assert body["user_id"] == "u1"
    assert body["thumbnail_url"] is None
    assert body["video_url"] is None


def test_fetch_other_users_video_forbidden(client, video_id):
    assert client.get(f"/api/videos/{video_id}", headers=auth("u2")).status_code == 403


def test_thumbnail_upload_is_served_from_assets(client, video_id):
    response = client.post(
        f"/api/thumbnail_upload/{video_id}",
        files={"thumbnail": ("boots.png", b"0123456789", "image/png")},
        headers=auth("u1"),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["thumbnail"]["storage_key"] == f"{video_id}.png"
    assert body["thumbnail_url"] == f"http://localhost:8091/assets/{video_id}.png"

    asset = client.get(f"/assets/{video_id}.png")
    assert asset.status_code == 200
    assert asset.content == b"0123456789"


def test_video_upload_gets_random_key(client, video_id):
    response = client.post(
        f"/api/video_upload/{video_id}",
        files={"video": ("boots.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
        headers=auth("u1"),
    )

    assert response.status_code == 200
    key = response.json()["video"]["storage_key"]
    assert re.fullmatch(r"[A-Za-z0-9_-]{43}\.mp4", key)
    assert response.json()["video"]["media_type"] == "video/mp4"


def test_missing_token_is_unauthorized(client, video_id):
    response = client.post(
        f"/api/thumbnail_upload/{video_id}",
        files={"thumbnail": ("boots.png", b"x", "image/png")},
    )
    assert response.status_code == 401


def test_invalid_token_is_unauthorized(client, video_id):
    response = client.post(
        f"/api/thumbnail_upload/{video_id}",
        files={"thumbnail": ("boots.png", b"x", "image/png")},
        headers={"Authorization": "Bearer forged"},
    )
    assert response.status_code == 401


def test_non_owner_is_forbidden(client, video_id):
    response = client.post(
        f"/api/thumbnail_upload/{video_id}",
        files={"thumbnail": ("boots.png", b"x", "image/png")},
        headers=auth("u2"),
    )
    assert response.status_code == 403
    assert client.get(f"/api/videos/{video_id}", headers=auth("u1")).json()["thumbnail_url"] is None


def test_invalid_video_id(client):
    response = client.post(
        "/api/thumbnail_upload/not-a-uuid",
        files={"thumbnail": ("boots.png", b"x", "image/png")},
        headers=auth("u1"),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid ID"


def test_unknown_video(client):
    response = client.post(
        f"/api/video_upload/{uuid.uuid4()}",
        files={"video": ("boots.mp4", b"x", "video/mp4")},
        headers=auth("u1"),
    )
    assert response.status_code == 404


def test_wrong_content_type(client, video_id):
    response = client.post(
        f"/api/video_upload/{video_id}",
        files={"video": ("boots.webm", b"x", "video/webm")},
        headers=auth("u1"),
    )
    assert response.status_code == 400


def test_missing_file_field(client, video_id):
    response = client.post(
        f"/api/video_upload/{video_id}",
        files={"thumbnail": ("boots.mp4", b"x", "video/mp4")},
        headers=auth("u1"),
    )
    assert response.status_code == 400


def test_payload_too_large(client, video_id, app_config):
    response = client.post(
        f"/api/thumbnail_upload/{video_id}",
        files={"thumbnail": ("big.png", b"x" * (app_config.max_thumbnail_bytes + 1), "image/png")},
        headers=auth("u1"),
    )
    assert response.status_code == 413


def test_oversized_upload_body_is_refused_before_it_is_read(app_config, monkeypatch):
    received = {"bytes": 0}
    uploads = []
    monkeypatch.setattr(UploadService, "upload", lambda self, request: uploads.append(request))

    app = create_app(app_config, setup_logging=False)

    async def counting_app(scope, receive, send):
        async def counted_receive():
            message = await receive()
            if message["type"] == "http.request":
                received["bytes"] += len(message.get("body", b""))
            return message
        await app(scope, counted_receive, send)

    with TestClient(counting_app) as client:
        created = client.post("/api/videos", json={"title": "Boots demo"}, headers=auth("u1"))
        received["bytes"] = 0

        response = client.post(
            f"/api/thumbnail_upload/{created.json()['id']}",
            files={"thumbnail": ("big.png", b"x" * (5 << 20), "image/png")},
            headers=auth("u1"),
        )

    assert response.status_code == 413
    assert str(app_config.max_thumbnail_bytes) in response.json()["detail"]
    assert received["bytes"] == 0
    assert uploads == []
