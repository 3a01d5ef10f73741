"""
End-to-end editor flow through the FastAPI app.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import MemoryStorage, make_image
from bizcard.app import create_app


@pytest.fixture()
def client(temp_db):
    app = create_app(storage=MemoryStorage())
    with TestClient(app) as test_client:
        yield test_client


def _register(client, email="alice@example.com"):
    resp = client.post("/auth/register", json={"email": email, "password": "password123"})
    assert resp.status_code == 201
    return resp.json()


def test_editor_requires_login(client):
    assert client.get("/editor").status_code == 401
    assert client.get("/auth/me").status_code == 401


def test_new_user_sees_default_draft(client):
    _register(client)
    state = client.get("/editor").json()
    card = state["card"]
    assert card["id"] is None
    assert card["email"] == "alice@example.com"
    assert card["theme"] == {"primary": "#3B82F6", "secondary": "#1E40AF", "background": "#FFFFFF", "text": "#1F2937"}
    assert card["shape"] == "rectangle"
    assert card["is_published"] is False
    assert card["public_url"] is None
    assert card["social_links"] == []


def test_full_editor_flow(client):
    _register(client)

    resp = client.patch("/editor/fields", json={"title": "Alice", "company": "Acme"})
    assert resp.json()["card"]["company"] == "Acme"
    resp = client.patch("/editor/theme", json={"primary": "#000000"})
    assert resp.json()["card"]["theme"]["secondary"] == "#1E40AF"
    resp = client.patch("/editor/layout", json={"font": "Open Sans"})
    assert resp.json()["card"]["font_css"].startswith("https://fonts.googleapis.com/css2?family=Open+Sans")
    assert client.put("/editor/shape", json={"shape": "rounded"}).status_code == 200

    # links need a saved card
    client.patch("/editor/link-form", json={"platform": "GitHub", "username": "alice"})
    assert client.post("/editor/links").status_code == 400

    saved = client.post("/editor/save").json()["card"]
    card_id = saved["id"]
    assert card_id
    assert client.get(f"/c/{card_id}").status_code == 404

    state = client.patch("/editor/link-form", json={"platform": "GitHub", "username": "alice"}).json()
    assert state["link_form"]["url"] == "https://github.com/alice"
    links = client.post("/editor/links").json()["card"]["social_links"]
    assert [link["url"] for link in links] == ["https://github.com/alice"]

    client.put("/editor/published", json={"published": True})
    state = client.post("/editor/save").json()
    assert state["card"]["id"] == card_id
    assert state["card"]["public_url"] == f"/c/{card_id}"

    public = client.get(f"/c/{card_id}")
    assert public.status_code == 200
    assert public.json()["title"] == "Alice"
    assert public.json()["public_url"] == f"https://cards.example.com/c/{card_id}"

    link_id = links[0]["id"]
    state = client.delete(f"/editor/links/{link_id}").json()
    assert state["card"]["social_links"] == []


def test_invalid_theme_rejected(client):
    _register(client)
    resp = client.patch("/editor/theme", json={"text": "blue"})
    assert resp.status_code == 400
    assert client.get("/editor").json()["card"]["theme"]["text"] == "#1F2937"


def test_partly_invalid_theme_changes_nothing(client):
    _register(client)
    resp = client.patch("/editor/theme", json={"primary": "#000000", "text": "blue"})
    assert resp.status_code == 400
    theme = client.get("/editor").json()["card"]["theme"]
    assert theme["primary"] == "#3B82F6"
    assert theme["text"] == "#1F2937"


def test_partly_invalid_layout_changes_nothing(client):
    _register(client)
    resp = client.patch("/editor/layout", json={"style": "minimal", "font": "Comic Sans"})
    assert resp.status_code == 400
    assert client.get("/editor").json()["card"]["layout"] == {"style": "modern", "alignment": "center", "font": "Inter"}


def test_avatar_upload(client):
    _register(client)
    resp = client.post("/editor/avatar", files={"photo": ("me.png", make_image("PNG"), "image/png")})
    assert resp.status_code == 200
    assert resp.json()["card"]["avatar_url"].startswith("https://blobs.example.com/avatars/avatars/")

    bad = client.post("/editor/avatar", files={"photo": ("me.gif", b"GIF89a", "image/gif")})
    assert bad.status_code == 400


def test_state_survives_logout_and_login(client):
    _register(client)
    client.patch("/editor/fields", json={"company": "Acme"})
    client.post("/editor/save")
    client.patch("/editor/fields", json={"company": "not saved"})
    client.post("/auth/logout")

    assert client.post("/auth/login", json={"email": "alice@example.com", "password": "password123"}).status_code == 200
    assert client.get("/editor").json()["card"]["company"] == "Acme"


def test_login_attempts_are_throttled(client):
    creds = {"email": "nobody@example.com", "password": "password123"}
    for _ in range(10):
        assert client.post("/auth/login", json=creds).status_code == 401
    resp = client.post("/auth/login", json=creds)
    assert resp.status_code == 429
    assert int(resp.headers["retry-after"]) > 0
