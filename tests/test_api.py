"""
End-to-end checks of the HTTP surface through FastAPI's TestClient.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.core.errors import StorageError

from conftest import PNG_BYTES


@pytest.fixture()
def client(make_settings):
    app = create_app(make_settings())
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def auth(client):
    resp = client.post("/api/admin/login", json={"username": "admin", "password": "correct horse battery"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def test_login_success_and_failure(client):
    ok = client.post("/api/admin/login", json={"username": "admin", "password": "correct horse battery"})
    assert ok.status_code == 200
    assert ok.json()["username"] == "admin"
    assert ok.json()["token"]

    bad = client.post("/api/admin/login", json={"username": "admin", "password": "nope"})
    assert bad.status_code == 401
    assert bad.json() == {"error": "Invalid credentials"}


def test_login_with_malformed_body_is_400(client):
    resp = client.post("/api/admin/login", json={"username": "admin"})
    assert resp.status_code == 400
    assert "password" in resp.json()["error"]


def test_protected_routes_distinguish_missing_and_invalid_token(client):
    missing = client.post("/api/blogs", data={"title": "T", "content": "C"})
    assert missing.status_code == 401
    assert missing.json() == {"error": "Access denied"}

    invalid = client.post("/api/blogs", data={"title": "T", "content": "C"},
                          headers={"Authorization": "Bearer garbage.token.value"})
    assert invalid.status_code == 403
    assert invalid.json() == {"error": "Invalid token"}

    other_scheme = client.post("/api/blogs", data={"title": "T", "content": "C"},
                               headers={"Authorization": "Basic YWRtaW46eA=="})
    assert other_scheme.status_code == 403
    assert other_scheme.json() == {"error": "Invalid token"}

    assert client.delete("/api/projects/x").status_code == 401


def test_blog_crud_with_image(client, auth):
    created = client.post(
        "/api/blogs",
        data={"title": "Hi", "content": "a" * 200},
        files={"image": ("cover.png", PNG_BYTES, "image/png")},
        headers=auth,
    )
    assert created.status_code == 201
    blog = created.json()
    assert blog["excerpt"] == "a" * 150 + "..."
    assert blog["image"].startswith("/uploads/")

    served = client.get(blog["image"])
    assert served.status_code == 200
    assert served.content == PNG_BYTES

    assert client.get(f"/api/blogs/{blog['id']}").json() == blog
    assert [b["id"] for b in client.get("/api/blogs").json()] == [blog["id"]]

    updated = client.put(
        f"/api/blogs/{blog['id']}",
        data={"title": "Changed"},
        files={"image": ("new.png", PNG_BYTES, "image/png")},
        headers=auth,
    )
    assert updated.status_code == 200
    body = updated.json()
    assert body["title"] == "Changed"
    assert body["content"] == blog["content"]
    assert client.get(blog["image"]).status_code == 404
    assert client.get(body["image"]).status_code == 200

    deleted = client.delete(f"/api/blogs/{blog['id']}", headers=auth)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Blog deleted successfully"}
    assert client.get(f"/api/blogs/{blog['id']}").status_code == 404
    assert client.get(body["image"]).status_code == 404


def test_project_crud_and_empty_link_semantics(client, auth):
    created = client.post(
        "/api/projects",
        data={"title": "P", "description": "D", "technologies": "Go, Rust , C++", "githubLink": "https://gh/x"},
        headers=auth,
    )
    assert created.status_code == 201
    project = created.json()
    assert project["technologies"] == ["Go", "Rust", "C++"]
    assert project["liveLink"] == ""

    kept = client.put(f"/api/projects/{project['id']}", data={"title": "P2"}, headers=auth).json()
    assert kept["githubLink"] == "https://gh/x"

    cleared = client.put(f"/api/projects/{project['id']}", data={"githubLink": ""}, headers=auth).json()
    assert cleared["githubLink"] == ""
    assert cleared["title"] == "P2"


def test_json_bodies_are_accepted(client, auth):
    resp = client.post("/api/projects", json={"title": "P", "description": "D", "technologies": ["A ", " B"]},
                       headers=auth)
    assert resp.status_code == 201
    assert resp.json()["technologies"] == ["A", "B"]


def test_missing_required_fields_is_400(client, auth):
    resp = client.post("/api/blogs", data={"title": "no content"}, headers=auth)
    assert resp.status_code == 400
    assert "content" in resp.json()["error"]


def test_unknown_ids_are_404(client, auth):
    assert client.get("/api/projects/nope").json() == {"error": "Project not found"}
    assert client.put("/api/blogs/nope", data={"title": "x"}, headers=auth).status_code == 404
    assert client.delete("/api/blogs/nope", headers=auth).status_code == 404


def test_oversized_upload_creates_nothing(make_settings):
    app = create_app(make_settings(max_upload_bytes=1024))
    with TestClient(app) as client:
        token = client.post("/api/admin/login",
                            json={"username": "admin", "password": "correct horse battery"}).json()["token"]
        resp = client.post(
            "/api/blogs",
            data={"title": "T", "content": "C"},
            files={"image": ("big.png", PNG_BYTES + b"\x00" * 4096, "image/png")},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert resp.status_code == 413
        assert client.get("/api/blogs").json() == []


def test_wrong_file_type_is_400(client, auth):
    resp = client.post(
        "/api/blogs",
        data={"title": "T", "content": "C"},
        files={"image": ("doc.pdf", b"%PDF-1.4", "application/pdf")},
        headers=auth,
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Only image files are allowed!"}


def test_health_reports_backends(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["storage"] == "memory"
    assert body["assets"] == "file"
    assert body["timestamp"].endswith("Z")
    assert resp.headers["x-content-type-options"] == "nosniff"


def test_uploads_rejects_unknown_and_traversal(client):
    assert client.get("/uploads/missing.png").status_code == 404
    assert client.get("/uploads/..%2Fdata%2Fadmins.json").status_code == 404


def test_json_backend_persists_across_app_instances(make_settings):
    settings = make_settings(storage_backend="json")
    with TestClient(create_app(settings)) as first:
        token = first.post("/api/admin/login",
                           json={"username": "admin", "password": "correct horse battery"}).json()["token"]
        created = first.post("/api/blogs", data={"title": "T", "content": "C"},
                             headers={"Authorization": f"Bearer {token}"}).json()

    with TestClient(create_app(settings)) as second:
        assert second.get(f"/api/blogs/{created['id']}").json()["title"] == "T"
        # the seeded admin from the first boot is reused
        assert second.post("/api/admin/login",
                           json={"username": "admin", "password": "correct horse battery"}).status_code == 200


def test_storage_failure_is_reported_as_500(client, monkeypatch):
    def broken(collection):
        raise StorageError("Storage unavailable")

    monkeypatch.setattr(client.app.state.store, "list_all", broken)
    resp = client.get("/api/blogs")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Storage unavailable"}


def test_unexpected_error_is_a_generic_500(make_settings, monkeypatch):
    app = create_app(make_settings())

    def broken(collection):
        raise RuntimeError("secret detail")

    monkeypatch.setattr(app.state.store, "list_all", broken)
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/api/projects")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
    assert "secret detail" not in resp.text
