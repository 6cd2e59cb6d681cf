import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

import database  # noqa: E402
from app import models  # noqa: E402
from app.services import storage  # noqa: E402


@pytest.fixture
def client(monkeypatch) -> TestClient:
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SessionTesting = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(database, "SessionLocal", SessionTesting)
    models.Base.metadata.create_all(bind=engine)

    from main import app

    return TestClient(app)


def _other_users_template(name: str, is_public: bool) -> str:
    db = database.SessionLocal()
    try:
        storage.ensure_user(db, "someone-else")
        template = storage.create_template(
            db,
            "someone-else",
            {"name": name, "options": {"size": 200}, "is_public": is_public},
        )
        return template.id
    finally:
        db.close()


def _template_payload(**overrides):
    payload = {
        "name": "URL Template",
        "description": "Quick URL QR code template",
        "category": "url",
        "options": {"size": 200, "fg_color": "#000000", "bg_color": "#ffffff", "level": "M"},
    }
    payload.update(overrides)
    return payload


def test_create_and_list_own_templates(client: TestClient):
    resp = client.post("/api/templates", json=_template_payload())
    assert resp.status_code == 201, resp.text
    created = resp.json()
    assert created["usage_count"] == 0
    assert created["is_public"] is False

    listed = client.get("/api/templates").json()
    assert [item["id"] for item in listed] == [created["id"]]
    assert client.get("/api/templates?public=true").json() == []


def test_public_templates_sorted_by_usage(client: TestClient):
    quiet = client.post("/api/templates", json=_template_payload(name="Quiet", is_public=True)).json()
    busy = client.post("/api/templates", json=_template_payload(name="Busy", is_public=True)).json()
    for _ in range(3):
        assert client.post(f"/api/templates/{busy['id']}/use").status_code == 204
    client.post(f"/api/templates/{quiet['id']}/use")

    public = client.get("/api/templates", params={"public": "true"}).json()

    assert [item["name"] for item in public] == ["Busy", "Quiet"]
    assert [item["usage_count"] for item in public] == [3, 1]


def test_foreign_templates_visible_only_when_public(client: TestClient):
    private_id = _other_users_template("Private", is_public=False)
    public_id = _other_users_template("Shared", is_public=True)

    assert client.get(f"/api/templates/{private_id}").status_code == 404
    assert client.post(f"/api/templates/{private_id}/use").status_code == 404

    assert client.get(f"/api/templates/{public_id}").status_code == 200
    assert client.post(f"/api/templates/{public_id}/use").status_code == 204
    # Public templates can be used but not edited by other users.
    assert client.put(f"/api/templates/{public_id}", json={"name": "Hijacked"}).status_code == 404
    assert client.delete(f"/api/templates/{public_id}").status_code == 404


def test_update_and_delete_template(client: TestClient):
    created = client.post("/api/templates", json=_template_payload()).json()

    updated = client.put(f"/api/templates/{created['id']}", json={"name": "Renamed", "is_public": True})
    assert updated.status_code == 200, updated.text
    assert updated.json()["name"] == "Renamed"
    assert updated.json()["description"] == "Quick URL QR code template"

    assert client.delete(f"/api/templates/{created['id']}").status_code == 204
    assert client.get(f"/api/templates/{created['id']}").status_code == 404


def test_template_validation_error(client: TestClient):
    resp = client.post("/api/templates", json={"description": "no name"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid data"


def test_preferences_lifecycle(client: TestClient):
    assert client.get("/api/preferences").status_code == 404
    assert client.put("/api/preferences", json={"theme": "dark"}).status_code == 404

    created = client.post("/api/preferences", json={})
    assert created.status_code == 201, created.text
    body = created.json()
    assert body["theme"] == "light"
    assert body["auto_save"] is True
    assert body["default_download_format"] == "png"

    assert client.post("/api/preferences", json={}).status_code == 409

    updated = client.put("/api/preferences", json={"theme": "dark", "default_download_format": "svg"})
    assert updated.status_code == 200
    assert updated.json()["theme"] == "dark"
    assert updated.json()["default_download_format"] == "svg"
    assert updated.json()["auto_save"] is True

    assert client.get("/api/preferences").json()["theme"] == "dark"


def test_preferences_update_rejects_null(client: TestClient):
    assert client.post("/api/preferences", json={}).status_code == 201

    for field in ("theme", "auto_save", "default_download_format"):
        response = client.put("/api/preferences", json={field: None})
        assert response.status_code == 400, field
        assert response.json()["error"] == "Invalid data"

    body = client.get("/api/preferences").json()
    assert body["theme"] == "light"
    assert body["auto_save"] is True

    cleared = client.put("/api/preferences", json={"default_template_id": None})
    assert cleared.status_code == 200
    assert cleared.json()["default_template_id"] is None


def test_template_update_rejects_null_name(client: TestClient):
    created = client.post("/api/templates", json=_template_payload()).json()

    response = client.put(f"/api/templates/{created['id']}", json={"name": None})
    assert response.status_code == 400
    assert client.get(f"/api/templates/{created['id']}").json()["name"] == "URL Template"

    cleared = client.put(f"/api/templates/{created['id']}", json={"description": None})
    assert cleared.status_code == 200
    assert cleared.json()["description"] is None


def test_preferences_default_template(client: TestClient):
    template = client.post("/api/templates", json=_template_payload()).json()
    private_id = _other_users_template("Private", is_public=False)

    assert client.post("/api/preferences", json={"default_template_id": private_id}).status_code == 400

    created = client.post("/api/preferences", json={"default_template_id": template["id"]})
    assert created.status_code == 201
    assert created.json()["default_template_id"] == template["id"]

    client.delete(f"/api/templates/{template['id']}")
    assert client.get("/api/preferences").json()["default_template_id"] is None


def test_preferences_reject_unknown_theme(client: TestClient):
    resp = client.post("/api/preferences", json={"theme": "sepia"})
    assert resp.status_code == 400
    assert resp.json()["details"]
