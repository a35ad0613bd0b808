from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import auth_header
from prephub.main import create_app
from prephub.models import CourseStatus


def test_brand_crud(client, admin_token, make_course):
    h = auth_header(admin_token)

    assert client.post("/api/brands", json={"description": "no name"}, headers=h).status_code == 400

    created = client.post("/api/brands", json={"name": "Ondemand"}, headers=h)
    assert created.status_code == 201
    bid = created.json()["brandId"]
    client.post("/api/brands", json={"name": "Any Tutor"}, headers=h)

    brands = client.get("/api/brands").json()["brands"]
    assert [b["name"] for b in brands] == ["Any Tutor", "Ondemand"]
    assert brands[1]["logo"] == "🏫"

    make_course(brand="Ondemand", rating=4.0, title="low")
    make_course(brand="Ondemand", rating=5.0, title="high")
    make_course(brand="Ondemand", status=CourseStatus.inactive, title="hidden")
    detail = client.get(f"/api/brands/{bid}").json()
    assert [c["title"] for c in detail["courses"]] == ["high", "low"]

    assert client.put(f"/api/brands/{bid}", json={"logo": "🎓"}, headers=h).status_code == 200
    brand = client.get(f"/api/brands/{bid}").json()["brand"]
    assert brand["logo"] == "🎓"
    assert brand["name"] == "Ondemand"

    assert client.delete(f"/api/brands/{bid}", headers=h).status_code == 200
    assert client.get(f"/api/brands/{bid}").status_code == 404


def test_brand_mutations_are_admin_only(client, user_token):
    assert client.post("/api/brands", json={"name": "x"}, headers=auth_header(user_token)).status_code == 403


def test_contact_and_message_admin(client, admin_token, user_token):
    h = auth_header(admin_token)

    bad = client.post("/api/contact", json={"name": "A", "email": "a@x.y", "subject": "Hi"})
    assert bad.status_code == 400

    sent = client.post(
        "/api/contact",
        json={"name": "A", "email": "a@x.y", "subject": "Hi", "message": "Is TCAS open?"},
    )
    assert sent.status_code == 201
    mid = sent.json()["id"]

    assert client.get("/api/messages", headers=auth_header(user_token)).status_code == 403

    messages = client.get("/api/messages", headers=h).json()["messages"]
    assert messages[0]["status"] == "unread"

    assert client.put(f"/api/messages/{mid}/read", headers=h).json()["success"] is True
    assert client.get("/api/messages", headers=h).json()["messages"][0]["status"] == "read"

    assert client.delete(f"/api/messages/{mid}", headers=h).status_code == 200
    assert client.delete(f"/api/messages/{mid}", headers=h).status_code == 404


def test_meta_endpoints(client, admin_token, make_course):
    make_course()

    assert client.get("/api/health").json()["status"] == "ok"
    assert client.get("/api").json()["name"] == "PREP HUB API"
    assert client.get("/api/stats").status_code == 401
    assert client.get("/api/stats", headers=auth_header(admin_token)).json() == {
        "courses": 1,
        "users": 1,
        "brands": 0,
        "favorites": 0,
    }


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert "error" in resp.json()


def test_bad_path_param_is_validation_error(client):
    resp = client.get("/api/brands/not-an-int")

    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"


def test_unexpected_errors_become_generic_internal(cfg, store, monkeypatch):
    from prephub import main

    def boom(db):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(main, "dashboard_counts", boom)
    app = create_app(cfg, store)

    with TestClient(app, raise_server_exceptions=False) as c:
        login = c.post("/api/auth/login", json={"email": cfg.ADMIN_EMAIL, "password": cfg.ADMIN_PASSWORD})
        resp = c.get("/api/stats", headers=auth_header(login.json()["token"]))

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "code": "internal"}
    assert "secret internals" not in resp.text
