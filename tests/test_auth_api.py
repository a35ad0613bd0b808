from __future__ import annotations

from sqlalchemy import func, select

from conftest import ADMIN_EMAIL, auth_header, register
from prephub.models import Role, User
from prephub.utils.auth import decode_access_token


def test_register_returns_token_and_public_user(client):
    body = register(client, email="new@test.local", name="New")

    assert body["user"]["email"] == "new@test.local"
    assert body["user"]["role"] == "user"
    assert body["user"]["avatar"] == "👤"
    assert "password" not in body["user"] and "password_hash" not in body["user"]
    assert body["token"]


def test_register_duplicate_email_creates_no_second_row(client, db):
    register(client, email="dup@test.local")

    resp = client.post(
        "/api/auth/register",
        json={"name": "Other", "email": "dup@test.local", "password": "another1"},
    )

    assert resp.status_code == 400
    assert resp.json()["code"] == "duplicate_email"
    count = db.scalar(select(func.count(User.id)).where(User.email == "dup@test.local"))
    assert count == 1


def test_register_validation(client):
    missing = client.post("/api/auth/register", json={"name": "A", "email": "a@test.local"})
    short = client.post("/api/auth/register", json={"name": "A", "email": "a@test.local", "password": "12345"})

    assert missing.status_code == 400
    assert missing.json()["code"] == "validation_error"
    assert short.status_code == 400
    assert short.json()["code"] == "validation_error"


def test_login_token_carries_stored_identity(client, cfg, db):
    register(client, email="login@test.local", password="secret1")

    resp = client.post("/api/auth/login", json={"email": "login@test.local", "password": "secret1"})

    assert resp.status_code == 200
    stored = db.scalar(select(User).where(User.email == "login@test.local"))
    ident = decode_access_token(resp.json()["token"], cfg)
    assert ident.id == stored.id
    assert ident.role == stored.role == Role.user


def test_login_admin_bootstrap(client, admin_token, cfg):
    ident = decode_access_token(admin_token, cfg)

    assert ident.email == ADMIN_EMAIL
    assert ident.is_admin


def test_login_failures_are_indistinguishable(client):
    register(client, email="who@test.local", password="secret1")

    wrong_pw = client.post("/api/auth/login", json={"email": "who@test.local", "password": "nope123"})
    no_user = client.post("/api/auth/login", json={"email": "ghost@test.local", "password": "secret1"})

    assert wrong_pw.status_code == no_user.status_code == 401
    assert wrong_pw.json() == no_user.json()


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers=auth_header("not-a-token")).status_code == 403


def test_me_returns_user(client, user_token):
    resp = client.get("/api/auth/me", headers=auth_header(user_token))

    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "user@test.local"


def test_profile_partial_update_keeps_other_fields(client, user_token):
    h = auth_header(user_token)

    assert client.put("/api/auth/profile", json={"avatar": "🦊"}, headers=h).status_code == 200
    user = client.get("/api/auth/me", headers=h).json()["user"]
    assert user["avatar"] == "🦊"
    assert user["name"] == "User"

    client.put("/api/auth/profile", json={"name": "Renamed"}, headers=h)
    user = client.get("/api/auth/me", headers=h).json()["user"]
    assert user["name"] == "Renamed"
    assert user["avatar"] == "🦊"
