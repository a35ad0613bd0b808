from __future__ import annotations

import pytest
from sqlalchemy import func, select

from conftest import ADMIN_EMAIL, auth_header, register
from prephub.errors import InvalidRole, NotFound, SelfModificationForbidden
from prephub.models import Favorite, Role, User
from prephub.services import users as users_service


@pytest.fixture()
def admin(db) -> User:
    return db.scalar(select(User).where(User.email == ADMIN_EMAIL))


def test_bootstrap_creates_exactly_one_admin(db, store, cfg):
    from prephub.init_db import ensure_admin

    ensure_admin(store, cfg)
    ensure_admin(store, cfg)

    assert db.scalar(select(func.count(User.id)).where(User.email == ADMIN_EMAIL)) == 1


def test_admin_cannot_modify_self(db, admin):
    ident = users_service.identity_of(admin)

    with pytest.raises(SelfModificationForbidden):
        users_service.delete_user(db, ident, admin.id)
    with pytest.raises(SelfModificationForbidden):
        users_service.set_role(db, ident, admin.id, "user")
    with pytest.raises(SelfModificationForbidden):
        users_service.set_role(db, ident, admin.id, "admin")

    db.expire_all()
    row = db.get(User, admin.id)
    assert row is not None
    assert row.role == Role.admin


def test_set_role_validation(db, admin):
    ident = users_service.identity_of(admin)
    other, _ = users_service.register(db, "Other", "other@test.local", "secret1")

    with pytest.raises(InvalidRole):
        users_service.set_role(db, ident, other.id, "owner")
    with pytest.raises(NotFound):
        users_service.set_role(db, ident, 987654, "admin")

    users_service.set_role(db, ident, other.id, "admin")
    assert db.get(User, other.id).role == Role.admin


def test_delete_user_cascades_favorites(db, admin, make_course):
    ident = users_service.identity_of(admin)
    victim, _ = users_service.register(db, "Victim", "victim@test.local", "secret1")
    victim_id = victim.id
    for cid in (make_course(), make_course()):
        db.add(Favorite(user_id=victim_id, course_id=cid))
    db.commit()
    assert db.scalar(select(func.count(Favorite.id)).where(Favorite.user_id == victim_id)) == 2

    users_service.delete_user(db, ident, victim_id)

    assert db.get(User, victim_id) is None
    assert db.scalar(select(func.count(Favorite.id)).where(Favorite.user_id == victim_id)) == 0


def test_delete_missing_user_is_not_found(db, admin):
    with pytest.raises(NotFound):
        users_service.delete_user(db, users_service.identity_of(admin), 987654)


def test_users_api_is_admin_only(client, user_token):
    assert client.get("/api/users").status_code == 401
    assert client.get("/api/users", headers=auth_header(user_token)).status_code == 403


def test_admin_user_listing_and_detail(client, admin_token, make_course):
    h = auth_header(admin_token)
    body = register(client, email="student@test.local", name="Student")
    cid = make_course(title="Fav course")
    client.post(f"/api/favorites/{cid}", headers=auth_header(body["token"]))

    listed = client.get("/api/users", params={"search": "student"}, headers=h).json()
    assert listed["total"] == 1
    assert listed["users"][0]["favorites_count"] == 1

    admins = client.get("/api/users", params={"role": "admin"}, headers=h).json()
    assert [u["email"] for u in admins["users"]] == [ADMIN_EMAIL]

    detail = client.get(f"/api/users/{body['user']['id']}", headers=h).json()
    assert detail["user"]["email"] == "student@test.local"
    assert [c["title"] for c in detail["favorites"]] == ["Fav course"]


def test_admin_role_and_delete_endpoints(client, admin_token, cfg):
    h = auth_header(admin_token)
    from prephub.utils.auth import decode_access_token

    admin_id = decode_access_token(admin_token, cfg).id
    target = register(client, email="target@test.local")["user"]["id"]

    assert client.put(f"/api/users/{target}/role", json={"role": "wizard"}, headers=h).status_code == 400
    assert client.put(f"/api/users/{admin_id}/role", json={"role": "user"}, headers=h).status_code == 400
    assert client.put(f"/api/users/{target}/role", json={"role": "admin"}, headers=h).status_code == 200

    assert client.delete(f"/api/users/{admin_id}", headers=h).status_code == 400
    assert client.delete(f"/api/users/{target}", headers=h).status_code == 200
    assert client.delete(f"/api/users/{target}", headers=h).status_code == 404


def test_user_stats(client, admin_token):
    register(client, email="s1@test.local")
    register(client, email="s2@test.local")

    stats = client.get("/api/users/stats/overview", headers=auth_header(admin_token)).json()

    assert stats == {"total": 3, "admins": 1, "regularUsers": 2, "newThisMonth": 3}


def test_user_listing_tolerates_huge_paging_and_literal_wildcards(client, admin_token):
    h = auth_header(admin_token)
    register(client, email="under_score@test.local", name="Under")
    register(client, email="plain@test.local", name="Plain")

    resp = client.get("/api/users", params={"offset": "99999999999999999999"}, headers=h)
    assert resp.status_code == 200
    assert resp.json()["total"] == 3

    listed = client.get("/api/users", params={"search": "_"}, headers=h).json()
    assert [u["email"] for u in listed["users"]] == ["under_score@test.local"]
