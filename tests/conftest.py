from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from prephub.config import Settings
from prephub.database import Store
from prephub.init_db import ensure_admin
from prephub.main import create_app
from prephub.models import Course, CourseStatus

ADMIN_EMAIL = "admin@test.local"
ADMIN_PASSWORD = "admin123"


@pytest.fixture()
def cfg(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_PATH=str(tmp_path / "data" / "test.sqlite"),
        JWT_SECRET="test-secret",
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        LOG_DIR=str(tmp_path / "logs"),
    )


@pytest.fixture()
def store(cfg: Settings) -> Iterator[Store]:
    s = Store(cfg.database_url).open()
    ensure_admin(s, cfg)
    yield s
    s.close()


@pytest.fixture()
def db(store: Store) -> Iterator[Session]:
    session = store.new_session()
    yield session
    session.close()


@pytest.fixture()
def client(cfg: Settings, store: Store) -> Iterator[TestClient]:
    app = create_app(cfg, store)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_course(store: Store) -> Callable[..., int]:
    base = datetime(2024, 1, 1)
    counter = {"n": 0}

    def _make(**kw) -> int:
        counter["n"] += 1
        data = {
            "title": f"Course {counter['n']}",
            "price": 100,
            "status": CourseStatus.active,
            # 每筆晚一分鐘，newest 排序才可預測
            "created_at": base + timedelta(minutes=counter["n"]),
        }
        data.update(kw)
        with store.session() as s:
            course = Course(**data)
            s.add(course)
            s.flush()
            return course.id

    return _make


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(client: TestClient, email: str = "user@test.local", password: str = "secret1", name: str = "User"):
    resp = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture()
def admin_token(client: TestClient) -> str:
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


@pytest.fixture()
def user_token(client: TestClient) -> str:
    return register(client)["token"]
