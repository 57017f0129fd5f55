from __future__ import annotations

import os
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select, update

# Ensure env is set before app import
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["AUTH_MODE"] = "jwt"
os.environ.setdefault("JWT_SECRET", "test_jwt_secret_32_chars_minimum_len")
os.environ.setdefault("ACCESS_TOKEN_TTL_SECONDS", "900")
os.environ["ENV"] = "local"
os.environ["DEV_API_KEY"] = "test-dev-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from servicehours.db import SessionLocal  # noqa: E402
from servicehours.init_db import create_database  # noqa: E402
from servicehours.main import app  # noqa: E402
from servicehours.models import Base, Profile  # noqa: E402
from servicehours.models.profile import UserRole  # noqa: E402

create_database()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def clean_db():
    # Ensure a clean slate for each test
    db = SessionLocal()
    try:
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
    finally:
        db.close()
    yield


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(client: TestClient, email: str, password: str = "StrongPass123", name: str = "Test User"):
    return client.post(
        "/v1/auth/register",
        json={"email": email, "password": password, "name": name},
    )


@pytest.fixture
def make_user(client: TestClient, db_session) -> Callable[..., dict]:
    """Register a user, set their role in the database and return token + ids."""

    def _make(email: str, role: UserRole = UserRole.MEMBER, name: str = "Test User") -> dict:
        resp = register(client, email, name=name)
        assert resp.status_code == 200, resp.text
        body = resp.json()
        if role != UserRole.MEMBER:
            db_session.execute(
                update(Profile).where(Profile.email == email).values(role=role)
            )
            db_session.commit()
        return {
            "token": body["access_token"],
            "user_id": body["user_id"],
            "headers": auth_headers(body["access_token"]),
        }

    return _make


@pytest.fixture
def member(make_user) -> dict:
    return make_user("member@example.com", name="Mia Member")


@pytest.fixture
def officer(make_user) -> dict:
    return make_user("officer@example.com", UserRole.OFFICER, name="Oscar Officer")


@pytest.fixture
def admin(make_user) -> dict:
    return make_user("admin@example.com", UserRole.ADMIN, name="Ada Admin")


@pytest.fixture
def create_event(client: TestClient, admin: dict) -> Callable[..., dict]:
    def _create(**overrides) -> dict:
        payload = {
            "title": "Park Cleanup",
            "date_time": (datetime.now(timezone.utc) + timedelta(days=3)).isoformat(),
            "location": "Riverside Park",
            "description": "Bring gloves",
            "hours_value": 3,
        }
        payload.update(overrides)
        resp = client.post("/v1/events", json=payload, headers=admin["headers"])
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def hours_of(db_session) -> Callable[[str], int]:
    def _hours(user_id: str) -> int:
        db_session.expire_all()
        return db_session.scalar(
            select(Profile.total_hours).where(Profile.user_id == uuid.UUID(user_id))
        )

    return _hours
