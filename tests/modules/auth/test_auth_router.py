"""
Tests for the authentication endpoints.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from innohub.core.database import get_db
from innohub.core.exceptions import register_exception_handlers
from innohub.core.security import create_access_token, decode_token, hash_password
from innohub.modules.auth import router as auth_router
from innohub.modules.users.models import User, UserRole
from innohub.modules.users.repository import UserRepository


def make_user(user_id=10, email="owner@test.com", password="s3cret!", is_active=True):
    user = MagicMock(spec=User)
    user.id = user_id
    user.email = email
    user.name = "Owner"
    user.display_name = "Owner"
    user.avatar_url = None
    user.role = UserRole.USER
    user.is_active = is_active
    user.password_hash = hash_password(password)
    user.created_at = datetime(2026, 1, 1, tzinfo=UTC)
    return user


@pytest.fixture
def users():
    with (
        patch.multiple(
            UserRepository,
            email_exists=AsyncMock(return_value=False),
            get_by_email=AsyncMock(return_value=None),
            get_by_id=AsyncMock(return_value=None),
        ),
        patch.object(UserRepository, "create", AsyncMock(return_value=make_user())),
    ):
        yield UserRepository


@pytest.fixture
def client(mock_db):
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(auth_router, prefix="/auth")

    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


# ============================================
# Register
# ============================================


def test_register(client, users):
    response = client.post(
        "/auth/register",
        json={"email": "Owner@Test.com", "password": "s3cret!", "name": "Owner"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "owner@test.com"
    assert body["role"] == "USER"
    kwargs = users.create.await_args.kwargs
    assert kwargs["email"] == "owner@test.com"
    assert kwargs["role"] == UserRole.USER
    assert kwargs["password_hash"] != "s3cret!"


def test_register_existing_email(client, users):
    users.email_exists.return_value = True

    response = client.post(
        "/auth/register", json={"email": "owner@test.com", "password": "s3cret!"}
    )

    assert response.status_code == 409
    assert response.json()["errorCode"] == "EMAIL_ALREADY_REGISTERED"
    users.create.assert_not_awaited()


def test_register_short_password(client, users):
    response = client.post("/auth/register", json={"email": "owner@test.com", "password": "123"})

    assert response.status_code == 422
    assert response.json()["errorCode"] == "VALIDATION_ERROR"


# ============================================
# Login
# ============================================


def test_login(client, users):
    users.get_by_email.return_value = make_user()

    response = client.post(
        "/auth/login", json={"email": "owner@test.com", "password": "s3cret!"}
    )

    assert response.status_code == 200
    body = response.json()
    claims = decode_token(body["access_token"])
    assert claims["sub"] == "10"
    assert claims["role"] == "USER"
    assert decode_token(body["refresh_token"])["type"] == "refresh"


def test_login_wrong_password(client, users):
    users.get_by_email.return_value = make_user()

    response = client.post("/auth/login", json={"email": "owner@test.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["errorCode"] == "UNAUTHENTICATED"


def test_login_unknown_email(client, users):
    response = client.post(
        "/auth/login", json={"email": "ghost@test.com", "password": "s3cret!"}
    )

    assert response.status_code == 401


def test_login_inactive_account(client, users):
    users.get_by_email.return_value = make_user(is_active=False)

    response = client.post(
        "/auth/login", json={"email": "owner@test.com", "password": "s3cret!"}
    )

    assert response.status_code == 403


# ============================================
# Me
# ============================================


def test_me(client, users):
    users.get_by_id.return_value = make_user()
    token = create_access_token("10", {"email": "owner@test.com", "role": "USER"})

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["id"] == 10
    users.get_by_id.assert_awaited_once()


def test_me_requires_token(client, users):
    response = client.get("/auth/me")

    assert response.status_code == 401
