"""
Tests for password hashing, tokens and actor resolution.
"""

from datetime import timedelta

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from innohub.core.auth import (
    actor_from_token,
    get_current_actor,
    get_optional_actor,
    require_roles,
)
from innohub.core.exceptions import ForbiddenError, UnauthenticatedError
from innohub.core.security import (
    _create_token,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_password_hash_roundtrip():
    hashed = hash_password("s3cret!")

    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_access_token_claims():
    token = create_access_token("42", {"email": "a@test.com", "role": "ADMIN"})
    payload = decode_token(token)

    assert payload["sub"] == "42"
    assert payload["type"] == "access"
    assert payload["role"] == "ADMIN"


def test_decode_token_rejects_garbage():
    assert decode_token("not-a-token") is None


def test_decode_token_rejects_expired():
    token = _create_token("42", "access", timedelta(seconds=-1))
    assert decode_token(token) is None


def test_actor_from_token():
    token = create_access_token("42", {"email": "a@test.com", "role": "REVIEWER", "name": "Ann"})

    actor = actor_from_token(token)

    assert actor.id == 42
    assert actor.role == "REVIEWER"
    assert actor.name == "Ann"


def test_actor_from_refresh_token_rejected():
    with pytest.raises(UnauthenticatedError):
        actor_from_token(create_refresh_token("42"))


def test_actor_from_token_bad_subject():
    with pytest.raises(UnauthenticatedError):
        actor_from_token(create_access_token("not-a-number"))


@pytest.mark.asyncio
async def test_get_current_actor_requires_credentials():
    with pytest.raises(UnauthenticatedError):
        await get_current_actor(None)


@pytest.mark.asyncio
async def test_get_optional_actor():
    assert await get_optional_actor(None) is None

    actor = await get_optional_actor(bearer(create_access_token("7", {"role": "USER"})))
    assert actor.id == 7

    with pytest.raises(UnauthenticatedError):
        await get_optional_actor(bearer("invalid"))


@pytest.mark.asyncio
async def test_require_roles(admin, owner):
    dependency = require_roles("ADMIN")

    assert await dependency(admin) is admin

    with pytest.raises(ForbiddenError):
        await dependency(owner)
