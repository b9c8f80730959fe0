# tests/test_auth_utils.py

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from app.core.exceptions import Unauthenticated
from app.middleware.rbac import get_current_user
from app.models.user import Role
from app.utils.auth_utils import create_access_token, decode_token
from app.utils.hash_utils import hash_password, verify_password


def test_token_round_trips_claims():
    token = create_access_token({"userId": "abc", "role": "admin"})

    claims = decode_token(token)

    assert claims["userId"] == "abc"
    assert claims["role"] == "admin"


def test_expired_token_is_rejected():
    token = create_access_token({"userId": "abc"}, expires_delta=timedelta(seconds=-1))

    with pytest.raises(jwt.ExpiredSignatureError):
        decode_token(token)


def test_token_signed_with_another_key_is_rejected():
    token = jwt.encode({"userId": "abc", "role": "user"}, "someone-else-entirely-0123456789abcdef", algorithm="HS256")

    with pytest.raises(jwt.InvalidSignatureError):
        decode_token(token)


def test_current_user_from_valid_token():
    user_id = "65a1f0c2e4b0a1b2c3d4e5f6"
    caller = get_current_user(create_access_token({"userId": user_id, "role": "user"}))

    assert caller.user_id == user_id
    assert caller.role is Role.USER
    assert not caller.is_admin


@pytest.mark.parametrize("claims", [
    {"role": "user"},
    {"userId": "not-an-object-id", "role": "user"},
    {"userId": "65a1f0c2e4b0a1b2c3d4e5f6", "role": "superuser"},
])
def test_current_user_rejects_incomplete_claims(claims):
    with pytest.raises(Unauthenticated):
        get_current_user(create_access_token(claims))


def test_password_hashing():
    hashed = hash_password("secret1")

    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)
