"""Unit tests for JWT handler and the get_current_user_id dependency."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import HTTPException
from jose import jwt

from config.settings import settings
from src.cp_common.errors import InvalidCredentialsError
from src.cp_gateway.auth.dependencies import get_current_user_id
from src.cp_gateway.auth.jwt_handler import create_access_token, decode_access_token


def _encode(payload: dict[str, object], secret: str | None = None) -> str:
    return str(jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM))


def test_access_token_contains_correct_claims() -> None:
    payload = jwt.get_unverified_claims(create_access_token("user-123"))
    assert payload["sub"] == "user-123"
    assert payload["type"] == "access"


def test_decode_valid_access_token() -> None:
    assert decode_access_token(create_access_token("user-abc"))["sub"] == "user-abc"


def test_wrong_type_rejected() -> None:
    token = _encode({"sub": "u", "type": "refresh", "exp": datetime.now(UTC) + timedelta(minutes=5)})
    with pytest.raises(InvalidCredentialsError):
        decode_access_token(token)


def test_expired_token_rejected() -> None:
    token = _encode({"sub": "u", "type": "access", "exp": datetime.now(UTC) - timedelta(minutes=1)})
    with pytest.raises(InvalidCredentialsError):
        decode_access_token(token)


def test_wrong_secret_rejected() -> None:
    token = _encode(
        {"sub": "u", "type": "access", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        secret="another-secret",
    )
    with pytest.raises(InvalidCredentialsError):
        decode_access_token(token)


async def test_dependency_returns_subject() -> None:
    assert await get_current_user_id(create_access_token("driver-9")) == "driver-9"


async def test_dependency_rejects_missing_subject() -> None:
    token = _encode({"type": "access", "exp": datetime.now(UTC) + timedelta(minutes=5)})
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user_id(token)
    assert exc_info.value.status_code == 401
