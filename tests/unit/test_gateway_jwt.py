"""Unit tests for JWT handler and the participant dependency."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import HTTPException
from jose import jwt

from config.settings import settings
from src.mr_common.errors import InvalidCredentialsError
from src.mr_gateway.auth.dependencies import get_current_participant
from src.mr_gateway.auth.jwt_handler import (
    MAX_PARTICIPANT_ID_LENGTH,
    create_access_token,
    decode_access_token,
)


def test_access_token_contains_correct_claims() -> None:
    token = create_access_token("alice")
    payload = jwt.get_unverified_claims(token)
    assert payload["sub"] == "alice"
    assert payload["type"] == "access"


def test_decode_valid_access_token() -> None:
    assert decode_access_token(create_access_token("alice"))["sub"] == "alice"


def test_wrong_secret_raises() -> None:
    token = jwt.encode({"sub": "alice", "type": "access"}, "other-secret", algorithm="HS256")
    with pytest.raises(InvalidCredentialsError):
        decode_access_token(token)


def test_expired_token_raises() -> None:
    past = datetime.now(UTC) - timedelta(minutes=5)
    token = jwt.encode(
        {"sub": "alice", "type": "access", "exp": past}, settings.JWT_SECRET, algorithm="HS256"
    )
    with pytest.raises(InvalidCredentialsError):
        decode_access_token(token)


def test_non_access_token_raises() -> None:
    token = jwt.encode({"sub": "alice", "type": "refresh"}, settings.JWT_SECRET, algorithm="HS256")
    with pytest.raises(InvalidCredentialsError):
        decode_access_token(token)


def test_missing_subject_raises() -> None:
    token = jwt.encode({"type": "access"}, settings.JWT_SECRET, algorithm="HS256")
    with pytest.raises(InvalidCredentialsError):
        decode_access_token(token)


def test_subject_at_column_width_is_accepted() -> None:
    subject = "a" * MAX_PARTICIPANT_ID_LENGTH
    assert decode_access_token(create_access_token(subject))["sub"] == subject


def test_overlong_subject_raises() -> None:
    token = create_access_token("a" * (MAX_PARTICIPANT_ID_LENGTH + 1))
    with pytest.raises(InvalidCredentialsError):
        decode_access_token(token)


async def test_dependency_rejects_overlong_subject() -> None:
    token = create_access_token("b" * 1000)
    with pytest.raises(HTTPException) as exc_info:
        await get_current_participant(token)
    assert exc_info.value.status_code == 401


async def test_dependency_returns_participant() -> None:
    assert await get_current_participant(create_access_token("bob")) == "bob"


async def test_dependency_rejects_garbage() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await get_current_participant("not-a-jwt")
    assert exc_info.value.status_code == 401
