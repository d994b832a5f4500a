from datetime import timedelta

import pytest
from starlette.requests import Request

from tracker.business.services import TokenFromRequest, create_access_token, decode_token
from tracker.errors import AuthenticationException


def make_request(headers=None, cookie=None):
    raw_headers = [(key.lower().encode(), value.encode()) for key, value in (headers or {}).items()]
    if cookie:
        raw_headers.append((b"cookie", cookie.encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw_headers})


def test_token_round_trip_keeps_subject_and_user():
    token = create_access_token("user-7", {"name": "Ada", "email": "ada@example.com"})

    token_data = decode_token(token)

    assert token_data["sub"] == "user-7"
    assert token_data["user"]["name"] == "Ada"
    assert "jti" in token_data


def test_expired_token_is_rejected():
    token = create_access_token("user-7", expiry=timedelta(seconds=-10))

    assert decode_token(token) is None


def test_tampered_token_is_rejected():
    token = create_access_token("user-7")

    assert decode_token(token[:-2] + "xx") is None


@pytest.mark.asyncio
async def test_token_read_from_bearer_header():
    token = create_access_token("user-7")

    token_data = await TokenFromRequest()(make_request({"Authorization": f"Bearer {token}"}))

    assert token_data["sub"] == "user-7"


@pytest.mark.asyncio
async def test_token_read_from_cookie():
    token = create_access_token("user-8")

    token_data = await TokenFromRequest()(make_request(cookie=f"session_token={token}"))

    assert token_data["sub"] == "user-8"


@pytest.mark.asyncio
async def test_missing_token_required():
    with pytest.raises(AuthenticationException):
        await TokenFromRequest()(make_request())


@pytest.mark.asyncio
async def test_missing_token_optional():
    assert await TokenFromRequest(required=False)(make_request()) is None


@pytest.mark.asyncio
async def test_invalid_token_optional_is_guest():
    request = make_request({"Authorization": "Bearer garbage"})

    assert await TokenFromRequest(required=False)(request) is None
