"""Tests for bearer extraction and the request-bound identity accessor."""

import time
from types import SimpleNamespace
from unittest.mock import AsyncMock

import jwt
import pytest
from fastapi import Request

from app.authz.context import UserLookupResult
from app.security.auth import RequestIdentityAccessor, extract_bearer_token
from app.security.config import AuthConfig, AuthorizationConfig, AuthorizationConfigModel
from app.security.lookup import SqlRoleProvider

SECRET = "x" * 32


def _request(headers: dict[str, str] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/users/u1",
        "query_string": b"",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }
    return Request(scope)


def _config(provider: str = "dummy", secret: str | None = None) -> AuthorizationConfig:
    return AuthorizationConfig(AuthorizationConfigModel(auth=AuthConfig(provider=provider)), jwt_secret=secret)


def _row(user_id: str, *roles: str, is_active: bool = True):
    return SimpleNamespace(id=user_id, is_active=is_active, roles=[SimpleNamespace(name=r) for r in roles])


def _lookup(*rows) -> AsyncMock:
    by_id = {r.id: r for r in rows}
    lookup = AsyncMock()
    lookup.find_user_by_id.side_effect = lambda user_id: (
        UserLookupResult.found(by_id[user_id]) if user_id in by_id else UserLookupResult.not_found()
    )
    return lookup


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Basic dTE6cHc="},
        {"Authorization": "Bearer    "},
    ],
)
def test_extract_bearer_token_missing_or_malformed(headers):
    assert extract_bearer_token(_request(headers), _config()) is None


def test_extract_bearer_token():
    assert extract_bearer_token(_request({"Authorization": "Bearer u1"}), _config()) == "u1"


def test_extract_bearer_token_custom_header():
    config = AuthorizationConfig(
        AuthorizationConfigModel(auth=AuthConfig(authorization_header="X-Auth", bearer_prefix="Token"))
    )
    assert extract_bearer_token(_request({"X-Auth": "Token abc"}), config) == "abc"


@pytest.mark.asyncio
async def test_dummy_provider_resolves_caller_from_store():
    lookup = _lookup(_row("a1", "Admin"))
    accessor = RequestIdentityAccessor(_request({"Authorization": "Bearer a1"}), _config(), lookup, SqlRoleProvider())

    ctx = await accessor.get_current_caller_context()

    assert ctx.caller_id == "a1"
    assert ctx.roles == frozenset({"Admin"})
    lookup.find_user_by_id.assert_awaited_once_with("a1")


@pytest.mark.asyncio
async def test_dummy_provider_unknown_or_inactive_caller_is_none():
    lookup = _lookup(_row("u9", "User", is_active=False))
    for token in ("u9", "ghost"):
        accessor = RequestIdentityAccessor(
            _request({"Authorization": f"Bearer {token}"}), _config(), lookup, SqlRoleProvider()
        )
        assert await accessor.get_current_caller_context() is None


@pytest.mark.asyncio
async def test_no_header_skips_lookup():
    lookup = _lookup()
    accessor = RequestIdentityAccessor(_request(), _config(), lookup, SqlRoleProvider())

    assert await accessor.get_current_caller_context() is None
    lookup.find_user_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_jwt_provider_reads_claims_without_store():
    token = jwt.encode({"sub": "s1", "roles": ["SuperAdmin"], "exp": int(time.time()) + 300}, SECRET, algorithm="HS256")
    lookup = _lookup()
    accessor = RequestIdentityAccessor(
        _request({"Authorization": f"Bearer {token}"}), _config("jwt", SECRET), lookup, SqlRoleProvider()
    )

    ctx = await accessor.get_current_caller_context()

    assert ctx.caller_id == "s1"
    assert ctx.roles == frozenset({"SuperAdmin"})
    lookup.find_user_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_jwt_provider_invalid_token_is_none():
    token = jwt.encode({"sub": "s1", "roles": ["SuperAdmin"]}, "y" * 32, algorithm="HS256")
    accessor = RequestIdentityAccessor(
        _request({"Authorization": f"Bearer {token}"}), _config("jwt", SECRET), _lookup(), SqlRoleProvider()
    )
    assert await accessor.get_current_caller_context() is None


@pytest.mark.asyncio
async def test_jwt_provider_without_secret_is_none():
    token = jwt.encode({"sub": "s1"}, SECRET, algorithm="HS256")
    accessor = RequestIdentityAccessor(
        _request({"Authorization": f"Bearer {token}"}), _config("jwt", None), _lookup(), SqlRoleProvider()
    )
    assert await accessor.get_current_caller_context() is None
