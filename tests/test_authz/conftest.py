"""
In-memory collaborators for the authorization core.

Users are plain namespaces with ``id`` and ``roles``; the role provider
returns ``user.roles`` and records every call.
"""
from __future__ import annotations

from types import SimpleNamespace

import pytest

from app.authz.context import CallerContext, UserLookupResult


class FakeUserLookup:
    def __init__(self, users, error: BaseException | None = None) -> None:
        self.users = {u.id: u for u in users}
        self.error = error
        self.calls: list[str] = []

    async def find_user_by_id(self, user_id: str) -> UserLookupResult:
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        user = self.users.get(user_id)
        if user is None:
            return UserLookupResult.not_found()
        return UserLookupResult.found(user)


class FakeRoleProvider:
    def __init__(self) -> None:
        self.calls: list[object] = []

    async def get_roles(self, user) -> frozenset[str]:
        self.calls.append(user)
        return frozenset(user.roles)


class FakeIdentity:
    def __init__(self, caller: CallerContext | None) -> None:
        self.caller = caller
        self.calls = 0

    async def get_current_caller_context(self) -> CallerContext | None:
        self.calls += 1
        return self.caller


def make_user(user_id: str, *roles: str) -> SimpleNamespace:
    return SimpleNamespace(id=user_id, roles=frozenset(roles))


@pytest.fixture
def make_lookup():
    def _make(*users, error: BaseException | None = None) -> FakeUserLookup:
        return FakeUserLookup(users, error=error)

    return _make


@pytest.fixture
def role_provider() -> FakeRoleProvider:
    return FakeRoleProvider()


@pytest.fixture
def make_identity():
    def _make(caller_id: str | None = None, *roles: str) -> FakeIdentity:
        caller = CallerContext.of(caller_id, roles) if caller_id is not None else None
        return FakeIdentity(caller)

    return _make


@pytest.fixture
def users():
    """Target users by id: u1/u2 plain, a1/a2 admins, s1 super admin, x1 admin + super admin."""
    return {
        "u1": make_user("u1", "User"),
        "u2": make_user("u2", "User"),
        "a1": make_user("a1", "Admin"),
        "a2": make_user("a2", "Admin"),
        "s1": make_user("s1", "SuperAdmin"),
        "x1": make_user("x1", "Admin", "SuperAdmin"),
        "n1": make_user("n1"),
    }
