"""
Collaborators consumed by the authorization core.

Implementations live outside this package (see app.security). All lookups are
coroutines; none of them is expected to raise for an ordinary "not found".
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .context import CallerContext, UserLookupResult


@runtime_checkable
class IdentityAccessor(Protocol):
    async def get_current_caller_context(self) -> CallerContext | None:
        """Return the caller's context, or None when no authenticated principal exists."""
        ...


@runtime_checkable
class UserLookup(Protocol):
    async def find_user_by_id(self, user_id: str) -> UserLookupResult:
        """Resolve a user record by id; report ``success=False`` when not found."""
        ...


@runtime_checkable
class RoleProvider(Protocol):
    async def get_roles(self, user: Any) -> frozenset[str]:
        """Return the role labels of a user record returned by a UserLookup."""
        ...


@runtime_checkable
class BreachSink(Protocol):
    def notify_authorization_breach(self) -> None:
        """Fire-and-forget signal that a permission check was denied."""
        ...
