"""Per-request values exchanged between the gate, the engine and its collaborators."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


def _role_set(roles: Iterable[str] | None) -> frozenset[str]:
    if not roles:
        return frozenset()
    return frozenset(str(r) for r in roles if r)


@dataclass(frozen=True)
class CallerContext:
    """
    Identity of the authenticated caller.

    Produced once per request by an identity accessor and passed explicitly
    into the decision engine. ``None`` in place of a context means there is no
    authenticated principal.
    """

    caller_id: str
    """Canonical user id of the caller."""

    roles: frozenset[str]
    """Role labels held by the caller."""

    @classmethod
    def of(cls, caller_id: str, roles: Iterable[str] | None) -> CallerContext:
        return cls(caller_id=str(caller_id), roles=_role_set(roles))

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict."""
        return {"caller_id": self.caller_id, "roles": sorted(self.roles)}


@dataclass(frozen=True)
class TargetUser:
    """User whose data is being accessed, resolved only on the Admin branch."""

    id: str
    roles: frozenset[str]

    @classmethod
    def of(cls, user_id: str, roles: Iterable[str] | None) -> TargetUser:
        return cls(id=str(user_id), roles=_role_set(roles))


@dataclass(frozen=True)
class UserLookupResult:
    """Outcome of resolving a user id. ``success`` is False when nothing was found."""

    success: bool
    user: Any = None

    @classmethod
    def found(cls, user: Any) -> UserLookupResult:
        return cls(success=True, user=user)

    @classmethod
    def not_found(cls) -> UserLookupResult:
        return cls(success=False, user=None)
