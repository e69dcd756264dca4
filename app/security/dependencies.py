from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from app.authz import AuthorizationDecision, InvalidArgumentError, PermissionGate
from app.authz.ports import BreachSink, RoleProvider, UserLookup
from app.db.session import SessionLocal
from app.security.audit import LoggingBreachSink
from app.security.auth import RequestIdentityAccessor
from app.security.config import AuthorizationConfig
from app.security.lookup import SqlRoleProvider, SqlUserLookup

_user_lookup = SqlUserLookup(SessionLocal)
_role_provider = SqlRoleProvider()
_breach_sink = LoggingBreachSink()


def get_authorization_config(request: Request) -> AuthorizationConfig:
    config = getattr(request.app.state, "authorization_config", None)
    if config is None:
        raise RuntimeError("Authorization config not loaded. Did app startup run?")
    return config


def get_user_lookup() -> UserLookup:
    return _user_lookup


def get_role_provider() -> RoleProvider:
    return _role_provider


def get_breach_sink() -> BreachSink:
    return _breach_sink


def get_permission_gate(
    request: Request,
    config: AuthorizationConfig = Depends(get_authorization_config),
    user_lookup: UserLookup = Depends(get_user_lookup),
    role_provider: RoleProvider = Depends(get_role_provider),
    breach_sink: BreachSink = Depends(get_breach_sink),
) -> PermissionGate:
    """
    Build the gate for this request.

    The identity accessor is bound to the request, so the caller context is
    produced here once and handed to the decision engine explicitly.
    """

    identity = RequestIdentityAccessor(request, config, user_lookup, role_provider)
    decision = AuthorizationDecision(user_lookup, role_provider)
    return PermissionGate(identity, decision, breach_sink)


async def require_user_access(user_id: str, gate: PermissionGate = Depends(get_permission_gate)) -> None:
    """
    Route dependency for endpoints with a `{user_id}` path parameter.

    400 when the id is empty, 403 (same body for every cause) when denied.
    """

    try:
        result = await gate.validate_permissions(user_id)
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if not result.success:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=result.errors[0])
