"""
Role-based decision engine for acting on another user's data.

Policy, evaluated top to bottom, every branch terminal:

1. missing target id                       -> deny
2. no caller context                       -> deny
3. caller without roles                    -> deny
4. caller is SuperAdmin                    -> allow (target never looked up)
5. caller is Admin                         -> look the target up, then
     lookup failed / errored / cancelled   -> deny
     target is SuperAdmin                  -> deny
     target is another Admin               -> deny
     anything else (incl. self)            -> allow
6. any other caller                        -> allow only self-access

Collaborator failures are logged and folded into "deny"; ``decide`` never
raises. The engine holds no per-call state and can be shared across requests.
"""

from __future__ import annotations

import asyncio
import logging

from .context import CallerContext, TargetUser
from .ids import ids_equal
from .ports import RoleProvider, UserLookup
from .roles import Role

logger = logging.getLogger(__name__)


class AuthorizationDecision:
    """
    Stateless allow/deny engine.

    Usage:
        decision = AuthorizationDecision(user_lookup, role_provider)
        allowed = await decision.decide(caller, "user-42")
    """

    def __init__(self, user_lookup: UserLookup, role_provider: RoleProvider) -> None:
        if user_lookup is None:
            raise TypeError("user_lookup is required")
        if role_provider is None:
            raise TypeError("role_provider is required")
        self._user_lookup = user_lookup
        self._role_provider = role_provider

    # ---- Main decision API ----------------------------------------------------------

    async def decide(self, caller: CallerContext | None, target_id: str | None) -> bool:
        if not target_id:
            logger.debug("AUTHZ: denied, no target id")
            return False

        if caller is None:
            logger.debug("AUTHZ: denied, no caller context target=%s", target_id)
            return False

        if not caller.roles:
            logger.debug("AUTHZ: denied, caller has no roles caller=%s target=%s", caller.caller_id, target_id)
            return False

        # Highest privilege first: a caller holding both SuperAdmin and Admin is a SuperAdmin.
        if Role.SUPER_ADMIN in caller.roles:
            logger.debug("AUTHZ: allowed super admin caller=%s target=%s", caller.caller_id, target_id)
            return True

        if Role.ADMIN in caller.roles:
            return await self._decide_for_admin(caller, target_id)

        allowed = _is_self_access(target_id, caller)
        logger.debug(
            "AUTHZ: %s self-access check caller=%s target=%s",
            "allowed" if allowed else "denied",
            caller.caller_id,
            target_id,
        )
        return allowed

    # ---- Admin branch ---------------------------------------------------------------

    async def _decide_for_admin(self, caller: CallerContext, target_id: str) -> bool:
        target = await self._resolve_target(target_id)
        if target is None:
            logger.debug("AUTHZ: denied admin, target unresolved caller=%s target=%s", caller.caller_id, target_id)
            return False

        if Role.SUPER_ADMIN in target.roles:
            logger.debug("AUTHZ: denied admin on super admin caller=%s target=%s", caller.caller_id, target_id)
            return False

        if Role.ADMIN in target.roles and not _is_self_access(target_id, caller):
            logger.debug("AUTHZ: denied admin on other admin caller=%s target=%s", caller.caller_id, target_id)
            return False

        logger.debug("AUTHZ: allowed admin caller=%s target=%s", caller.caller_id, target_id)
        return True

    async def _resolve_target(self, target_id: str) -> TargetUser | None:
        """Look the target up and fetch its roles; any failure yields None."""
        try:
            result = await self._user_lookup.find_user_by_id(target_id)
            if result is None or not result.success or result.user is None:
                return None
            roles = await self._role_provider.get_roles(result.user)
        except asyncio.CancelledError:
            logger.info("AUTHZ: target lookup cancelled target=%s", target_id)
            return None
        except Exception as e:
            logger.warning("AUTHZ: target lookup failed target=%s error=%s", target_id, type(e).__name__)
            return None
        return TargetUser.of(target_id, roles)


def _is_self_access(target_id: str, caller: CallerContext) -> bool:
    return ids_equal(target_id, caller.caller_id)
