from __future__ import annotations

import logging

from fastapi import Request

from app.authz.context import CallerContext
from app.authz.ports import RoleProvider, UserLookup
from app.security.config import AuthorizationConfig
from app.security.tokens import TokenError, caller_from_claims, decode_token

logger = logging.getLogger(__name__)


def extract_bearer_token(request: Request, config: AuthorizationConfig) -> str | None:
    """
    Return the token from `Authorization: Bearer <token>`, or None.

    A missing header, a wrong scheme and an empty token all yield None: the
    caller is then treated as unauthenticated and every check denies.
    """

    header_name = config.auth.authorization_header
    bearer_prefix = config.auth.bearer_prefix

    raw = request.headers.get(header_name)
    if not raw:
        logger.info("Missing Authorization header path=%s method=%s", request.url.path, request.method)
        return None

    prefix = f"{bearer_prefix} "
    if not raw.startswith(prefix):
        logger.warning("Invalid Authorization header format path=%s method=%s", request.url.path, request.method)
        return None

    token = raw[len(prefix) :].strip()
    if not token:
        logger.warning("Empty bearer token path=%s method=%s", request.url.path, request.method)
        return None

    return token


class RequestIdentityAccessor:
    """
    Identity accessor bound to one incoming request.

    Providers:
    - ``jwt``: verify the bearer token and read the id and roles from its claims.
    - ``dummy``: the bearer token *is* the caller's user id; roles come from the
      user store. Unknown or inactive users have no context.
    """

    def __init__(
        self,
        request: Request,
        config: AuthorizationConfig,
        user_lookup: UserLookup,
        role_provider: RoleProvider,
    ) -> None:
        self._request = request
        self._config = config
        self._user_lookup = user_lookup
        self._role_provider = role_provider

    async def get_current_caller_context(self) -> CallerContext | None:
        token = extract_bearer_token(self._request, self._config)
        if token is None:
            return None

        if self._config.provider == "jwt":
            return self._caller_from_jwt(token)
        return await self._caller_from_store(token)

    def _caller_from_jwt(self, token: str) -> CallerContext | None:
        secret = self._config.jwt_secret
        if not secret:
            logger.error("jwt provider configured but APP_JWT_SECRET is not set")
            return None
        jwt_config = self._config.auth.jwt
        try:
            payload = decode_token(token, jwt_config, secret)
        except TokenError:
            return None
        return caller_from_claims(payload, jwt_config)

    async def _caller_from_store(self, user_id: str) -> CallerContext | None:
        result = await self._user_lookup.find_user_by_id(user_id)
        if not result.success or result.user is None:
            logger.info("Unknown caller id path=%s", self._request.url.path)
            return None
        if not getattr(result.user, "is_active", True):
            logger.info("Inactive caller path=%s", self._request.url.path)
            return None
        roles = await self._role_provider.get_roles(result.user)
        return CallerContext.of(result.user.id, roles)
