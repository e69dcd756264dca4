"""
Verify a signed bearer token and turn its claims into a CallerContext.

Only verification happens here; issuing tokens belongs to the identity provider.
Tokens are never logged.
"""

from __future__ import annotations

import logging
from typing import Any

import jwt

from app.authz.context import CallerContext
from app.security.config import JwtConfig

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Raised when a bearer token cannot be trusted. Do not log the token."""


def decode_token(token: str, config: JwtConfig, secret: str) -> dict[str, Any]:
    """
    Verify signature, expiry and (when configured) audience and issuer.

    Raises TokenError on any failure.
    """
    options = {
        "verify_signature": True,
        "verify_exp": True,
        "verify_nbf": True,
        "verify_aud": config.audience is not None,
        "verify_iss": config.issuer is not None,
    }
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=config.algorithms,
            audience=config.audience,
            issuer=config.issuer,
            options=options,
        )
    except jwt.ExpiredSignatureError as e:
        logger.info("Token expired")
        raise TokenError("Token expired") from e
    except jwt.InvalidAudienceError as e:
        logger.info("Token invalid audience")
        raise TokenError("Invalid token: audience") from e
    except jwt.InvalidIssuerError as e:
        logger.info("Token invalid issuer")
        raise TokenError("Invalid token: issuer") from e
    except jwt.InvalidTokenError as e:
        logger.info("Token invalid: %s", type(e).__name__)
        raise TokenError("Invalid token") from e


def caller_from_claims(payload: dict[str, Any], config: JwtConfig) -> CallerContext | None:
    """
    Build a CallerContext from verified claims.

    The first non-empty claim listed in ``user_id_claims`` wins. Only string and
    integer ids are accepted; any other type (bool, float, list) yields None, as
    does a missing id. The roles claim may be a list or a single string.
    """
    user_id = ""
    for claim in config.user_id_claims:
        value = payload.get(claim)
        if value is None or value == "":
            continue
        # bool is an int subclass; floats are never ids.
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            logger.info("Token user id claim %s has unsupported type %s", claim, type(value).__name__)
            return None
        user_id = str(value)
        break
    if not user_id:
        return None

    roles: list[str] = []
    raw_roles = payload.get(config.roles_claim)
    if isinstance(raw_roles, list):
        roles = [str(r) for r in raw_roles]
    elif isinstance(raw_roles, str):
        roles = [raw_roles]

    return CallerContext.of(user_id, roles)
