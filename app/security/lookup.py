"""
SQLAlchemy-backed user lookup and role provider.

Blocking ORM work runs on a worker thread with its own session, so the
coroutines can be awaited from the request's event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from app.authz.context import UserLookupResult
from app.models.security import User

logger = logging.getLogger(__name__)


class SqlUserLookup:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    async def find_user_by_id(self, user_id: str) -> UserLookupResult:
        return await asyncio.to_thread(self._find, user_id)

    def _find(self, user_id: str) -> UserLookupResult:
        try:
            with self._session_factory() as db:
                user = db.execute(
                    select(User).where(User.id == user_id).options(selectinload(User.roles))
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.warning("User lookup failed user_id=%s error=%s", user_id, type(e).__name__)
            return UserLookupResult.not_found()

        if user is None:
            logger.debug("User not found user_id=%s", user_id)
            return UserLookupResult.not_found()
        return UserLookupResult.found(user)


class SqlRoleProvider:
    """
    Role names of a ``User`` row loaded by SqlUserLookup.

    Roles are eagerly loaded with the user, so no further query is issued.
    """

    async def get_roles(self, user: Any) -> frozenset[str]:
        roles = getattr(user, "roles", None) or []
        return frozenset(r.name for r in roles)
