"""
Public entry point: turn an allow/deny decision into a ServiceResult.

Invalid input is the only condition reported as an exception. Every denial,
whatever its cause, produces the same forbidden result and one breach signal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .context import CallerContext
from .decision import AuthorizationDecision
from .errors import ErrorMessages, validate_not_null_or_empty
from .ports import BreachSink, IdentityAccessor

logger = logging.getLogger(__name__)


@dataclass
class ServiceResult:
    """Success flag plus ordered error messages."""

    success: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls) -> ServiceResult:
        return cls(success=True)

    @classmethod
    def failure(cls, *errors: str) -> ServiceResult:
        return cls(success=False, errors=list(errors))

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict."""
        return {"success": self.success, "errors": list(self.errors)}


class PermissionGate:
    """
    Validates whether the current caller may act on a target user's data.

    One gate is built per request around that request's identity accessor;
    the decision engine and breach sink may be shared.
    """

    def __init__(
        self,
        identity: IdentityAccessor,
        decision: AuthorizationDecision,
        breach_sink: BreachSink,
    ) -> None:
        self._identity = identity
        self._decision = decision
        self._breach_sink = breach_sink

    async def validate_permissions(self, target_id: str | None) -> ServiceResult:
        """
        Check access to ``target_id``.

        Raises InvalidArgumentError when ``target_id`` is None or empty, before
        the caller identity is resolved. Returns a failure result carrying
        ``ErrorMessages.FORBIDDEN`` when access is denied.
        """
        validate_not_null_or_empty(target_id, "target_id")

        caller = await self._current_caller()
        if await self._decision.decide(caller, target_id):
            return ServiceResult.ok()

        self._notify_breach()
        return ServiceResult.failure(ErrorMessages.FORBIDDEN)

    async def _current_caller(self) -> CallerContext | None:
        try:
            return await self._identity.get_current_caller_context()
        except Exception as e:
            logger.warning("Identity accessor failed; treating caller as anonymous error=%s", type(e).__name__)
            return None

    def _notify_breach(self) -> None:
        try:
            self._breach_sink.notify_authorization_breach()
        except Exception:
            logger.exception("Breach sink failed")
