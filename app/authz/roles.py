"""Fixed set of role labels understood by the decision engine."""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """
    Enumerated roles.

    Members are ``str`` subclasses, so ``Role.ADMIN in {"Admin"}`` holds and a
    plain role set coming from a token or a database can be tested directly.
    Precedence (SuperAdmin > Admin > User) is encoded in the decision logic only.
    """

    USER = "User"
    ADMIN = "Admin"
    SUPER_ADMIN = "SuperAdmin"

    def __str__(self) -> str:
        return self.value
