"""Errors raised at the gate boundary and the fixed messages it reports."""

from __future__ import annotations


class ErrorMessages:
    """User-visible error strings. A denial always carries the same message."""

    FORBIDDEN = "Forbidden: You do not have permission to perform this action."
    NULL_OR_EMPTY = "{name} cannot be null or empty."


class AuthorizationError(Exception):
    """Base class for errors raised by the authorization core."""


class InvalidArgumentError(AuthorizationError, ValueError):
    """Raised when a required argument is missing or empty."""

    def __init__(self, name: str) -> None:
        super().__init__(ErrorMessages.NULL_OR_EMPTY.format(name=name))
        self.name = name


def validate_not_null_or_empty(value: str | None, name: str) -> str:
    """Return ``value`` unchanged, or raise InvalidArgumentError if it is None or ``""``."""
    if value is None or value == "":
        raise InvalidArgumentError(name)
    return value
