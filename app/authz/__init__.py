"""
Standalone user-access authorization core.

This package has no dependency on other app packages (app.db, app.security, etc.).
Build a PermissionGate from an identity accessor, an AuthorizationDecision and a
breach sink, then await ``validate_permissions(target_id)``.
"""

from .context import CallerContext, TargetUser, UserLookupResult
from .decision import AuthorizationDecision
from .errors import AuthorizationError, ErrorMessages, InvalidArgumentError, validate_not_null_or_empty
from .gate import PermissionGate, ServiceResult
from .ids import ids_equal
from .ports import BreachSink, IdentityAccessor, RoleProvider, UserLookup
from .roles import Role

__all__ = [
    "AuthorizationDecision",
    "AuthorizationError",
    "BreachSink",
    "CallerContext",
    "ErrorMessages",
    "IdentityAccessor",
    "InvalidArgumentError",
    "PermissionGate",
    "Role",
    "RoleProvider",
    "ServiceResult",
    "TargetUser",
    "UserLookup",
    "UserLookupResult",
    "ids_equal",
    "validate_not_null_or_empty",
]
