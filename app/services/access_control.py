"""Role and ownership checks. Pure decisions; enforce() maps a denial onto a typed error."""

from collections.abc import Callable
from dataclasses import dataclass

from app.core.exceptions import AuthenticationError, AuthorizationError, RecordDeskError
from app.schemas.auth import CurrentUser

MSG_AUTH_REQUIRED = "Authentication required"
MSG_ADMIN_REQUIRED = "Admin access required"
MSG_ACCESS_DENIED = "Access denied"


@dataclass(frozen=True)
class AccessDecision:
    """Allow, or Deny with the reason and the HTTP status it surfaces as."""

    allowed: bool
    reason: str | None = None
    status_code: int = 200


ALLOW = AccessDecision(allowed=True)


def check_access(
    identity: CurrentUser | None,
    *,
    admin_only: bool = False,
    owner_check: Callable[[], bool] | None = None,
) -> AccessDecision:
    """
    Decide whether identity may proceed.

    - No identity: deny with 401.
    - admin_only and not an admin: deny with 401 (same status as the login gate).
    - owner_check given: admins pass; anyone else needs the predicate to be true, else 403.
      The predicate is only called for non-admins.
    """
    if identity is None:
        return AccessDecision(False, MSG_AUTH_REQUIRED, 401)
    if admin_only and not identity.is_admin:
        return AccessDecision(False, MSG_ADMIN_REQUIRED, 401)
    if owner_check is not None and not identity.is_admin and not owner_check():
        return AccessDecision(False, MSG_ACCESS_DENIED, 403)
    return ALLOW


def enforce(decision: AccessDecision) -> None:
    """Raise the error matching a denial; no-op when allowed."""
    if decision.allowed:
        return
    if decision.status_code == 401:
        raise AuthenticationError(decision.reason or MSG_AUTH_REQUIRED)
    if decision.status_code == 403:
        raise AuthorizationError(decision.reason or MSG_ACCESS_DENIED)
    error = RecordDeskError(decision.reason or MSG_ACCESS_DENIED)
    error.status_code = decision.status_code
    raise error
