"""API dependencies for group / role guarded routes.

The session layer is expected to place the authenticated user record on
`request.state.user` before routing. These dependencies only read it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from fastapi import Depends, HTTPException, Request, status

from userroles.security.roles import ADMIN_ROLES, RoleChecker

logger = logging.getLogger("userroles")
# Denials are audit records; emit them without relying on root logger config.
logger.setLevel(logging.INFO)


class NotAuthenticated(HTTPException):
    pass


class AccessDenied(HTTPException):
    pass


def get_user_record(request: Request) -> Any:
    """Return the record set by the session layer, or 401."""
    record = getattr(request.state, "user", None)
    if record is None:
        raise NotAuthenticated(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated.")
    return record


def _discard(_err: Any, _result: Any) -> None:
    return None


def get_role_checker(record: Any = Depends(get_user_record)) -> RoleChecker:
    return RoleChecker(record)


def _deny(request: Request, *, check: str, required: list[str]) -> AccessDenied:
    # Names of the checked groups only; never the record itself.
    logger.info(
        json.dumps(
            {
                "event": "access_denied",
                "method": request.method,
                "path": request.url.path,
                "check": check,
                "required": required,
            }
        )
    )
    return AccessDenied(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied.")


def require_groups(*groups: str) -> Callable[..., RoleChecker]:
    """Dependency factory: the user must be in every listed group."""

    required = list(groups)

    def _dep(request: Request, checker: RoleChecker = Depends(get_role_checker)) -> RoleChecker:
        if not checker.has_group(required):
            raise _deny(request, check="groups", required=required)
        return checker

    return _dep


def require_any_role(*roles: str) -> Callable[..., RoleChecker]:
    """Dependency factory: the user must hold one of the roles (super always passes)."""

    required = list(roles)

    def _dep(request: Request, checker: RoleChecker = Depends(get_role_checker)) -> RoleChecker:
        if not checker.is_in_any_role(required, _discard):
            raise _deny(request, check="any_role", required=required)
        return checker

    return _dep


def require_admin() -> Callable[..., RoleChecker]:
    """Dependency factory: the user must be admin or super."""

    def _dep(request: Request, checker: RoleChecker = Depends(get_role_checker)) -> RoleChecker:
        if not checker.is_admin():
            raise _deny(request, check="admin", required=list(ADMIN_ROLES))
        return checker

    return _dep
