"""Role membership queries over a user record.

Design:
- `groups` is read from the wrapped record on every call; the checker never mutates it.
- "super" satisfies every role query; `has_group`/`has_any_group` are literal lookups.
- Callback-style queries call `callback(None, result)` synchronously and also return `result`.
"""

from __future__ import annotations

import logging
from collections.abc import Container, Iterable, Mapping
from typing import Any, Callable, Optional, Union

from userroles.core.env import get_strict_in_role

logger = logging.getLogger(__name__)

SUPER_ROLE = "super"
ADMIN_ROLES: tuple[str, ...] = (SUPER_ROLE, "admin")

RoleNames = Union[str, Iterable[str]]
Callback = Callable[[Optional[Exception], Any], Any]


def normalize_roles(role_or_roles: RoleNames) -> list[str]:
    """Wrap a single name in a list; materialize any other iterable in order."""
    if isinstance(role_or_roles, str):
        return [role_or_roles]
    return list(role_or_roles)


class RoleChecker:
    """Answers admin / super / role / group questions for one user record.

    The record is a `UserRecord`, any object with a `groups` attribute, or a
    mapping with a "groups" key. `all_roles` / "allRoles" is optional and
    passed through by `get_roles`.
    """

    __slots__ = ("_record", "_strict_in_role")

    def __init__(self, record: Any, *, strict_in_role: Optional[bool] = None) -> None:
        self._record = record
        self._strict_in_role = get_strict_in_role() if strict_in_role is None else strict_in_role

    @property
    def record(self) -> Any:
        return self._record

    @property
    def strict_in_role(self) -> bool:
        return self._strict_in_role

    def _groups(self) -> Container[str]:
        if isinstance(self._record, Mapping):
            return self._record["groups"]
        return self._record.groups

    # --- synchronous predicates -------------------------------------------------

    def is_admin(self) -> bool:
        return self.has_any_group(ADMIN_ROLES)

    def is_super(self) -> bool:
        return self.has_group(SUPER_ROLE)

    def has_group(self, group_or_groups: RoleNames) -> bool:
        """True if the user is in every given group (vacuously true when none given)."""
        names = normalize_roles(group_or_groups)
        groups = self._groups()
        return all(name in groups for name in names)

    def has_any_group(self, group_or_groups: RoleNames) -> bool:
        """True if the user is in at least one given group (false when none given)."""
        names = normalize_roles(group_or_groups)
        groups = self._groups()
        return any(name in groups for name in names)

    # --- callback-style queries -------------------------------------------------

    def query_admin(self, callback: Callback) -> bool:
        return self.is_in_any_role(ADMIN_ROLES, callback)

    def query_super(self, callback: Callback) -> bool:
        return self.is_in_role(SUPER_ROLE, callback)

    def is_in_role(self, role_or_roles: RoleNames, callback: Callback) -> bool:
        """Report whether the user holds the given role(s).

        Legacy behavior: any non-empty request resolves to "is super", the role
        names themselves are not consulted. With `strict_in_role` every role must
        be held (or the user must be super).
        """
        roles = normalize_roles(role_or_roles)
        groups = self._groups()
        is_super = SUPER_ROLE in groups

        if self._strict_in_role or len(roles) == 0:
            result = True
            for name in roles:
                result = result and (name in groups or is_super)
        else:
            result = is_super

        logger.debug("is_in_role roles=%s strict=%s result=%s", roles, self._strict_in_role, result)
        callback(None, result)
        return result

    def is_in_any_role(self, role_or_roles: RoleNames, callback: Callback) -> bool:
        """Report whether the user holds at least one of the given roles; super holds all."""
        roles = normalize_roles(role_or_roles)
        groups = self._groups()
        is_super = SUPER_ROLE in groups

        result = False
        for name in roles:
            result = result or name in groups or is_super

        logger.debug("is_in_any_role roles=%s result=%s", roles, result)
        callback(None, result)
        return result

    def get_roles(self, callback: Callback) -> Any:
        # all_roles is owned by the record supplier; absent is passed as None
        if isinstance(self._record, Mapping):
            roles = self._record.get("allRoles", self._record.get("all_roles"))
        else:
            roles = getattr(self._record, "all_roles", getattr(self._record, "allRoles", None))
        callback(None, roles)
        return roles

    def __repr__(self) -> str:
        return f"RoleChecker(strict_in_role={self._strict_in_role})"
