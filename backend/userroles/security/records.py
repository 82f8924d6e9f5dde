"""User record contract read by the role checker."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """Groups currently held by a user plus the full role list.

    Populated by the session / user-directory layer; this package only reads it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    groups: list[str]
    all_roles: Optional[list[str]] = Field(default=None, alias="allRoles")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "UserRecord":
        """Accept either `allRoles` or `all_roles` as produced by upstream directories."""
        return cls.model_validate(dict(data))
