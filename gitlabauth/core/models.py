"""Value objects exchanged between the GitLab client and the authorizer."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, FrozenSet


@dataclass(frozen=True)
class UserRecord:
    """GitLab user as returned by ``GET /user``."""
    username: str
    email: Optional[str] = None
    is_admin: bool = False
    id: Optional[int] = None
    name: Optional[str] = None
    state: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict) -> "UserRecord":
        return cls(
            username=payload.get("username") or "",
            email=payload.get("email"),
            is_admin=bool(payload.get("is_admin")),
            id=payload.get("id"),
            name=payload.get("name"),
            state=payload.get("state"),
        )


@dataclass(frozen=True)
class GroupRecord:
    """GitLab group membership entry.

    ``path`` is the group's URL slug (e.g. ``dev-team``) and is the value used
    as the host role name; ``full_path`` includes parent namespaces.
    """
    path: str
    id: Optional[int] = None
    name: Optional[str] = None
    full_path: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict) -> "GroupRecord":
        return cls(
            path=payload.get("path") or "",
            id=payload.get("id"),
            name=payload.get("name"),
            full_path=payload.get("full_path"),
        )


@dataclass(frozen=True)
class Principal:
    """Verified identity plus the roles derived for it.

    ``groups`` is ``None`` when no role could be derived, never an empty set.
    """
    username: str
    groups: Optional[FrozenSet[str]] = None

    def has_role(self, role: str) -> bool:
        return bool(self.groups) and role in self.groups
