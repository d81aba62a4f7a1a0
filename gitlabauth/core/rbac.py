"""Mapping of GitLab identities and group memberships to host roles."""
from __future__ import annotations
from typing import Callable, Iterable, Set

from .models import GroupRecord, UserRecord

ADMIN_ROLE = "nx-admin"


def map_group_to_role(group: GroupRecord) -> str:
    """Host role name for a GitLab group: its path slug."""
    return group.path


def derive_roles(
    user: UserRecord,
    config,
    list_groups: Callable[[str], Iterable[GroupRecord]],
) -> Set[str]:
    """Collect the host roles for a verified GitLab user.

    Precedence:
    1. GitLab admins get ``ADMIN_ROLE`` when admin mapping is enabled.
    2. A configured default role is granted as-is and the group lookup is skipped.
    3. Otherwise every group the user belongs to becomes a role.

    Args:
        user: Verified user record
        config: Object exposing ``admin_mapping_enabled`` and ``default_role``
        list_groups: Callable returning the user's groups for a GitLab username

    Returns:
        Set of role names, possibly empty

    Raises:
        GroupLookupError: Propagated from ``list_groups``
    """
    roles: Set[str] = set()
    if user.is_admin and config.admin_mapping_enabled:
        roles.add(ADMIN_ROLE)

    if config.default_role:
        roles.add(config.default_role)
    else:
        roles.update(
            map_group_to_role(group)
            for group in list_groups(user.username)
            if group.path
        )
    return roles
