"""Remote identity client combining the user and group services."""
from __future__ import annotations
from typing import List, Optional

import requests

from ..models import GroupRecord, UserRecord
from .client import GitlabClient, REQUEST_TIMEOUT
from .groups import GroupService
from .users import UserService


class GitlabIdentityClient:
    """Answers "who owns this token" and "which groups is this user in".

    Keeps no state between calls apart from the connection parameters held
    by the underlying ``GitlabClient``.
    """

    def __init__(self, client: GitlabClient):
        self.client = client
        self.users = UserService(client)
        self.groups = GroupService(client)

    @classmethod
    def from_config(cls, config, session: Optional[requests.Session] = None) -> "GitlabIdentityClient":
        """Build a client from a ``GitlabAuthConfig``."""
        timeout = getattr(config, "request_timeout", None)
        if timeout is None:
            timeout = REQUEST_TIMEOUT
        return cls(GitlabClient(config.api_url, config.api_key, timeout=timeout, session=session))

    def resolve_user_by_token(self, token: str) -> UserRecord:
        return self.users.resolve_user_by_token(token)

    def list_groups_for_user(self, username: str) -> List[GroupRecord]:
        return self.groups.list_groups_for_user(username)

    def close(self) -> None:
        self.client.close()
