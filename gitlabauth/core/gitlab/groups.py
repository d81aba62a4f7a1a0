"""GitLab group membership lookups."""
from __future__ import annotations
from typing import List

import requests

from ..models import GroupRecord
from .client import GitlabClient, MAX_ITEMS_PER_PAGE
from .exceptions import GitlabError, GroupLookupError


class GroupService:
    """Service for reading GitLab group memberships."""

    def __init__(self, client: GitlabClient):
        """Initialize group service.

        Args:
            client: GitLab client authenticated with an admin API key
        """
        self.client = client

    def list_groups_for_user(self, username: str) -> List[GroupRecord]:
        """Return every group the user belongs to.

        Runs under the service API key with ``Sudo: <username>``, so GitLab
        answers as if the user had asked. All pages are fetched at the
        maximum page size.

        Args:
            username: GitLab username (not the email)

        Returns:
            List of group records, possibly empty

        Raises:
            GroupLookupError: Empty username, or any HTTP, network or decoding failure
        """
        # Without a sudo target GitLab answers for the service account itself.
        if not username:
            raise GroupLookupError("Refusing group lookup without a GitLab username")
        try:
            payload = self.client.get_paginated("/groups", sudo=username, per_page=MAX_ITEMS_PER_PAGE)
        except (GitlabError, requests.RequestException, ValueError) as exc:
            raise GroupLookupError(f"Could not fetch groups for user '{username}': {exc}") from exc
        return [GroupRecord.from_api(item) for item in payload if isinstance(item, dict)]
