"""GitLab user lookups."""
from __future__ import annotations

import requests

from ..models import UserRecord
from .client import GitlabClient
from .exceptions import GitlabError, IdentityLookupError


class UserService:
    """Service for resolving GitLab users."""

    def __init__(self, client: GitlabClient):
        """Initialize user service.

        Args:
            client: GitLab client holding the connection parameters
        """
        self.client = client

    def resolve_user_by_token(self, token: str) -> UserRecord:
        """Ask GitLab who owns the given user token.

        The request is authenticated with the user's token, not the service
        API key, so the answer is the token owner's own record.

        Args:
            token: User private/personal access token

        Returns:
            The token owner's user record

        Raises:
            IdentityLookupError: Token rejected, network failure or unusable response
        """
        try:
            resp = self.client.get("/user", token=token)
            payload = resp.json()
        except (GitlabError, requests.RequestException, ValueError) as exc:
            raise IdentityLookupError(f"Could not resolve GitLab user for token: {exc}") from exc

        if not isinstance(payload, dict) or not payload:
            raise IdentityLookupError("GitLab returned no user record for token")
        return UserRecord.from_api(payload)
