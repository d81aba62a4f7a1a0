"""GitLab REST API client library.

Architecture:
- client.py: HTTP client with service-key/user-token auth, sudo and pagination
- users.py: "who am I" lookups authenticated with a user token
- groups.py: group membership lookups via sudo
- identity.py: facade used by the authorizer
- exceptions.py: Typed exceptions for error handling

Usage:
    from gitlabauth.core.gitlab import GitlabClient, GitlabIdentityClient

    identity = GitlabIdentityClient(GitlabClient("https://gitlab.example.com", api_key))
    user = identity.resolve_user_by_token(user_token)
    groups = identity.list_groups_for_user(user.username)
"""
from .client import (
    GitlabClient,
    normalize_api_url,
    REQUEST_TIMEOUT,
    API_NAMESPACE,
    MAX_ITEMS_PER_PAGE,
)
from .exceptions import (
    GitlabError,
    GitlabAPIError,
    IdentityLookupError,
    GroupLookupError,
)
from .users import UserService
from .groups import GroupService
from .identity import GitlabIdentityClient

__all__ = [
    # Client
    "GitlabClient",
    "normalize_api_url",
    "REQUEST_TIMEOUT",
    "API_NAMESPACE",
    "MAX_ITEMS_PER_PAGE",

    # Exceptions
    "GitlabError",
    "GitlabAPIError",
    "IdentityLookupError",
    "GroupLookupError",

    # Services
    "UserService",
    "GroupService",
    "GitlabIdentityClient",
]
