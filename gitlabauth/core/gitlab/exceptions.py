"""GitLab-specific exceptions for error handling."""


class GitlabError(Exception):
    """Base exception for all GitLab operations."""
    pass


class GitlabAPIError(GitlabError):
    """HTTP error from the GitLab REST API.

    Attributes:
        status_code: HTTP status code
        message: Error message from response
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"[{status_code}] {endpoint}: {message}")


class IdentityLookupError(GitlabError):
    """Resolving the owner of a user token failed (invalid token, network or provider error)."""
    pass


class GroupLookupError(GitlabError):
    """Listing a user's group memberships failed."""
    pass
