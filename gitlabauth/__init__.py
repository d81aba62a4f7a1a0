"""GitLab authentication and role mapping for repository managers.

    from gitlabauth import GitlabAuthorizer, load_settings

    authorizer = GitlabAuthorizer(load_settings())
    principal = authorizer.authorize("alice@example.com", token)
"""
from .config import GitlabAuthConfig, load_settings
from .core.authorizer import AuthenticationError, AuthResult, GitlabAuthorizer
from .core.models import Principal

__all__ = [
    "GitlabAuthConfig",
    "load_settings",
    "GitlabAuthorizer",
    "AuthenticationError",
    "AuthResult",
    "Principal",
]

__version__ = "1.1.0"
