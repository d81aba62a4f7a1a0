"""GitLab-backed authorization with a short-lived principal cache.

``GitlabAuthorizer.authorize(login, token)`` verifies that the token belongs to
the GitLab account whose email is ``login``, derives the host roles and caches
the resulting ``Principal`` for ``cache_ttl`` to stay under GitLab's API rate
limits. A cached principal is served until it expires, even if the account
changed on the GitLab side in the meantime. Failures are never cached.
"""
from __future__ import annotations
import hashlib
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from ..config.settings import GitlabAuthConfig
from .cache import TTLCache
from .gitlab import GitlabIdentityClient, GroupLookupError, IdentityLookupError
from .models import Principal
from .rbac import derive_roles

logger = logging.getLogger(__name__)

REASON_INVALID_CREDENTIALS = "invalid_credentials"
REASON_IDENTITY_LOOKUP = "identity_lookup"
REASON_IDENTITY_MISMATCH = "identity_mismatch"
REASON_GROUP_LOOKUP = "group_lookup"

Token = Union[str, bytes, bytearray]


class AuthenticationError(Exception):
    """Authorization attempt failed.

    Attributes:
        reason: One of the ``REASON_*`` constants
        message: Human-readable detail (never contains the token)
    """

    def __init__(self, message: str, reason: str):
        self.message = message
        self.reason = reason
        super().__init__(message)


@dataclass
class AuthResult:
    """Outcome of ``GitlabAuthorizer.check``."""
    success: bool
    principal: Optional[Principal] = None
    reason: Optional[str] = None
    error_message: Optional[str] = None


def token_fingerprint(token: Token) -> str:
    """Short SHA-256 prefix of a token, safe to log for correlation."""
    raw = token.encode("utf-8") if isinstance(token, str) else bytes(token)
    return hashlib.sha256(raw).hexdigest()[:12]


def _coerce_token(token: Token) -> str:
    if isinstance(token, str):
        return token
    if isinstance(token, (bytes, bytearray)):
        try:
            return bytes(token).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise AuthenticationError("Token is not valid UTF-8", REASON_INVALID_CREDENTIALS) from exc
    raise TypeError(f"token must be str or bytes, not {type(token).__name__}")


class GitlabAuthorizer:
    """Authorizes GitLab users for the host repository manager.

    Construct once at startup and share the instance between callers;
    ``authorize`` is safe to call from several threads. Concurrent misses for
    the same credential may each reach GitLab, the last write wins.

    Usage:
        authorizer = GitlabAuthorizer(load_settings())
        principal = authorizer.authorize("alice@example.com", token)
    """

    def __init__(
        self,
        config: GitlabAuthConfig,
        identity_client: Optional[GitlabIdentityClient] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize the authorizer.

        Args:
            config: Read-only configuration
            identity_client: Client used for GitLab lookups (built from config when omitted)
            clock: Monotonic clock in seconds, for the cache
        """
        self.config = config
        self.identity_client = identity_client or GitlabIdentityClient.from_config(config)
        self._cache = TTLCache(config.cache_ttl.total_seconds(), clock=clock)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def close(self) -> None:
        """Release the HTTP connections held by the identity client."""
        self.identity_client.close()

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("[authz] Principal cache cleared")

    def authorize(self, login: str, token: Token) -> Principal:
        """Return the principal for ``login`` if ``token`` proves that identity.

        Args:
            login: Email address the caller claims to be
            token: GitLab personal access token, as str or bytes

        Returns:
            Principal with the verified email as username

        Raises:
            AuthenticationError: Credentials missing, token invalid, identity
                mismatch or group lookup failure
        """
        secret = _coerce_token(token)
        if not login or not secret:
            raise AuthenticationError("Login and token are required", REASON_INVALID_CREDENTIALS)

        key = self._cache_key(login, secret)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"[authz] Using cached principal for login={login}")
            return cached

        fingerprint = token_fingerprint(secret)
        logger.debug(f"[authz] Cache miss for login={login} token_hash={fingerprint}")
        try:
            principal = self._authorize_uncached(login, secret)
        except AuthenticationError as exc:
            logger.warning(
                f"[authz] Authentication failed | login={login} | reason={exc.reason} | token_hash={fingerprint}"
            )
            raise

        self._cache.set(key, principal)
        logger.info(
            f"[authz] Authorized {principal.username} with {len(principal.groups or ())} role(s)"
        )
        return principal

    def check(self, login: str, token: Token) -> AuthResult:
        """Non-raising variant of ``authorize`` for callers that branch on a result."""
        try:
            principal = self.authorize(login, token)
        except AuthenticationError as exc:
            return AuthResult(success=False, reason=exc.reason, error_message=exc.message)
        return AuthResult(success=True, principal=principal)

    def _authorize_uncached(self, login: str, token: str) -> Principal:
        try:
            user = self.identity_client.resolve_user_by_token(token)
        except IdentityLookupError as exc:
            raise AuthenticationError("Could not verify token with GitLab", REASON_IDENTITY_LOOKUP) from exc

        if user is None or not user.email or login.lower() != user.email.lower():
            raise AuthenticationError(
                "Given login not found or does not match the GitLab account", REASON_IDENTITY_MISMATCH
            )

        try:
            roles = derive_roles(user, self.config, self.identity_client.list_groups_for_user)
        except GroupLookupError as exc:
            raise AuthenticationError(
                f"Could not fetch groups for GitLab user '{user.username}'", REASON_GROUP_LOOKUP
            ) from exc

        return Principal(username=user.email, groups=frozenset(roles) if roles else None)

    @staticmethod
    def _cache_key(login: str, token: str) -> Tuple[str, str]:
        return login, hashlib.sha256(token.encode("utf-8")).hexdigest()
