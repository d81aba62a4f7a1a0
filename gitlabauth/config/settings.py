"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 60
DEFAULT_REQUEST_TIMEOUT = 5.0


def _read_secret(secret_name: str, env_var: str) -> str | None:
    """Return a credential from the Docker secrets mount, else from the environment.

    The file ``/run/secrets/<secret_name>`` wins over ``env_var``; an empty or
    unreadable file falls through to the variable. Only the source is logged.
    """
    secret_file = Path("/run/secrets") / secret_name
    if secret_file.is_file():
        try:
            value = secret_file.read_text().strip()
        except OSError as e:
            logger.warning(f"[settings] Could not read {secret_file}: {e}")
            value = ""
        if value:
            logger.info(f"[settings] {secret_name} taken from {secret_file}")
            return value

    value = os.environ.get(env_var, "").strip()
    if value:
        logger.info(f"[settings] {secret_name} taken from ${env_var}")
        return value
    return None


@dataclass(frozen=True)
class GitlabAuthConfig:
    """GitLab authorization configuration. Read-only once loaded."""
    api_url: str
    api_key: str = field(repr=False)
    default_role: Optional[str] = None
    admin_mapping_enabled: bool = False
    cache_ttl: timedelta = timedelta(seconds=DEFAULT_CACHE_TTL_SECONDS)
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def _require(var_name: str) -> str:
    value = os.environ.get(var_name, "").strip()
    if not value:
        raise RuntimeError(f"Environment variable {var_name} is required.")
    return value


def _env_bool(var_name: str, default: bool = False) -> bool:
    return os.environ.get(var_name, str(default)).strip().lower() == "true"


def _env_number(var_name: str, default: float, cast=float, allow_zero: bool = True):
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"Environment variable {var_name} must be a number, got {raw!r}") from None
    if value < 0 or (value == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise ValueError(f"Environment variable {var_name} must be {bound}, got {raw!r}")
    return value


def load_settings() -> GitlabAuthConfig:
    """Load GitLab authorization settings from environment and /run/secrets."""
    api_url = _require("GITLAB_API_URL")

    api_key = _read_secret("gitlab_api_key", "GITLAB_API_KEY")
    if not api_key:
        raise RuntimeError("GITLAB_API_KEY not found in /run/secrets or environment")

    default_role = os.environ.get("GITLAB_DEFAULT_ROLE", "").strip() or None
    admin_mapping_enabled = _env_bool("GITLAB_ADMIN_MAPPING_ENABLED")
    cache_ttl_seconds = _env_number("GITLAB_PRINCIPAL_CACHE_TTL", DEFAULT_CACHE_TTL_SECONDS, cast=int)
    request_timeout = _env_number("GITLAB_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT, allow_zero=False)

    logger.info(
        f"[settings] api_url={api_url}; default_role={default_role or '-'}; "
        f"admin_mapping={admin_mapping_enabled}; cache_ttl={cache_ttl_seconds}s"
    )

    return GitlabAuthConfig(
        api_url=api_url,
        api_key=api_key,
        default_role=default_role,
        admin_mapping_enabled=admin_mapping_enabled,
        cache_ttl=timedelta(seconds=cache_ttl_seconds),
        request_timeout=request_timeout,
    )
