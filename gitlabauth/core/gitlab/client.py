"""Low-level HTTP client for the GitLab REST API.

Handles the two authentication contexts (service API key and per-request user
token), sudo lookups, pagination and HTTP error translation.
"""
from __future__ import annotations
import logging
from typing import Optional, Dict, Any, List

import requests

from .exceptions import GitlabAPIError

REQUEST_TIMEOUT = 5
API_NAMESPACE = "/api/v4"
MAX_ITEMS_PER_PAGE = 100

logger = logging.getLogger(__name__)


def normalize_api_url(api_url: str) -> str:
    """Strip trailing slashes and an explicit API namespace from a GitLab URL.

    >>> normalize_api_url("https://gitlab.example.com/api/v4/")
    'https://gitlab.example.com'
    """
    url = (api_url or "").strip().rstrip("/")
    if url.endswith(API_NAMESPACE):
        url = url[: -len(API_NAMESPACE)]
    return url


class GitlabClient:
    """HTTP client for the GitLab REST API (v4).

    Requests are authenticated with the service API key unless a user token
    is passed explicitly. Administrative lookups on behalf of another user go
    through the ``Sudo`` header, which GitLab only honours for admin keys.

    Usage:
        client = GitlabClient("https://gitlab.example.com", api_key)
        me = client.get("/user", token=user_token).json()
        groups = client.get_paginated("/groups", sudo="alice")
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize GitLab client.

        Args:
            api_url: GitLab base URL (with or without the /api/v4 suffix)
            api_key: Service-level private token used for administrative lookups
            timeout: Per-request timeout in seconds
            session: Optional pre-configured requests session
        """
        self.base_url = normalize_api_url(api_url)
        self._api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def api_root(self) -> str:
        return f"{self.base_url}{API_NAMESPACE}"

    def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
        sudo: Optional[str] = None,
    ) -> requests.Response:
        """Execute GET request against the API.

        Args:
            path: API endpoint path relative to /api/v4 (e.g., "/user")
            params: Query parameters
            token: User token; the service API key is used when omitted
            sudo: Username to impersonate for an administrative lookup

        Returns:
            Response object

        Raises:
            GitlabAPIError: On HTTP error
            requests.RequestException: On connection failure or timeout
        """
        url = f"{self.api_root}{path}"
        headers = {"PRIVATE-TOKEN": token if token is not None else self._api_key}
        if sudo is not None:
            headers["Sudo"] = sudo

        logger.debug(f"[gitlab] GET {url} (auth={'user' if token is not None else 'service'}, sudo={sudo})")
        resp = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        self._handle_error(resp)
        return resp

    def get_paginated(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
        sudo: Optional[str] = None,
        per_page: int = MAX_ITEMS_PER_PAGE,
    ) -> List[dict]:
        """Fetch every page of a list endpoint and return the concatenated items.

        Follows GitLab's ``X-Next-Page`` header until it comes back empty.

        Raises:
            GitlabAPIError: On HTTP error or when a page is not a JSON array
        """
        items: List[dict] = []
        page = "1"
        while page:
            query = dict(params or {})
            query.update({"per_page": per_page, "page": page})
            resp = self.get(path, params=query, token=token, sudo=sudo)
            batch = resp.json()
            if not isinstance(batch, list):
                raise GitlabAPIError(resp.status_code, "Expected a JSON array", resp.url)
            if not batch:
                break
            items.extend(batch)
            page = (resp.headers.get("X-Next-Page") or "").strip()
        return items

    def close(self) -> None:
        self.session.close()

    def _handle_error(self, resp: requests.Response) -> None:
        """Centralized error handling for HTTP responses.

        Raises:
            GitlabAPIError: If response status indicates error
        """
        if resp.status_code >= 400:
            raise GitlabAPIError(resp.status_code, resp.text, resp.url)
