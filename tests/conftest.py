"""Pytest shared fixtures for GitLab authorization tests."""
import json
import pathlib
import sys
from unittest.mock import MagicMock

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch):
    """Prevent unit tests from reaching a live GitLab instance."""

    def _refuse(self, method, url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")

    monkeypatch.setattr(requests.Session, "request", _refuse)


@pytest.fixture(autouse=True)
def _clean_gitlab_env(monkeypatch):
    for var in (
        "GITLAB_API_URL",
        "GITLAB_API_KEY",
        "GITLAB_DEFAULT_ROLE",
        "GITLAB_ADMIN_MAPPING_ENABLED",
        "GITLAB_PRINCIPAL_CACHE_TTL",
        "GITLAB_REQUEST_TIMEOUT",
        "GITLAB_USER_TOKEN",
    ):
        monkeypatch.delenv(var, raising=False)


# ─────────────────────────────────────────────────────────────────────────────
# HTTP stubs
# ─────────────────────────────────────────────────────────────────────────────
class StubResponse:
    def __init__(self, payload, status_code: int = 200, headers: dict = None,
                 url: str = "https://gitlab.example.com/api/v4/"):
        self._payload = payload
        self.status_code = status_code
        self.headers = headers or {}
        self.url = url
        self.text = payload if isinstance(payload, str) else json.dumps(payload)

    def json(self):
        if isinstance(self._payload, str):
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture()
def stub_response():
    return StubResponse


@pytest.fixture()
def session():
    """requests.Session stand-in whose ``get`` is a MagicMock."""
    return MagicMock(spec=requests.Session)
