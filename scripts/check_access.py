"""Check which roles a GitLab login would receive.

This module serves as a CLI wrapper around gitlabauth.core.authorizer, for
operators verifying the GitLab settings of a deployment.
"""
from __future__ import annotations
import argparse
import getpass
import logging
import os
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gitlabauth.config import load_settings
from gitlabauth.core.authorizer import GitlabAuthorizer


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="GitLab authorization check")
    parser.add_argument("--login", required=True, help="Email address of the GitLab account")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    token = os.environ.get("GITLAB_USER_TOKEN") or getpass.getpass("GitLab token: ")
    authorizer = GitlabAuthorizer(load_settings())
    try:
        result = authorizer.check(args.login, token)
    finally:
        authorizer.close()

    if not result.success:
        print(f"[check] DENIED ({result.reason}): {result.error_message}", file=sys.stderr)
        return 1

    principal = result.principal
    roles = ", ".join(sorted(principal.groups or ())) or "(none)"
    print(f"[check] username={principal.username}")
    print(f"[check] roles={roles}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
