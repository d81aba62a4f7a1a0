"""Core authorization logic, independent of the host platform.

Module Structure:
    - gitlab/        : GitLab REST API client (user and group lookups)
    - authorizer.py  : GitlabAuthorizer, AuthenticationError, AuthResult
    - rbac.py        : GitLab group / admin flag to host role mapping
    - cache.py       : Thread-safe TTL cache for principals
    - models.py      : UserRecord, GroupRecord, Principal

Usage:
    from gitlabauth.config import load_settings
    from gitlabauth.core.authorizer import GitlabAuthorizer

    authorizer = GitlabAuthorizer(load_settings())
    principal = authorizer.authorize(login, token)
"""
