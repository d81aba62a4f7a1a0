"""Configuration module for GitLab authorization."""
from .settings import GitlabAuthConfig, load_settings

__all__ = ["GitlabAuthConfig", "load_settings"]
