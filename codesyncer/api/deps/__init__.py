"""API dependencies - re-exports from submodules."""

from .auth import GitHubToken, get_github_token, security

__all__ = [
    "GitHubToken",
    "get_github_token",
    "security",
]
