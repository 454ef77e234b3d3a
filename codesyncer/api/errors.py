"""Translation of GitHub service errors into HTTP responses."""

import time

from fastapi import HTTPException, status

from codesyncer.services.github import GitHubAPIError, SyncError


def _with_rate_limit_hint(message: str, rate_limit_reset: int | None) -> str:
    if not rate_limit_reset:
        return message
    minutes = max(0, rate_limit_reset - int(time.time())) // 60
    return f"{message}. Rate limit resets in {minutes} minutes."


def github_http_exception(e: GitHubAPIError) -> HTTPException:
    """Map a GitHub API failure onto the upstream status, or 502 without one."""
    return HTTPException(
        status_code=e.status_code or status.HTTP_502_BAD_GATEWAY,
        detail=_with_rate_limit_hint(e.message, e.rate_limit_reset),
    )


def sync_http_exception(e: SyncError) -> HTTPException:
    """Map a failed sync onto 401 (bad token) or 502, naming the failed step."""
    status_code = (
        status.HTTP_401_UNAUTHORIZED
        if e.status_code == status.HTTP_401_UNAUTHORIZED
        else status.HTTP_502_BAD_GATEWAY
    )
    return HTTPException(
        status_code=status_code,
        detail=_with_rate_limit_hint(f"Sync failed: {e.message}", e.rate_limit_reset),
    )
