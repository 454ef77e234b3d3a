"""
Shared HTTP client for GitHub API operations.

Provides a singleton AsyncClient with connection pooling for all GitHub API calls,
so the parallel blob uploads of a sync reuse connections instead of paying a TLS
handshake each.
"""

import logging

import httpx

from codesyncer.config import settings

logger = logging.getLogger(__name__)

# Module-level singleton client
_client: httpx.AsyncClient | None = None


def get_github_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client for GitHub API calls.

    Auth headers are passed per-request, never stored on the client, so one
    client safely serves every caller's token.

    Returns:
        Shared httpx.AsyncClient configured for GitHub API
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                settings.github_timeout_seconds,
                connect=settings.github_connect_timeout_seconds,
            ),
            limits=httpx.Limits(
                max_connections=settings.github_max_connections,
                max_keepalive_connections=settings.github_max_connections // 2,
            ),
            http2=True,
        )
        logger.debug("Created new GitHub HTTP client with connection pooling")
    return _client


async def close_github_client() -> None:
    """
    Close the shared HTTP client.

    Call on app shutdown for graceful termination.
    """
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed GitHub HTTP client")
