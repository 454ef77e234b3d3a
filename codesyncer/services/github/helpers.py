"""
GitHub API helper utilities.

Provides rate limit handling and error response translation for GitHub API
calls. Every error message is prefixed with the action being attempted so a
failure can be traced to its pipeline step without a stack trace.
"""

import logging
import re

import httpx

from codesyncer.services.github.exceptions import GitHubAPIError, GitHubRepoRenamed

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def extract_error_message(response: httpx.Response) -> str:
    """
    Get the most descriptive reason GitHub gave for a failed response.

    Uses the "message" field of a JSON error body when there is one,
    otherwise the HTTP reason phrase.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or "Unknown error"


def parse_redirect_location(location: str) -> tuple[str, str] | None:
    """
    Extract owner/repo from a GitHub redirect Location header or API path.

    Accepts absolute URLs ("https://api.github.com/repos/owner/name/...")
    and relative paths ("/repos/owner/name/...").

    Returns:
        Tuple of (owner, repo) if parseable, None otherwise
    """
    if not location:
        return None
    match = re.match(r"/repos/([^/]+)/([^/]+)", httpx.URL(location).path)
    if match:
        return (match.group(1), match.group(2))
    return None


def parse_redirect_repo_id(location: str) -> int | None:
    """
    Extract the repository ID from an ID-based redirect.

    GitHub sometimes redirects to https://api.github.com/repositories/{id}/...
    instead of naming the new owner/repo.
    """
    if not location:
        return None
    match = re.match(r"/repositories/(\d+)", httpx.URL(location).path)
    if match:
        return int(match.group(1))
    return None


def _renamed_error(response: httpx.Response, action: str, repo_name: str | None) -> GitHubRepoRenamed:
    location = response.headers.get("Location", "")
    old_full_name = repo_name or "repository"
    logger.debug(f"Got 301 redirect for {old_full_name}, Location header: {location!r}")

    new_repo = parse_redirect_location(location)
    if new_repo is None:
        # GitHub sometimes only names the new location in the body
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("url"), str):
            new_repo = parse_redirect_location(body["url"])

    if new_repo:
        new_full_name = f"{new_repo[0]}/{new_repo[1]}"
        logger.info(f"Repository redirect detected: {old_full_name} -> {new_full_name}")
        return GitHubRepoRenamed(old_full_name, new_full_name, action=action)

    repo_id = parse_redirect_repo_id(location)
    if repo_id:
        logger.info(f"Repository redirect to ID detected: {old_full_name} -> ID {repo_id}")
    else:
        logger.warning(f"Unparseable redirect for {old_full_name}: {location!r}")
    return GitHubRepoRenamed(old_full_name, repo_id=repo_id, action=action)


def handle_error_response(
    response: httpx.Response, action: str, repo_name: str | None = None
) -> None:
    """
    Raise a GitHubAPIError if the response status is not in the 2xx range.

    Args:
        response: The HTTP response from GitHub API
        action: What was being attempted, e.g. "create repository"
        repo_name: Repository the request targeted ("owner/repo"), for redirects

    Raises:
        GitHubRepoRenamed: If the repository was renamed or transferred (301)
        GitHubAPIError: "Failed to {action}: {reason} (Status: {code})"
    """
    if response.is_success:
        return

    if response.status_code == 301:
        raise _renamed_error(response, action, repo_name)

    reason = extract_error_message(response)
    rate_info = RateLimitInfo(response)
    rate_limit_reset = None
    if response.status_code in (403, 429) and rate_info.is_exhausted:
        rate_limit_reset = rate_info.reset_timestamp
        logger.warning(f"GitHub rate limit exhausted while trying to {action}")

    raise GitHubAPIError(
        f"Failed to {action}: {reason} (Status: {response.status_code})",
        response.status_code,
        rate_limit_reset=rate_limit_reset,
        action=action,
    )
