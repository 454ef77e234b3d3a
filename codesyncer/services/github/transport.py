"""
Authenticated request issuance against the GitHub REST API.

Every call carries the bearer token and asks for the v3 JSON media type.
Non-2xx statuses and network failures are translated into GitHubAPIError
with the attempted action as the message prefix.
"""

import logging
from typing import Any

import httpx

from codesyncer.config import settings
from codesyncer.services.github.constants import GITHUB_JSON_MEDIA_TYPE
from codesyncer.services.github.exceptions import GitHubAPIError, GitHubProtocolError
from codesyncer.services.github.helpers import handle_error_response, parse_redirect_location
from codesyncer.services.github.http_client import get_github_client

logger = logging.getLogger(__name__)


class GitHubTransport:
    """Sends authenticated requests to the GitHub REST API."""

    def __init__(self, token: str, client: httpx.AsyncClient | None = None):
        if not token:
            raise ValueError("A GitHub access token is required")
        self.token = token
        self.base_url = settings.github_api_url.rstrip("/")
        self._client = client
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": GITHUB_JSON_MEDIA_TYPE,
            "X-GitHub-Api-Version": settings.github_api_version,
        }

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_github_client()

    async def send(
        self,
        method: str,
        path: str,
        action: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Issue a request and return the raw response, whatever its status.

        For callers that branch on specific statuses (e.g. 404 meaning
        "absent"). Only network-level failures raise here.

        Args:
            method: HTTP method
            path: API path, e.g. "/repos/owner/repo"
            action: Human-readable step, used in error messages
            json: Optional JSON body

        Raises:
            GitHubAPIError: If the request could not be completed (status_code=None)
        """
        try:
            return await self.client.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers,
                json=json,
            )
        except httpx.RequestError as e:
            logger.warning(f"Network error while trying to {action}: {e!r}")
            raise GitHubAPIError(
                f"Failed to {action}: {e.__class__.__name__}: {e}",
                None,
                action=action,
            ) from e

    async def request(
        self,
        method: str,
        path: str,
        action: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """
        Issue a request and return the parsed JSON body of a 2xx response.

        Raises:
            GitHubAPIError: On non-2xx status or network failure
            GitHubProtocolError: If a 2xx body is not valid JSON
        """
        response = await self.send(method, path, action, json=json)
        target = parse_redirect_location(path)
        handle_error_response(response, action, "/".join(target) if target else None)
        return parse_json(response, action)


def parse_json(response: httpx.Response, action: str) -> Any:
    """Decode a successful response body, treating undecodable JSON as a protocol error."""
    try:
        return response.json()
    except ValueError as e:
        raise GitHubProtocolError(
            f"Failed to {action}: GitHub returned a response that is not valid JSON",
            response.status_code,
            action=action,
        ) from e


def require_field(data: Any, action: str, *keys: str) -> str:
    """
    Pull a nested string field (e.g. "object", "sha") out of a response body.

    Raises:
        GitHubProtocolError: If any key along the path is missing or empty
    """
    value = data
    for key in keys:
        value = value.get(key) if isinstance(value, dict) else None
        if not value:
            dotted = ".".join(keys)
            raise GitHubProtocolError(
                f"Failed to {action}: GitHub API did not return {dotted}",
                action=action,
            )
    return str(value)
