"""
GitHub OAuth web flow.

The client secret lives in server configuration only; the browser gets the
authorize URL and posts back the code, and the server performs the exchange.
"""

import logging
from urllib.parse import urlencode

import httpx

from codesyncer.config import settings
from codesyncer.services.github.exceptions import GitHubAPIError
from codesyncer.services.github.http_client import get_github_client

logger = logging.getLogger(__name__)


class GitHubOAuthClient:
    """Builds authorize URLs and exchanges authorization codes for tokens."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.client_id = client_id if client_id is not None else settings.github_client_id
        self.client_secret = (
            client_secret if client_secret is not None else settings.github_client_secret
        )
        self.base_url = f"{settings.github_web_url.rstrip('/')}/login/oauth"
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def _require_configured(self) -> None:
        if not self.is_configured:
            raise GitHubAPIError("GitHub OAuth is not configured on this server")

    def authorize_url(self, redirect_uri: str | None = None, state: str | None = None) -> str:
        """
        Build the URL the user is sent to for granting repo access.

        Args:
            redirect_uri: Where GitHub sends the user back (default: settings.frontend_url)
            state: Optional anti-forgery value echoed back by GitHub
        """
        self._require_configured()
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or settings.frontend_url,
            "scope": settings.github_oauth_scope,
        }
        if state:
            params["state"] = state
        return f"{self.base_url}/authorize?{urlencode(params)}"

    async def exchange_code_for_token(self, code: str) -> str:
        """
        Exchange an OAuth authorization code for an access token.

        Returns:
            The access token

        Raises:
            GitHubAPIError: If OAuth is unconfigured, the exchange is rejected,
                or GitHub returns no token
        """
        self._require_configured()
        client = self._client or get_github_client()
        try:
            response = await client.post(
                f"{self.base_url}/access_token",
                headers={"Accept": "application/json"},
                json={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": code,
                },
            )
        except httpx.RequestError as e:
            raise GitHubAPIError(f"GitHub token exchange failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.is_success:
            message = f"GitHub token exchange failed with status {response.status_code}."
            if data.get("error_description"):
                message += f" Error: {data['error_description']}."
            if 400 <= response.status_code < 500:
                message += (
                    " This often means the client secret has been revoked or the code"
                    " has expired. Check the OAuth app settings on GitHub."
                )
            logger.warning(message)
            raise GitHubAPIError(message, response.status_code)

        if data.get("error") or not data.get("access_token"):
            description = data.get("error_description") or "Unknown error"
            raise GitHubAPIError(f"Failed to get access token: {description}", response.status_code)

        token: str = data["access_token"]
        return token
