"""
GitHub OAuth endpoints.

The client secret never leaves the server: the frontend asks for the
authorize URL, GitHub redirects back with a code, and the frontend posts
the code here to receive the access token.
"""

from fastapi import APIRouter, Query

from codesyncer.core.exceptions import ServiceUnavailableError, ValidationError
from codesyncer.schemas import AuthorizeUrlResponse, TokenExchangeRequest, TokenExchangeResponse
from codesyncer.services.github import GitHubAPIError, GitHubOAuthClient

router = APIRouter(prefix="/auth/github", tags=["auth"])


@router.get("/authorize-url", response_model=AuthorizeUrlResponse)
async def get_authorize_url(
    redirect_uri: str | None = Query(None, description="Callback URL (default: frontend URL)"),
    state: str | None = Query(None, description="Anti-forgery state echoed back by GitHub"),
) -> AuthorizeUrlResponse:
    """Build the GitHub authorization URL requesting repo scope."""
    oauth = GitHubOAuthClient()
    if not oauth.is_configured:
        raise ServiceUnavailableError("GitHub OAuth is not configured on this server")
    return AuthorizeUrlResponse(url=oauth.authorize_url(redirect_uri=redirect_uri, state=state))


@router.post("/token", response_model=TokenExchangeResponse)
async def exchange_token(data: TokenExchangeRequest) -> TokenExchangeResponse:
    """Exchange an OAuth authorization code for an access token."""
    oauth = GitHubOAuthClient()
    if not oauth.is_configured:
        raise ServiceUnavailableError("GitHub OAuth is not configured on this server")

    try:
        token = await oauth.exchange_code_for_token(data.code)
    except GitHubAPIError as e:
        raise ValidationError(e.message) from None

    return TokenExchangeResponse(access_token=token)
