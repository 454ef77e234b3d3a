"""Pydantic schemas for GitHub authentication endpoints."""

from pydantic import BaseModel, Field


class GitHubUserResponse(BaseModel):
    """The authenticated GitHub account."""

    login: str
    avatar_url: str | None = None
    name: str | None = None


class AuthorizeUrlResponse(BaseModel):
    url: str


class TokenExchangeRequest(BaseModel):
    """Request body for POST /auth/github/token."""

    code: str = Field(..., min_length=1)


class TokenExchangeResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
