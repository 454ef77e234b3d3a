"""Pydantic schemas for API request/response validation."""

from codesyncer.schemas.auth import (
    AuthorizeUrlResponse,
    GitHubUserResponse,
    TokenExchangeRequest,
    TokenExchangeResponse,
)
from codesyncer.schemas.sync import (
    FileObjectIn,
    FileTreeRequest,
    FileTreeResponse,
    SyncRequest,
    SyncStatusResponse,
    TreeNodeOut,
)

__all__ = [
    "AuthorizeUrlResponse",
    "FileObjectIn",
    "FileTreeRequest",
    "FileTreeResponse",
    "GitHubUserResponse",
    "SyncRequest",
    "SyncStatusResponse",
    "TokenExchangeRequest",
    "TokenExchangeResponse",
    "TreeNodeOut",
]
