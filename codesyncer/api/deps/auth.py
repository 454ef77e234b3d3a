"""GitHub token extraction for request handlers.

The token arrives as an `Authorization: Bearer <token>` header and is used
for the duration of the request only; it is never stored or logged.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from codesyncer.core.exceptions import UnauthorizedError

security = HTTPBearer(auto_error=False)


async def get_github_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Return the caller's GitHub token, raising 401 if it is missing."""
    if not credentials or not credentials.credentials:
        raise UnauthorizedError()
    return credentials.credentials


GitHubToken = Annotated[str, Depends(get_github_token)]
