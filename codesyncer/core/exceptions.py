from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Raised when request validation fails."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
        )


class UnauthorizedError(HTTPException):
    """Raised when no usable GitHub token accompanies the request."""

    def __init__(self, message: str = "GitHub access token required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ServiceUnavailableError(HTTPException):
    """Raised when a feature is not configured on this server."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=message,
        )
