"""HTTP-level exceptions raised by the security layer."""

from fastapi import HTTPException
from starlette import status

BEARER_CHALLENGE = "Bearer"
BASIC_CHALLENGE = 'Basic realm="bookstore-api"'


def credentials_exception(challenge: str = BEARER_CHALLENGE) -> HTTPException:
    """401 telling the client which authentication scheme is expected."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Full authentication is required to access this resource",
        headers={"WWW-Authenticate": challenge},
    )


AccessDeniedException = HTTPException(
    status_code=status.HTTP_403_FORBIDDEN,
    detail="Access is denied",
)
