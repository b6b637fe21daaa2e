from datetime import datetime
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, Field

from bookstore.application.identity.use_cases import AuthenticationUseCase
from bookstore.core import container
from bookstore.domain.identity import InvalidCredentialsError
from bookstore.exceptions import credentials_exception
from bookstore.infrastructure.common.di import inject_use_case
from bookstore.infrastructure.common.rate_limiting import api_rate_limit

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


class LoginResponse(BaseModel):
    """Issued bearer token and what it grants."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="Seconds until the token expires")
    expires_at: datetime
    authorities: list[str]
    username: str


@router.post("/login", response_model=LoginResponse)
@api_rate_limit
def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    use_case: Annotated[
        AuthenticationUseCase, Depends(inject_use_case(container.authentication_use_case))
    ],
) -> LoginResponse:
    """
    Exchange a username and password for a signed access token.

    Raises:
        HTTPException: 401 if the credentials are invalid
    """
    try:
        result = use_case.login(credentials.username, credentials.password)
    except InvalidCredentialsError:
        raise credentials_exception() from None

    return LoginResponse(
        access_token=result.token.access_token,
        expires_in=result.token.expires_in,
        expires_at=result.token.expires_at,
        authorities=result.account.authorities,
        username=result.account.username,
    )
