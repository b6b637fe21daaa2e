"""FastAPI dependencies for authentication and role checks."""

from collections.abc import Callable
from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBasic,
    HTTPBasicCredentials,
    HTTPBearer,
)

from bookstore.config import Settings, get_settings
from bookstore.core import container
from bookstore.domain.identity import InvalidCredentialsError, Principal
from bookstore.exceptions import (
    BASIC_CHALLENGE,
    BEARER_CHALLENGE,
    AccessDeniedException,
    credentials_exception,
)
from bookstore.infrastructure.common.di import provide
from bookstore.infrastructure.identity.services import ADMIN_ROLE, USER_ROLE

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by /api/auth/login")
basic_scheme = HTTPBasic(auto_error=False, description="Used when SECURITY_PROFILE=basic")


def get_current_principal(
    settings: Annotated[Settings, Depends(get_settings)],
    bearer: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    basic: Annotated[HTTPBasicCredentials | None, Depends(basic_scheme)],
) -> Principal:
    """
    Authenticate the caller with the active security profile.

    The ``jwt`` profile accepts only bearer tokens and the ``basic``
    profile only HTTP Basic credentials.

    Raises:
        HTTPException: 401 if credentials are missing or invalid
    """
    use_case = provide(container.authentication_use_case)

    if settings.SECURITY_PROFILE == "basic":
        if basic is None:
            raise credentials_exception(BASIC_CHALLENGE)
        try:
            return use_case.authenticate_basic(basic.username, basic.password)
        except InvalidCredentialsError:
            raise credentials_exception(BASIC_CHALLENGE) from None

    if bearer is None:
        raise credentials_exception(BEARER_CHALLENGE)
    try:
        return use_case.authenticate_token(bearer.credentials)
    except InvalidCredentialsError:
        logger.info("invalid_bearer_token")
        raise credentials_exception(f'{BEARER_CHALLENGE} error="invalid_token"') from None


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def require_roles(*roles: str) -> Callable[[Principal], Principal]:
    """Dependency factory granting access to callers holding any of ``roles``."""

    def dependency(principal: CurrentPrincipal) -> Principal:
        if not principal.has_any_role(*roles):
            logger.warning(
                "access_denied", username=principal.username, required_roles=list(roles)
            )
            raise AccessDeniedException
        return principal

    return dependency


require_admin = require_roles(ADMIN_ROLE)
require_reader = require_roles(ADMIN_ROLE, USER_ROLE)

AdminPrincipal = Annotated[Principal, Depends(require_admin)]
ReaderPrincipal = Annotated[Principal, Depends(require_reader)]
