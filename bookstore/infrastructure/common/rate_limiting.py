"""
Per-client rate limiting for the ``/api`` routes.

All API endpoints share one fixed-window budget per client IP
(``RATE_LIMIT``, 100 requests per minute by default). Successful
responses report what is left in ``X-Rate-Limit-Remaining``.
"""

from pathlib import Path

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from bookstore.config import get_settings

logger = structlog.get_logger(__name__)

settings = get_settings()

RATE_LIMIT_SCOPE = "api"
RATE_LIMIT_EXCEEDED_MESSAGE = "Rate limit exceeded. Try again later."

# Header names for the remaining budget, limit and window reset
LIMITER_CONFIG_FILE = Path(__file__).with_name("rate_limit.env")


def get_client_ip(request: Request) -> str:
    """
    Identify the client behind any proxies.

    Order: first ``X-Forwarded-For`` hop, then ``X-Real-IP``, then the
    socket peer address.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("X-Real-IP")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_ip,
    enabled=settings.RATE_LIMIT_ENABLED,
    headers_enabled=True,
    config_filename=str(LIMITER_CONFIG_FILE),
)

# Decorator applied to every /api endpoint; the shared scope gives them one budget
api_rate_limit = limiter.shared_limit(settings.RATE_LIMIT, scope=RATE_LIMIT_SCOPE)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Reject an over-budget request with 429 and a retry hint."""
    logger.warning(
        "rate_limit_exceeded", client_ip=get_client_ip(request), path=request.url.path
    )
    return JSONResponse(
        status_code=429,
        content={"error": RATE_LIMIT_EXCEEDED_MESSAGE},
        headers={"X-Rate-Limit-Retry-After": str(settings.RATE_LIMIT_RETRY_AFTER_SECONDS)},
    )
