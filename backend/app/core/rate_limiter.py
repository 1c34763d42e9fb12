"""
Rate Limiting for the Alumni Portal API
=======================================
slowapi limiter keyed by authenticated user, falling back to client IP.
Only routes decorated with `limiter.limit` are limited.

Sensitive endpoints carry their own limits:
- /auth/login: 5 req/min (brute force protection)
- /auth/register: 3 req/min
- /auth/forgot-password: 3 req/min (each call mails a new password)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging_config import logger


def get_user_identifier(request: Request) -> str:
    """
    Get rate limit key: authenticated user ID when known, otherwise IP address.
    """
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_user_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Return a JSON 429 carrying the tripped limit and a Retry-After header.
    """
    item = exc.limit.limit
    retry_after = item.get_expiry()

    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "detail": str(exc.detail),
            "retry_after_seconds": retry_after,
        },
        headers={
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": str(item.amount),
        }
    )
