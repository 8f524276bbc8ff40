"""
Rate Limiting Service

Per-client rate limiting using slowapi with in-process (memory) storage.

Rate Limit Tiers:
=================
- Default (reads): settings.rate_limit_default
- Registration and login: settings.rate_limit_auth
- Review mutations: settings.rate_limit_write

Set RATE_LIMIT_ENABLED=false to switch it off (the test suite does).
The limiter is process-wide; create_app() applies its settings to it
through configure_limiter().
"""

import logging
from collections.abc import Callable

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from book_catalog.config import Settings, get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def get_client_ip(request: Request) -> str:
    """
    Get client IP address for rate limiting.

    Honours X-Forwarded-For / X-Real-IP when running behind a proxy and
    falls back to the direct connection address.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # X-Forwarded-For can contain multiple IPs; first is the client
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


# -------------------------------------------------------------------------
# Limit Tiers
# -------------------------------------------------------------------------
# Routes are decorated with a tier name, not a fixed string. slowapi calls
# the provider on every request, so configure_limiter() can change the
# limits after the routers have been imported.
_tiers: dict[str, str] = {
    "default": settings.rate_limit_default,
    "auth": settings.rate_limit_auth,
    "write": settings.rate_limit_write,
}


def tier(name: str) -> Callable[[], str]:
    """
    Limit provider for @limiter.limit.

    Usage:
        @limiter.limit(tier("auth"))
        def login(request: Request, ...): ...
    """
    if name not in _tiers:
        raise ValueError(f"Unknown rate limit tier: {name}")

    def provider() -> str:
        return _tiers[name]

    return provider


def create_limiter() -> Limiter:
    """Create the process-wide limiter. Limits come from the tiers only."""
    return Limiter(
        key_func=get_client_ip,
        storage_uri="memory://",
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )


limiter = create_limiter()


def configure_limiter(config: Settings) -> Limiter:
    """
    Apply an application's settings to the process-wide limiter.

    Called by create_app(). Counters are cleared so a new app starts
    with a fresh budget.
    """
    limiter.enabled = config.rate_limit_enabled
    _tiers.update(
        default=config.rate_limit_default,
        auth=config.rate_limit_auth,
        write=config.rate_limit_write,
    )
    limiter.reset()

    logger.info(
        f"Rate limiter configured - enabled: {config.rate_limit_enabled}, "
        f"default: {config.rate_limit_default}, auth: {config.rate_limit_auth}, "
        f"write: {config.rate_limit_write}"
    )

    return limiter


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Return 429 with a Retry-After header when a client exceeds its limit.
    """
    limit_detail = str(exc.detail)

    response = JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please slow down.",
            "limit": limit_detail,
        },
    )
    response.headers["Retry-After"] = str(60)
    response.headers["X-RateLimit-Limit"] = limit_detail

    logger.warning(
        f"Rate limit exceeded for {get_client_ip(request)}: {limit_detail}"
    )

    return response
