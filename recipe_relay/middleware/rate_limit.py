"""Rate limiting using slowapi."""

from fastapi import Request
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address


def get_client_key(request: Request) -> str:
    """
    Rate-limit key: the peer address.

    X-Forwarded-For is set by the client and is not trusted here. Behind a
    proxy, run uvicorn with --proxy-headers and --forwarded-allow-ips so the
    peer address is the proxy's view of the client.
    """
    return get_remote_address(request)


def create_limiter(limit_per_hour: int, enabled: bool = True) -> Limiter:
    """Build an in-memory limiter applying ``limit_per_hour`` to every client."""
    return Limiter(
        key_func=get_client_key,
        default_limits=[f"{limit_per_hour}/hour"],
        storage_uri="memory://",
        enabled=enabled,
    )


def get_rate_limit_exceeded_handler():
    """Get rate limit exceeded handler."""
    return _rate_limit_exceeded_handler


def rate_limit_dependency(request: Request) -> None:
    """
    Rate limit dependency for FastAPI.

    Uses the limiter of the application serving the request.

    Raises:
        RateLimitExceeded: If rate limit is exceeded
    """
    # Evaluated by hand since SlowAPIMiddleware is not installed;
    # `_check_request_limit` raises RateLimitExceeded once the default limit is hit.
    request.app.state.limiter._check_request_limit(request, endpoint_func=None)
