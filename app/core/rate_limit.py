"""
In-memory per-IP rate limiter for the authentication endpoints.
"""
import logging
import time
from typing import Dict, List
from fastapi import Request, HTTPException, status

from app.core.config import AUTH_RATE_LIMIT, AUTH_RATE_WINDOW_SECONDS, TRUSTED_PROXIES

logger = logging.getLogger(__name__)

# {(scope, ip): [timestamp, ...]}; keys are dropped once their window empties
rate_limit_store: Dict[tuple, List[float]] = {}


def get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.

    X-Forwarded-For is only honored when the direct peer is a trusted proxy.
    """
    peer = request.client.host if request.client else None

    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded and peer in TRUSTED_PROXIES:
        # First hop is the original client
        return forwarded.split(",")[0].strip()

    return peer or "unknown"


def _sweep(cutoff: float) -> None:
    """Drop every key whose timestamps are all older than cutoff."""
    for key in [k for k, stamps in rate_limit_store.items() if not stamps or stamps[-1] <= cutoff]:
        del rate_limit_store[key]


def check_rate_limit(
    request: Request,
    scope: str,
    max_requests: int = AUTH_RATE_LIMIT,
    window_seconds: int = AUTH_RATE_WINDOW_SECONDS,
) -> None:
    """
    Check if client has exceeded the rate limit for a scope.

    Args:
        request: FastAPI request object
        scope: Bucket name, e.g. "login" or "register"
        max_requests: Maximum number of requests allowed
        window_seconds: Time window in seconds

    Raises:
        HTTPException: 429 if rate limit exceeded
    """
    key = (scope, get_client_ip(request))
    now = time.time()
    cutoff = now - window_seconds

    _sweep(cutoff)
    recent = [ts for ts in rate_limit_store.get(key, []) if ts > cutoff]

    request_count = len(recent)
    if request_count >= max_requests:
        rate_limit_store[key] = recent
        logger.warning(f"Rate limit exceeded: scope={scope}, ip={key[1]} ({request_count} requests in {window_seconds}s)")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests, please try again later"
        )

    recent.append(now)
    rate_limit_store[key] = recent


def rate_limiter(scope: str):
    """Build a FastAPI dependency that rate limits one endpoint scope."""
    def dependency(request: Request) -> None:
        check_rate_limit(request, scope)
    return dependency
