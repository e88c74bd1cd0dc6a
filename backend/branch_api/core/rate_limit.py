from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from .responses import error

limiter = Limiter(key_func=get_remote_address)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return error(
        "Too many attempts. Please try again later.",
        status_code=429,
        headers={"Retry-After": "60"},
    )
