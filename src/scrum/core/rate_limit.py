"""Rate limiting for authentication endpoints.

Limits are per client IP and kept in process memory, so each API replica
counts independently.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.scrum.core.config import get_settings
from src.scrum.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Generate rate limit key from client IP only.

    Never include user-controlled headers in the key: rotating them would
    create unlimited buckets and bypass the limit.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the rate limiter. Disabled in the testing environment."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    return Limiter(key_func=get_rate_limit_key)


limiter = create_limiter()
