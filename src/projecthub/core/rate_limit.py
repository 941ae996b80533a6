"""Rate limiting configuration.

Endpoint decorators use the shared limiter below. Storage is in-memory (per
process); the limiter is disabled in the testing environment.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.projecthub.core.config import get_settings
from src.projecthub.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Rate limit key from client IP only.

    Never derive the key from unauthenticated headers; rotating them would
    create unlimited buckets.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the rate limiter, disabled when APP_ENV=testing."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    return Limiter(key_func=get_rate_limit_key)


limiter = create_limiter()
