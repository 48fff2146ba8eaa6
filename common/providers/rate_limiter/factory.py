from typing import Optional

from common.core.config import Settings, get_settings
from common.core.constants import RateLimiterType
from common.core.telemetry import get_logger

from .fixed_interval import FixedIntervalRateLimiter, NoopRateLimiter
from .interface import RateLimiterInterface
from .moving_window import MovingWindowRateLimiter

logger = get_logger(__name__)

# Global instance, shared by every session so uploads are paced process-wide
_upload_rate_limiter: Optional[RateLimiterInterface] = None


def _build_upload_rate_limiter(settings: Settings) -> RateLimiterInterface:
    if settings.upload_rate_limiter == RateLimiterType.FIXED_INTERVAL:
        return FixedIntervalRateLimiter(settings.upload_interval_seconds)
    elif settings.upload_rate_limiter == RateLimiterType.MOVING_WINDOW:
        return MovingWindowRateLimiter(settings.upload_rate_limit)
    elif settings.upload_rate_limiter == RateLimiterType.NONE:
        return NoopRateLimiter()
    else:
        raise ValueError(f"Unknown rate limiter: {settings.upload_rate_limiter}")


def get_upload_rate_limiter(settings: Optional[Settings] = None) -> RateLimiterInterface:
    """
    Get the upload rate limiter.

    Built from settings on first use; later calls return the same instance.
    """
    global _upload_rate_limiter

    if _upload_rate_limiter is None:
        settings = settings or get_settings()
        _upload_rate_limiter = _build_upload_rate_limiter(settings)
        logger.info(f"Initialized {settings.upload_rate_limiter.value} upload rate limiter")

    return _upload_rate_limiter
