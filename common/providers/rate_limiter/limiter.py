"""Global rate limiter instance for SlowAPI."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from common.core.config import get_settings

# In-memory limits: the service keeps per-session state in process, so a
# single instance is the unit of deployment.
# Multiple limits: both must be satisfied (whichever is hit first applies)
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=get_settings().api_rate_limits,
    storage_uri="memory://",
)
