import secrets
from typing import Optional

from common.core.config import get_settings
from common.core.telemetry import get_logger
from common.providers.caching.factory import get_cache_provider
from common.providers.caching.interface import CacheInterface
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.models.domain.session import Session

logger = get_logger(__name__)

SESSION_KEY_PREFIX = "session:"


class SessionService:
    """Issues opaque bearer tokens and keeps each session's local store alive."""

    def __init__(self, cache: CacheInterface, ttl_seconds: int):
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def _key(token: str) -> str:
        return f"{SESSION_KEY_PREFIX}{token}"

    async def create_session(self, user: AuthenticatedUser) -> Session:
        session = Session(token=secrets.token_urlsafe(32), user=user)
        await self.cache.set(self._key(session.token), session, ttl=self.ttl_seconds)
        logger.info(f"Created session for user {user.user_id}")
        return session

    async def get_session(self, token: str) -> Optional[Session]:
        return await self.cache.get(self._key(token))

    async def end_session(self, token: str) -> bool:
        ended = await self.cache.delete(self._key(token))
        if ended:
            logger.info("Session ended")
        return ended


def get_session_service() -> SessionService:
    """Get session service instance."""
    return SessionService(get_cache_provider(), get_settings().session_ttl_seconds)
