from typing import Annotated, Callable, Optional
from fastapi import Depends, HTTPException, status, Header

from common.core.telemetry import get_logger
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.models.domain.session import Session
from packages.auth.services.session_service import SessionService, get_session_service

logger = get_logger(__name__)


async def get_current_session(
    authorization: Annotated[Optional[str], Header()] = None,
    session_service: SessionService = Depends(get_session_service),
) -> Session:
    """Resolve the session from a ``Bearer`` token."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing or invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization.split(" ", 1)[1]
    session = await session_service.get_session(token)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired or invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


async def get_current_user(
    session: Session = Depends(get_current_session),
) -> AuthenticatedUser:
    """Get current authenticated user."""
    return session.user


def require_permission(permission: str) -> Callable:
    """Dependency factory that rejects users lacking ``permission``."""

    async def _check(
        session: Session = Depends(get_current_session),
    ) -> Session:
        if not session.user.has_permission(permission):
            logger.info(
                f"User {session.user.user_id} denied: missing permission {permission}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission '{permission}' required",
            )
        return session

    return _check
