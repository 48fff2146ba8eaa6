from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from common.core.exceptions import (
    AuthenticationError,
    MissingCredentialsError,
    RemoteServiceError,
)
from common.core.telemetry import get_logger
from common.providers.rate_limiter.limiter import limiter
from packages.auth.dependencies import get_current_session, get_current_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.models.domain.session import Session
from packages.auth.models.schemas.auth import LoginRequest, LoginResponse, UserResponse
from packages.auth.services.credential_service import get_credential_service
from packages.auth.services.session_service import get_session_service

router = APIRouter()
logger = get_logger(__name__)


@router.post("/login", response_model=LoginResponse)
@limiter.limit("10/minute")
async def login(request: Request, credentials: LoginRequest):
    """Check credentials against the remote sheet and open a session."""
    credential_service = get_credential_service()
    try:
        user = await credential_service.authenticate(
            credentials.username, credentials.password
        )
    except MissingCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except RemoteServiceError as e:
        logger.error(f"Login failed, credentials sheet unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Login failed. Please check your connection.",
        )

    session = await get_session_service().create_session(user)
    return LoginResponse(
        token=session.token, user=UserResponse.model_validate(user)
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(session: Session = Depends(get_current_session)):
    """End the session; its local store goes with it."""
    await get_session_service().end_session(session.token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: AuthenticatedUser = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)
