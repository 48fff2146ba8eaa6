from fastapi import APIRouter, Depends

from common.core.telemetry import get_logger
from packages.auth.dependencies import get_current_session
from packages.auth.models.domain.session import Session
from packages.store.app_state import AppState, AppStateSnapshot
from packages.store.models.schemas.snapshot import StoreSnapshot

router = APIRouter()
logger = get_logger(__name__)


@router.get("/snapshot", response_model=StoreSnapshot)
async def get_snapshot(session: Session = Depends(get_current_session)):
    """Export the session's store so the client can persist it."""
    return StoreSnapshot.model_validate(session.state.snapshot().model_dump())


@router.put("/snapshot", response_model=StoreSnapshot)
async def restore_snapshot(
    snapshot: StoreSnapshot,
    session: Session = Depends(get_current_session),
):
    """Replace the session's store with a previously exported one."""
    session.state = AppState.from_snapshot(
        AppStateSnapshot.model_validate(snapshot.model_dump())
    )
    logger.info(
        f"Restored store for user {session.user.user_id}: "
        f"{len(session.state.documents)} documents, "
        f"{len(session.state.share_history)} share records"
    )
    return StoreSnapshot.model_validate(session.state.snapshot().model_dump())
