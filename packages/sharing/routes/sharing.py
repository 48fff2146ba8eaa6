from fastapi import APIRouter, Depends, HTTPException, status

from common.core.exceptions import NotFoundError, ValidationError
from common.core.telemetry import get_logger
from packages.auth.dependencies import require_permission
from packages.auth.models.domain.session import Session
from packages.documents.services.document_service import get_document_service
from packages.sharing.models.domain.share import ShareRequest
from packages.sharing.models.schemas.share import (
    ShareDocumentsRequest,
    ShareHistoryListResponse,
    ShareHistoryResponse,
    ShareResponse,
)
from packages.sharing.services.share_service import get_share_service

router = APIRouter()
logger = get_logger(__name__)

require_documents = require_permission("Document")


@router.post("/share", response_model=ShareResponse)
async def share_documents(
    request: ShareDocumentsRequest,
    session: Session = Depends(require_documents),
):
    """
    Share documents by email, WhatsApp or both.

    A failed email with share type ``email`` comes back with ``completed``
    false and no history; otherwise the caller may close after
    ``closeAfterSeconds``.
    """
    try:
        documents = get_document_service(session.state).get_documents(
            request.document_ids
        )
        outcome = await get_share_service(session.state).share(
            ShareRequest(
                share_type=request.share_type,
                documents=documents,
                recipient_name=request.recipient_name,
                email=request.email,
                whatsapp=request.whatsapp,
                subject=request.subject,
                message=request.message,
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ShareResponse(
        completed=outcome.completed,
        email_sent=outcome.email_sent,
        email_error=outcome.email_error,
        whatsapp_url=outcome.whatsapp_url,
        history=[ShareHistoryResponse.model_validate(h) for h in outcome.history],
        close_after_seconds=outcome.close_after_seconds,
    )


@router.get("/history", response_model=ShareHistoryListResponse)
async def get_share_history(session: Session = Depends(require_documents)):
    history = session.state.share_history
    return ShareHistoryListResponse(
        history=[ShareHistoryResponse.model_validate(h) for h in history],
        total_count=len(history),
    )
