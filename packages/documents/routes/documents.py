from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from common.core.config import get_settings
from common.core.exceptions import (
    NotFoundError,
    PartialSubmissionError,
    RemoteServiceError,
    ValidationError,
)
from common.core.telemetry import get_logger, trace_span
from packages.auth.dependencies import require_permission
from packages.auth.models.domain.session import Session
from packages.documents.models.schemas.document import (
    DocumentBatchRequest,
    DocumentBatchResponse,
    DocumentListResponse,
    DocumentResponse,
    DraftEntryResponse,
    DraftEntryUpdate,
    DraftResponse,
    FilePayload,
    MasterDataOptionsResponse,
    UploadOutcomeResponse,
)
from packages.documents.services.document_service import get_document_service
from packages.documents.services.document_submission_service import (
    get_document_submission_service,
)
from packages.documents.services.entry_batch import DocumentEntryBatch
from packages.documents.services.master_data_service import get_master_data_service

router = APIRouter()
logger = get_logger(__name__)

require_documents = require_permission("Document")


@router.get("/", response_model=DocumentListResponse)
async def list_documents(
    status_filter: Optional[str] = Query(
        None, description="Filter by status", alias="status"
    ),
    category: Optional[str] = Query(None, description="Filter by category"),
    session: Session = Depends(require_documents),
):
    """List documents cached in the session's store."""
    document_service = get_document_service(session.state)
    documents = document_service.list_documents(status=status_filter, category=category)
    return DocumentListResponse(
        documents=[DocumentResponse.model_validate(d) for d in documents],
        total_count=len(documents),
    )


@router.post("/refresh", response_model=DocumentListResponse)
async def refresh_documents(session: Session = Depends(require_documents)):
    """Reload the document list from the remote sheet."""
    document_service = get_document_service(session.state)
    try:
        documents = await document_service.refresh()
    except RemoteServiceError as e:
        logger.error(f"Document refresh failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return DocumentListResponse(
        documents=[DocumentResponse.model_validate(d) for d in documents],
        total_count=len(documents),
    )


@router.post(
    "/batch",
    response_model=DocumentBatchResponse,
    status_code=status.HTTP_201_CREATED,
)
@trace_span
async def submit_documents(
    request: DocumentBatchRequest,
    session: Session = Depends(require_documents),
):
    """Upload attached files, then insert every entry in order."""
    settings = get_settings()
    try:
        batch = DocumentEntryBatch.from_entries(
            [entry.to_domain() for entry in request.entries],
            max_entries=settings.max_entries_per_submission,
            max_file_size=settings.max_file_size_bytes,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return await _submit(session, batch)


async def _submit(session: Session, batch: DocumentEntryBatch) -> DocumentBatchResponse:
    submission_service = get_document_submission_service(session.state)
    try:
        result = await submission_service.submit(batch.entries)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PartialSubmissionError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "message": str(e),
                "failedIndex": e.failed_index,
                "savedCount": len(e.saved_documents),
                "savedDocuments": [
                    DocumentResponse.model_validate(d).model_dump(by_alias=True)
                    for d in e.saved_documents
                ],
            },
        )

    return DocumentBatchResponse(
        documents=[DocumentResponse.model_validate(d) for d in result.documents],
        uploads=[UploadOutcomeResponse.model_validate(u) for u in result.uploads],
        warnings=result.warnings,
        master_data_added=result.master_data_added,
    )


@router.get("/master-data/options", response_model=MasterDataOptionsResponse)
async def get_master_data_options(session: Session = Depends(require_documents)):
    """Autocomplete lists for document type, category and company."""
    options = get_master_data_service(session.state).options()
    return MasterDataOptionsResponse.model_validate(options)


@router.post("/master-data/refresh", response_model=MasterDataOptionsResponse)
async def refresh_master_data(session: Session = Depends(require_documents)):
    master_data_service = get_master_data_service(session.state)
    try:
        await master_data_service.refresh()
    except RemoteServiceError as e:
        logger.error(f"Master data refresh failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return MasterDataOptionsResponse.model_validate(master_data_service.options())


def _draft(session: Session) -> DocumentEntryBatch:
    if session.draft is None:
        settings = get_settings()
        session.draft = DocumentEntryBatch(
            max_entries=settings.max_entries_per_submission,
            max_file_size=settings.max_file_size_bytes,
        )
    return session.draft


def _draft_response(draft: DocumentEntryBatch) -> DraftResponse:
    return DraftResponse(
        entries=[DraftEntryResponse.from_entry(e) for e in draft.entries],
        max_entries=draft.max_entries,
        can_add_entry=len(draft) < draft.max_entries,
    )


@router.get("/draft", response_model=DraftResponse)
async def get_draft(session: Session = Depends(require_documents)):
    """The document form in progress; starts as a single blank row."""
    return _draft_response(_draft(session))


@router.delete("/draft", response_model=DraftResponse)
async def reset_draft(session: Session = Depends(require_documents)):
    session.draft = None
    return _draft_response(_draft(session))


@router.post(
    "/draft/entries",
    response_model=DraftEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_draft_entry(session: Session = Depends(require_documents)):
    """Add a row copied from the last one, without its document name and file."""
    try:
        entry = _draft(session).add_entry()
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return DraftEntryResponse.from_entry(entry)


@router.patch("/draft/entries/{entry_id}", response_model=DraftEntryResponse)
async def update_draft_entry(
    entry_id: str,
    request: DraftEntryUpdate,
    session: Session = Depends(require_documents),
):
    try:
        entry = _draft(session).update_entry(entry_id, **request.changes())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DraftEntryResponse.from_entry(entry)


@router.delete("/draft/entries/{entry_id}", response_model=DraftResponse)
async def remove_draft_entry(
    entry_id: str, session: Session = Depends(require_documents)
):
    draft = _draft(session)
    try:
        draft.remove_entry(entry_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _draft_response(draft)


@router.put("/draft/entries/{entry_id}/file", response_model=DraftEntryResponse)
async def attach_draft_file(
    entry_id: str,
    request: FilePayload,
    session: Session = Depends(require_documents),
):
    try:
        entry = _draft(session).attach_file(entry_id, request.to_attachment())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return DraftEntryResponse.from_entry(entry)


@router.delete("/draft/entries/{entry_id}/file", response_model=DraftEntryResponse)
async def detach_draft_file(
    entry_id: str, session: Session = Depends(require_documents)
):
    try:
        entry = _draft(session).update_entry(entry_id, file=None)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DraftEntryResponse.from_entry(entry)


@router.post(
    "/draft/submit",
    response_model=DocumentBatchResponse,
    status_code=status.HTTP_201_CREATED,
)
@trace_span
async def submit_draft(session: Session = Depends(require_documents)):
    """Submit the form in progress; it is cleared only when every entry was saved."""
    response = await _submit(session, _draft(session))
    session.draft = None
    return response


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(document_id: str, session: Session = Depends(require_documents)):
    try:
        document = get_document_service(session.state).get_document(document_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DocumentResponse.model_validate(document)
