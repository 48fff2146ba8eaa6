"""
Document batch submission.

Two strict phases: every attached file is uploaded first, one at a time and
paced by the upload rate limiter, then each entry is inserted in order. Upload
failures degrade to "no file"; an insert failure stops the batch and leaves
the already inserted entries in place.
"""

from datetime import date, datetime
from typing import Callable, List, Optional, Sequence

from common.core.config import Settings, get_settings
from common.core.constants import SheetName
from common.core.exceptions import AppException, PartialSubmissionError
from common.core.telemetry import get_logger, log_span_event, trace_span
from common.providers.rate_limiter.factory import get_upload_rate_limiter
from common.providers.rate_limiter.interface import RateLimiterInterface
from common.providers.sheets.factory import get_sheets_backend
from common.providers.sheets.interface import SheetsBackendInterface
from common.providers.sheets.models import FileUploadRequest
from packages.documents.models.domain.document import (
    PENDING_SERIAL,
    DocumentEntry,
    DocumentItem,
)
from packages.documents.models.domain.submission import SubmissionResult, UploadOutcome
from packages.documents.services.entry_batch import validate_entries
from packages.documents.utils.sheet_rows import build_document_row
from packages.store.app_state import AppState

logger = get_logger(__name__)


class DocumentSubmissionService:
    """Runs the upload-then-insert flow for a batch of entries."""

    def __init__(
        self,
        backend: SheetsBackendInterface,
        state: AppState,
        rate_limiter: RateLimiterInterface,
        folder_id: Optional[str],
        max_entries: int = 10,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.backend = backend
        self.state = state
        self.rate_limiter = rate_limiter
        self.folder_id = folder_id
        self.max_entries = max_entries
        self._clock = clock

    @trace_span
    async def submit(self, entries: Sequence[DocumentEntry]) -> SubmissionResult:
        """
        Submit a batch of document entries.

        Args:
            entries: Form rows in display order

        Returns:
            Saved documents, per-entry upload outcomes and the master data count

        Raises:
            ValidationError: If any entry fails validation (nothing is sent)
            PartialSubmissionError: If an insert fails; earlier entries stay saved
        """
        entries = list(entries)
        validate_entries(entries, self.max_entries)

        logger.info(f"Submitting {len(entries)} document(s)")
        uploads = await self._upload_files(entries)
        log_span_event(
            "Upload phase finished",
            {
                "uploaded": str(sum(1 for u in uploads if u.file_url)),
                "warnings": str(sum(1 for u in uploads if u.warning)),
            },
        )

        saved: List[DocumentItem] = []
        master_data_added = 0
        for index, entry in enumerate(entries):
            if self._register_master_data(entry):
                master_data_added += 1

            try:
                document = await self._insert_entry(entry, uploads[index])
            except AppException as e:
                logger.error(
                    f"Insert failed for document {index + 1} ({entry.document_name}): {e}. "
                    f"{len(saved)} document(s) already saved, {len(entries) - index} not attempted"
                )
                raise PartialSubmissionError(
                    f"Saving document {index + 1} failed: {e}",
                    failed_index=index,
                    saved_documents=saved,
                ) from e
            saved.append(document)

        logger.info(f"{len(saved)} document(s) added successfully")
        return SubmissionResult(
            documents=saved, uploads=uploads, master_data_added=master_data_added
        )

    async def _upload_files(self, entries: List[DocumentEntry]) -> List[UploadOutcome]:
        outcomes: List[UploadOutcome] = []
        for index, entry in enumerate(entries):
            if entry.file is None:
                outcomes.append(UploadOutcome(index=index))
                continue
            outcomes.append(await self._upload_one(index, entry))
        return outcomes

    async def _upload_one(self, index: int, entry: DocumentEntry) -> UploadOutcome:
        file = entry.file
        if not self.folder_id:
            logger.warning(
                f"No upload folder configured, saving {file.file_name} without file"
            )
            return UploadOutcome(
                index=index,
                file_name=file.file_name,
                warning=f"File {file.file_name} was not uploaded: no upload folder configured.",
            )

        await self.rate_limiter.acquire()
        logger.info(f"Uploading file {index + 1}: {file.file_name}")
        try:
            response = await self.backend.upload_file(
                SheetName.DOCUMENTS.value,
                FileUploadRequest(
                    base64_data=file.to_data_url(),
                    file_name=file.file_name,
                    mime_type=file.mime_type,
                    folder_id=self.folder_id,
                ),
            )
        except AppException as e:
            logger.error(f"Upload error for file {index + 1}: {e}")
            return UploadOutcome(
                index=index,
                file_name=file.file_name,
                warning=f"Failed to upload {file.file_name}, saving without file.",
            )

        if not response.file_url:
            logger.error(
                f"Upload failed for file {index + 1}: {response.error or 'no fileUrl returned'}"
            )
            return UploadOutcome(
                index=index,
                file_name=file.file_name,
                warning=f"File {file.file_name} upload failed. Saving without file.",
            )

        logger.info(f"Upload successful for file {index + 1}")
        return UploadOutcome(
            index=index, file_name=file.file_name, file_url=response.file_url
        )

    def _register_master_data(self, entry: DocumentEntry) -> bool:
        if not (entry.name and entry.document_type and entry.category):
            return False
        added = self.state.add_master_data(
            company_name=entry.name,
            document_type=entry.document_type,
            category=entry.category,
        )
        return added is not None

    async def _insert_entry(
        self, entry: DocumentEntry, upload: UploadOutcome
    ) -> DocumentItem:
        now = self._clock()
        row = build_document_row(entry, upload.file_url, now)

        document = DocumentItem(
            serial_no=PENDING_SERIAL,
            document_name=entry.document_name,
            document_type=entry.document_type or "",
            category=entry.category or "",
            name=entry.name or "",
            company_name=entry.company_name or "",
            needs_renewal=entry.needs_renewal,
            renewal_date=entry.renewal_date if entry.needs_renewal else None,
            file_name=entry.file_name or None,
            file_url=upload.file_url,
            date=date.isoformat(now.date()),
            issue_date=entry.issue_date,
            concern_person_name=entry.concern_person_name,
            concern_person_mobile=entry.concern_person_mobile,
            concern_person_department=entry.concern_person_department,
        )

        response = await self.backend.insert_row(SheetName.DOCUMENTS.value, row)

        # The serial number becomes authoritative only now
        if response.serial_no:
            document = document.model_copy(update={"serial_no": str(response.serial_no)})
        logger.info(f"Document {entry.document_name} saved with serial {document.serial_no}")
        return self.state.add_document(document)


def get_document_submission_service(
    state: AppState, settings: Optional[Settings] = None
) -> DocumentSubmissionService:
    """Get a submission service bound to one session's store."""
    settings = settings or get_settings()
    return DocumentSubmissionService(
        backend=get_sheets_backend(),
        state=state,
        rate_limiter=get_upload_rate_limiter(settings),
        folder_id=settings.google_drive_folder_id,
        max_entries=settings.max_entries_per_submission,
    )
