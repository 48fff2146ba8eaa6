from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from common.core.config import Settings, get_settings
from common.core.exceptions import AppException, ValidationError
from common.core.telemetry import get_logger, trace_span
from common.providers.sheets.factory import get_sheets_backend
from common.providers.sheets.interface import SheetsBackendInterface
from common.providers.sheets.models import EmailRequest, ShareLogRequest
from packages.documents.models.domain.document import DocumentItem
from packages.sharing.models.domain.share import (
    ShareHistoryEntry,
    ShareMethod,
    ShareOutcome,
    ShareRequest,
    ShareType,
)
from packages.sharing.services.message_composer import MessageComposer
from packages.sharing.utils.links import build_whatsapp_url
from packages.store.app_state import AppState

logger = get_logger(__name__)

NOT_AVAILABLE = "N/A"


def format_share_number(number: int) -> str:
    return f"SH-{number:03d}"


class ShareService:
    """Sends a share by email and/or WhatsApp and records it in the share history."""

    def __init__(
        self,
        backend: SheetsBackendInterface,
        state: AppState,
        composer: MessageComposer,
        close_delay_seconds: float = 1.5,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.backend = backend
        self.state = state
        self.composer = composer
        self.close_delay_seconds = close_delay_seconds
        self._clock = clock

    @trace_span
    async def share(self, request: ShareRequest) -> ShareOutcome:
        """
        Share one or more documents.

        Email goes through the remote endpoint and can fail. WhatsApp only builds
        a pre-filled compose link, so it always counts as sent.

        Raises:
            ValidationError: No documents, or email selected without an address
        """
        if not request.documents:
            raise ValidationError("Select at least one document to share.")
        if request.share_type.includes_email and not request.email.strip():
            raise ValidationError("Please enter a valid email address")

        email_sent = False
        email_error: Optional[str] = None
        if request.share_type.includes_email:
            email_sent, email_error = await self._send_email(request)
            if not email_sent and request.share_type == ShareType.EMAIL:
                return ShareOutcome(email_sent=False, email_error=email_error)

        whatsapp_url: Optional[str] = None
        if request.share_type.includes_whatsapp:
            whatsapp_url = await self._share_whatsapp(request)

        history = self._build_history(
            request, email=email_sent, whatsapp=whatsapp_url is not None
        )
        self.state.add_share_history(history)
        self._mark_shared(request.documents)
        logger.info(
            f"Shared {len(request.documents)} document(s) via {request.share_type}, "
            f"{len(history)} history record(s) added"
        )

        return ShareOutcome(
            email_sent=email_sent,
            email_error=email_error,
            whatsapp_url=whatsapp_url,
            history=history,
            close_after_seconds=self.close_delay_seconds,
        )

    async def _send_email(self, request: ShareRequest) -> Tuple[bool, Optional[str]]:
        documents = request.documents
        first = documents[0]
        email = EmailRequest(
            to=request.email.strip(),
            subject=request.subject or self.composer.default_subject(documents),
            body=self.composer.email_html(request),
            is_html=True,
            document_name=(
                f"{len(documents)} Documents" if request.is_batch else first.document_name
            ),
            recipient_name=request.recipient_name,
            document_type=first.document_type or None,
            category=first.category or None,
            serial_no=first.serial_no or None,
        )
        try:
            result = await self.backend.send_email(email)
        except AppException as e:
            logger.error(f"Email sending error: {e}")
            return False, "Failed to send email"

        if not result.success:
            logger.warning(f"Email to {email.to} rejected: {result.error}")
            return False, result.error or "Failed to send email"
        return True, None

    async def _share_whatsapp(self, request: ShareRequest) -> str:
        for document in request.documents:
            try:
                await self.backend.log_share(
                    ShareLogRequest(
                        recipient_name=request.recipient_name,
                        document_name=document.document_name,
                        document_type=document.document_type or None,
                        category=document.category or None,
                        serial_no=document.serial_no or None,
                        file_content=document.file_url,
                        share_method=ShareMethod.WHATSAPP.value,
                        number=request.whatsapp,
                    )
                )
            except AppException as e:
                # Delivery is up to the WhatsApp client; a missing log line doesn't undo it
                logger.warning(f"Could not log WhatsApp share of {document.document_name}: {e}")
        return build_whatsapp_url(self.composer.whatsapp_text(request))

    def _build_history(
        self, request: ShareRequest, email: bool, whatsapp: bool
    ) -> List[ShareHistoryEntry]:
        now = self._clock()
        stamp = int(now.timestamp() * 1000)
        date_time = now.strftime("%Y-%m-%d %H:%M")
        next_number = self.state.next_share_number
        count = len(request.documents)
        # Batch WhatsApp numbers always sit after the email block, even when no
        # email went out; a single document only shifts when its email was sent
        whatsapp_offset = count if (email or request.is_batch) else 0

        entries: List[ShareHistoryEntry] = []
        for index, document in enumerate(request.documents):
            if email:
                entries.append(
                    self._history_entry(
                        request,
                        document,
                        entry_id=f"share-{stamp}-{index}-email",
                        number=next_number + index,
                        date_time=date_time,
                        method=ShareMethod.EMAIL,
                        contact=request.email.strip(),
                    )
                )
            if whatsapp:
                entries.append(
                    self._history_entry(
                        request,
                        document,
                        entry_id=f"share-{stamp}-{index}-whatsapp",
                        number=next_number + index + whatsapp_offset,
                        date_time=date_time,
                        method=ShareMethod.WHATSAPP,
                        contact=request.whatsapp,
                    )
                )
        return entries

    @staticmethod
    def _history_entry(
        request: ShareRequest,
        document: DocumentItem,
        entry_id: str,
        number: int,
        date_time: str,
        method: ShareMethod,
        contact: str,
    ) -> ShareHistoryEntry:
        return ShareHistoryEntry(
            id=entry_id,
            share_no=format_share_number(number),
            date_time=date_time,
            doc_serial=document.serial_no or NOT_AVAILABLE,
            doc_name=document.document_name,
            doc_file=document.file_url or NOT_AVAILABLE,
            shared_via=method,
            recipient_name=request.recipient_name or NOT_AVAILABLE,
            contact_info=contact,
        )

    def _mark_shared(self, documents: List[DocumentItem]) -> None:
        now = self._clock()
        expiry = (now + timedelta(days=self.composer.expiry_days)).date().isoformat()
        known_ids = {d.id for d in self.state.documents}
        for document in documents:
            if document.id in known_ids:
                self.state.update_document(
                    document.id,
                    last_shared_at=now.strftime("%Y-%m-%d %H:%M"),
                    shared_expiry_date=expiry,
                )


def get_share_service(state: AppState, settings: Optional[Settings] = None) -> ShareService:
    """Get share service bound to one session's store."""
    settings = settings or get_settings()
    return ShareService(
        backend=get_sheets_backend(),
        state=state,
        composer=MessageComposer(expiry_days=settings.share_link_expiry_days),
        close_delay_seconds=settings.share_close_delay_seconds,
    )
