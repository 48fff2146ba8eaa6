from enum import StrEnum
from typing import List, Optional
from pydantic import BaseModel

from packages.documents.models.domain.document import DocumentItem


class ShareMethod(StrEnum):
    EMAIL = "Email"
    WHATSAPP = "WhatsApp"


class ShareType(StrEnum):
    EMAIL = "email"
    WHATSAPP = "whatsapp"
    BOTH = "both"

    @property
    def includes_email(self) -> bool:
        return self in (ShareType.EMAIL, ShareType.BOTH)

    @property
    def includes_whatsapp(self) -> bool:
        return self in (ShareType.WHATSAPP, ShareType.BOTH)


class ShareHistoryEntry(BaseModel):
    """One share action; append-only."""

    id: str
    share_no: str
    date_time: str  # YYYY-MM-DD HH:MM, UTC
    doc_serial: str
    doc_name: str
    doc_file: str
    shared_via: ShareMethod
    recipient_name: str
    contact_info: str


class ShareRequest(BaseModel):
    """What the share form collects."""

    share_type: ShareType
    documents: List[DocumentItem]
    recipient_name: str = ""
    email: str = ""
    whatsapp: str = ""
    subject: str = ""
    message: Optional[str] = None  # None means "use the default message"

    @property
    def is_batch(self) -> bool:
        return len(self.documents) > 1


class ShareOutcome(BaseModel):
    """Result of a share submission."""

    email_sent: bool = False
    email_error: Optional[str] = None
    whatsapp_url: Optional[str] = None
    history: List[ShareHistoryEntry] = []
    close_after_seconds: Optional[float] = None

    @property
    def completed(self) -> bool:
        return bool(self.history)
