import base64
import uuid
from enum import StrEnum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# Placeholder until the insert response hands back the real serial number.
# Never unique: many local documents can carry it at the same time.
PENDING_SERIAL = "Pending"


class DocumentStatus(StrEnum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


def generate_local_id() -> str:
    return uuid.uuid4().hex[:9]


class FileAttachment(BaseModel):
    """A file picked in the form; only its remote URL is kept after upload."""

    file_name: str
    mime_type: str = "application/octet-stream"
    content: bytes = Field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)

    def to_data_url(self) -> str:
        """Encode as ``data:<mime>;base64,<payload>``, the format the upload action expects."""
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class DocumentEntry(BaseModel):
    """One in-progress document form row before submission."""

    id: str = Field(default_factory=generate_local_id)
    document_name: str = ""
    document_type: str = ""
    category: str = ""
    name: str = ""  # Person, director or company name depending on category
    company_name: str = ""  # Company picked from the dropdown
    needs_renewal: bool = False
    renewal_date: Optional[str] = None  # YYYY-MM-DD
    file: Optional[FileAttachment] = None
    issue_date: Optional[str] = None  # YYYY-MM-DD
    concern_person_name: str = ""
    concern_person_mobile: str = ""
    concern_person_department: str = ""

    @property
    def file_name(self) -> str:
        return self.file.file_name if self.file else ""


class DocumentItem(BaseModel):
    """A registered document as cached in the local store."""

    id: str = Field(default_factory=generate_local_id)
    serial_no: str = PENDING_SERIAL
    document_name: str
    document_type: str = ""
    category: str = ""
    name: str = ""
    company_name: str = ""
    needs_renewal: bool = False
    renewal_date: Optional[str] = None
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    date: str = ""  # Local creation date, YYYY-MM-DD
    status: str = DocumentStatus.ACTIVE.value
    issue_date: Optional[str] = None
    concern_person_name: str = ""
    concern_person_mobile: str = ""
    concern_person_department: str = ""
    shared_expiry_date: Optional[str] = None
    last_shared_at: str = ""

    model_config = ConfigDict(from_attributes=True)

    @property
    def has_resolved_serial(self) -> bool:
        return bool(self.serial_no) and self.serial_no != PENDING_SERIAL
