import base64
import binascii
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from common.core.exceptions import ValidationError
from packages.documents.models.domain.document import DocumentEntry, FileAttachment
from packages.documents.services.entry_batch import name_label_for_category

DATA_URL_PREFIX = "data:"


class FilePayload(BaseModel):
    """A file sent inline as base64, optionally wrapped in a data URL."""

    file_name: str
    mime_type: Optional[str] = None
    base64_data: str = Field(repr=False)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_attachment(self) -> FileAttachment:
        """
        Decode into an attachment.

        Raises:
            ValidationError: If the payload is not valid base64
        """
        data = self.base64_data
        mime_type = self.mime_type
        if data.startswith(DATA_URL_PREFIX):
            header, _, data = data.partition(",")
            # data:<mime>;base64
            mime_type = mime_type or header[len(DATA_URL_PREFIX) :].split(";")[0] or None
        try:
            content = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(f"File {self.file_name} is not valid base64") from e
        return FileAttachment(
            file_name=self.file_name,
            mime_type=mime_type or "application/octet-stream",
            content=content,
        )


class DocumentEntryFields(BaseModel):
    document_name: str = ""
    document_type: str = ""
    category: str = ""
    name: str = ""
    company_name: str = ""
    needs_renewal: bool = False
    renewal_date: Optional[str] = None
    issue_date: Optional[str] = None
    concern_person_name: str = ""
    concern_person_mobile: str = ""
    concern_person_department: str = ""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DocumentEntryRequest(DocumentEntryFields):
    file: Optional[FilePayload] = None

    def to_domain(self) -> DocumentEntry:
        return DocumentEntry(
            **self.model_dump(exclude={"file"}),
            file=self.file.to_attachment() if self.file else None,
        )


class DraftEntryUpdate(DocumentEntryFields):
    """Partial edit of a draft row; only fields present in the body are applied."""

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class DocumentBatchRequest(BaseModel):
    entries: List[DocumentEntryRequest]

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DocumentResponse(BaseModel):
    id: str
    serial_no: str
    document_name: str
    document_type: str
    category: str
    name: str
    company_name: str
    needs_renewal: bool
    renewal_date: Optional[str] = None
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    date: str
    status: str
    issue_date: Optional[str] = None
    concern_person_name: str
    concern_person_mobile: str
    concern_person_department: str
    shared_expiry_date: Optional[str] = None
    last_shared_at: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Allows population by both original name and alias
        from_attributes=True,
    )


class DocumentListResponse(BaseModel):
    documents: List[DocumentResponse]
    total_count: int

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class UploadOutcomeResponse(BaseModel):
    index: int
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    warning: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DocumentBatchResponse(BaseModel):
    documents: List[DocumentResponse]
    uploads: List[UploadOutcomeResponse]
    warnings: List[str]
    master_data_added: int

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MasterDataOptionsResponse(BaseModel):
    document_types: List[str]
    categories: List[str]
    company_names: List[str]

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DraftEntryResponse(BaseModel):
    id: str
    document_name: str
    document_type: str
    category: str
    name: str
    name_label: str
    company_name: str
    needs_renewal: bool
    renewal_date: Optional[str] = None
    issue_date: Optional[str] = None
    concern_person_name: str
    concern_person_mobile: str
    concern_person_department: str
    file_name: Optional[str] = None
    file_size: Optional[int] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def from_entry(cls, entry: DocumentEntry) -> "DraftEntryResponse":
        return cls(
            **entry.model_dump(exclude={"file"}),
            name_label=name_label_for_category(entry.category),
            file_name=entry.file.file_name if entry.file else None,
            file_size=entry.file.size if entry.file else None,
        )


class DraftResponse(BaseModel):
    entries: List[DraftEntryResponse]
    max_entries: int
    can_add_entry: bool

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
