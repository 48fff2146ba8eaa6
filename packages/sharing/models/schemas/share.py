from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from packages.sharing.models.domain.share import ShareMethod, ShareType


class ShareDocumentsRequest(BaseModel):
    share_type: ShareType
    document_ids: List[str] = Field(min_length=1)
    recipient_name: str = ""
    email: str = ""
    whatsapp: str = ""
    subject: str = ""
    message: Optional[str] = None  # Omit to use the default message

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ShareHistoryResponse(BaseModel):
    id: str
    share_no: str
    date_time: str
    doc_serial: str
    doc_name: str
    doc_file: str
    shared_via: ShareMethod
    recipient_name: str
    contact_info: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Allows population by both original name and alias
        from_attributes=True,
    )


class ShareResponse(BaseModel):
    completed: bool
    email_sent: bool
    email_error: Optional[str] = None
    whatsapp_url: Optional[str] = None
    history: List[ShareHistoryResponse]
    close_after_seconds: Optional[float] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ShareHistoryListResponse(BaseModel):
    history: List[ShareHistoryResponse]
    total_count: int

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
