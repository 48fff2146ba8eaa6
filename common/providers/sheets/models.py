from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class ScriptResponse(BaseModel):
    """Envelope returned by every call to the remote script endpoint."""

    success: bool = False
    data: Optional[Any] = None
    error: Optional[str] = None
    file_url: Optional[str] = Field(default=None, alias="fileUrl")
    serial_no: Optional[Union[str, int]] = Field(default=None, alias="serialNo")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def rows(self) -> List[List[Any]]:
        """Row data for sheet reads; empty when the payload is not a list of rows."""
        if not isinstance(self.data, list):
            return []
        return [row if isinstance(row, list) else [row] for row in self.data]


class FileUploadRequest(BaseModel):
    """Payload for the ``uploadFile`` action."""

    base64_data: str = Field(alias="base64Data")
    file_name: str = Field(alias="fileName")
    mime_type: str = Field(alias="mimeType")
    folder_id: str = Field(alias="folderId")

    model_config = ConfigDict(populate_by_name=True)


class EmailRequest(BaseModel):
    """Payload for the ``sendEmail`` action."""

    to: str
    subject: str
    body: str
    is_html: bool = Field(default=True, alias="isHtml")
    document_name: str = Field(alias="documentName")
    recipient_name: str = Field(default="", alias="recipientName")
    document_type: Optional[str] = Field(default=None, alias="documentType")
    category: Optional[str] = None
    serial_no: Optional[str] = Field(default=None, alias="serialNo")

    model_config = ConfigDict(populate_by_name=True)


class ShareLogRequest(BaseModel):
    """Payload for the ``logShare`` action."""

    recipient_name: str = Field(default="", alias="recipientName")
    document_name: str = Field(alias="documentName")
    document_type: Optional[str] = Field(default=None, alias="documentType")
    category: Optional[str] = None
    serial_no: Optional[str] = Field(default=None, alias="serialNo")
    file_content: Optional[str] = Field(default=None, alias="fileContent")
    share_method: str = Field(alias="shareMethod")
    number: str = ""

    model_config = ConfigDict(populate_by_name=True)
