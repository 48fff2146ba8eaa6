from typing import List, Optional
from pydantic import BaseModel

from packages.documents.models.domain.document import DocumentItem


class UploadOutcome(BaseModel):
    """Result of the upload phase for one entry."""

    index: int
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    warning: Optional[str] = None


class SubmissionResult(BaseModel):
    """Everything a completed batch produced."""

    documents: List[DocumentItem]
    uploads: List[UploadOutcome]
    master_data_added: int = 0

    @property
    def warnings(self) -> List[str]:
        return [u.warning for u in self.uploads if u.warning]
