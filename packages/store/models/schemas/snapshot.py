from typing import List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from packages.documents.models.schemas.document import DocumentResponse
from packages.sharing.models.schemas.share import ShareHistoryResponse


class MasterDataEntryResponse(BaseModel):
    id: str
    company_name: str
    document_type: str
    category: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class StoreSnapshot(BaseModel):
    """Everything a client needs to persist and later restore its store."""

    documents: List[DocumentResponse] = []
    master_data: List[MasterDataEntryResponse] = []
    remote_master_data: List[MasterDataEntryResponse] = []
    share_history: List[ShareHistoryResponse] = []

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
