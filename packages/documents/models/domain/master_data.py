from pydantic import BaseModel, Field

from packages.documents.models.domain.document import generate_local_id


class MasterDataEntry(BaseModel):
    """A known (company, document type, category) combination used for autocomplete."""

    id: str = Field(default_factory=generate_local_id)
    company_name: str
    document_type: str
    category: str

    def matches(self, company_name: str, document_type: str, category: str) -> bool:
        """Case-insensitive triple match."""
        return (
            self.company_name.lower() == company_name.lower()
            and self.document_type.lower() == document_type.lower()
            and self.category.lower() == category.lower()
        )
