from typing import List, Optional

from common.core.constants import SheetName
from common.core.telemetry import get_logger, trace_span
from common.providers.sheets.factory import get_sheets_backend
from common.providers.sheets.interface import SheetsBackendInterface
from packages.documents.models.domain.document import DocumentItem
from packages.documents.utils.sheet_rows import parse_document_row
from packages.store.app_state import AppState

logger = get_logger(__name__)


class DocumentService:
    """Service for reading documents from the local store and the remote sheet."""

    def __init__(self, backend: SheetsBackendInterface, state: AppState):
        self.backend = backend
        self.state = state

    def list_documents(
        self, status: Optional[str] = None, category: Optional[str] = None
    ) -> List[DocumentItem]:
        """List cached documents with optional exact-match filters."""
        documents = list(self.state.documents)
        if status:
            documents = [d for d in documents if d.status == status]
        if category:
            documents = [d for d in documents if d.category.lower() == category.lower()]
        return documents

    def get_document(self, document_id: str) -> DocumentItem:
        return self.state.get_document(document_id)

    def get_documents(self, document_ids: List[str]) -> List[DocumentItem]:
        """Look up several documents, keeping the requested order."""
        return [self.state.get_document(document_id) for document_id in document_ids]

    @trace_span
    async def refresh(self) -> List[DocumentItem]:
        """
        Replace the cached list with the remote ``Documents`` sheet.

        Returns:
            The freshly loaded documents
        """
        rows = await self.backend.fetch_rows(SheetName.DOCUMENTS.value)
        documents = []
        # Skip header row
        for row in rows[1:]:
            document = parse_document_row(row)
            if document is not None:
                documents.append(document)
        self.state.replace_documents(documents)
        logger.info(f"Loaded {len(documents)} documents from sheet")
        return documents


def get_document_service(state: AppState) -> DocumentService:
    """Get document service instance."""
    return DocumentService(get_sheets_backend(), state)
