"""
Local store for one session.

Caches documents, master picklists and share history. The remote endpoint
stays the only authority over canonical state; everything here is mutated
optimistically by the flows and only through the actions below.
"""

from typing import Iterable, List, Optional, Tuple
from pydantic import BaseModel

from common.core.exceptions import NotFoundError
from packages.documents.models.domain.document import DocumentItem
from packages.documents.models.domain.master_data import MasterDataEntry
from packages.sharing.models.domain.share import ShareHistoryEntry


class AppStateSnapshot(BaseModel):
    """Serializable copy of the store, used to persist and restore it."""

    documents: List[DocumentItem] = []
    master_data: List[MasterDataEntry] = []
    remote_master_data: List[MasterDataEntry] = []
    share_history: List[ShareHistoryEntry] = []


class AppState:
    def __init__(self):
        self._documents: List[DocumentItem] = []
        self._master_data: List[MasterDataEntry] = []
        self._remote_master_data: List[MasterDataEntry] = []
        self._share_history: List[ShareHistoryEntry] = []

    # Read access returns tuples so callers can't bypass the actions

    @property
    def documents(self) -> Tuple[DocumentItem, ...]:
        return tuple(self._documents)

    @property
    def master_data(self) -> Tuple[MasterDataEntry, ...]:
        return tuple(self._master_data)

    @property
    def remote_master_data(self) -> Tuple[MasterDataEntry, ...]:
        return tuple(self._remote_master_data)

    @property
    def share_history(self) -> Tuple[ShareHistoryEntry, ...]:
        return tuple(self._share_history)

    # Documents

    def add_document(self, document: DocumentItem) -> DocumentItem:
        self._documents.append(document)
        return document

    def add_documents(self, documents: Iterable[DocumentItem]) -> None:
        self._documents.extend(documents)

    def replace_documents(self, documents: Iterable[DocumentItem]) -> None:
        """Swap the cached list for a fresh copy from the remote sheet."""
        self._documents = list(documents)

    def get_document(self, document_id: str) -> DocumentItem:
        for document in self._documents:
            if document.id == document_id:
                return document
        raise NotFoundError(f"Document {document_id} not found")

    def update_document(self, document_id: str, **changes) -> DocumentItem:
        document = self.get_document(document_id)
        updated = document.model_copy(update=changes)
        self._documents[self._documents.index(document)] = updated
        return updated

    # Master data

    def find_master_data(
        self, company_name: str, document_type: str, category: str
    ) -> Optional[MasterDataEntry]:
        for entry in self._master_data:
            if entry.matches(company_name, document_type, category):
                return entry
        return None

    def add_master_data(
        self, company_name: str, document_type: str, category: str
    ) -> Optional[MasterDataEntry]:
        """Append a triple unless a case-insensitive match exists. Returns the new entry."""
        if self.find_master_data(company_name, document_type, category):
            return None
        entry = MasterDataEntry(
            company_name=company_name, document_type=document_type, category=category
        )
        self._master_data.append(entry)
        return entry

    def set_remote_master_data(self, entries: Iterable[MasterDataEntry]) -> None:
        self._remote_master_data = list(entries)

    # Share history

    @property
    def next_share_number(self) -> int:
        return len(self._share_history) + 1

    def add_share_history(self, entries: Iterable[ShareHistoryEntry]) -> None:
        self._share_history.extend(entries)

    # Persistence

    def snapshot(self) -> AppStateSnapshot:
        return AppStateSnapshot(
            documents=list(self._documents),
            master_data=list(self._master_data),
            remote_master_data=list(self._remote_master_data),
            share_history=list(self._share_history),
        )

    @classmethod
    def from_snapshot(cls, snapshot: AppStateSnapshot) -> "AppState":
        state = cls()
        state._documents = list(snapshot.documents)
        state._master_data = list(snapshot.master_data)
        state._remote_master_data = list(snapshot.remote_master_data)
        state._share_history = list(snapshot.share_history)
        return state
