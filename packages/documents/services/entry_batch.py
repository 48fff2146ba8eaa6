from typing import List, Optional, Tuple

from common.core.exceptions import (
    EntryLimitExceededError,
    NotFoundError,
    ValidationError,
)
from packages.documents.models.domain.document import DocumentEntry, FileAttachment

DEFAULT_MAX_ENTRIES = 10
DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024


def name_label_for_category(category: Optional[str]) -> str:
    """Label for the free-text name field, which means different things per category."""
    c = (category or "").lower()
    if "personal" in c:
        return "Person Name"
    if "director" in c:
        return "Director Name"
    if "company" in c:
        return "Company Name"
    return "Name"


def validate_entries(entries: List[DocumentEntry], max_entries: int) -> None:
    """
    Only the document name is mandatory, plus a renewal date when renewal is needed.

    Raises:
        ValidationError: On the first violation
    """
    if not entries:
        raise ValidationError("At least one document is required.")
    if len(entries) > max_entries:
        raise EntryLimitExceededError(
            f"You can add maximum {max_entries} documents at a time."
        )
    for entry in entries:
        if not entry.document_name or not entry.document_name.strip():
            raise ValidationError("Please fill Document Name for all entries.")
        if entry.needs_renewal and not entry.renewal_date:
            raise ValidationError(
                "Please select a renewal date for entries that need renewal."
            )


class DocumentEntryBatch:
    """The set of form rows being prepared for one submission."""

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ):
        self.max_entries = max_entries
        self.max_file_size = max_file_size
        self._entries: List[DocumentEntry] = [DocumentEntry()]

    @classmethod
    def from_entries(
        cls,
        entries: List[DocumentEntry],
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ) -> "DocumentEntryBatch":
        """Build a batch from rows filled elsewhere, applying the same limits as the form."""
        if not entries:
            raise ValidationError("At least one document is required.")
        if len(entries) > max_entries:
            raise EntryLimitExceededError(
                f"You can add maximum {max_entries} documents at a time."
            )
        batch = cls(max_entries=max_entries, max_file_size=max_file_size)
        batch._entries = []
        for entry in entries:
            if entry.file and entry.file.size > max_file_size:
                raise ValidationError(
                    f"File {entry.file.file_name} must be less than "
                    f"{max_file_size // (1024 * 1024)}MB"
                )
            batch._entries.append(entry)
        return batch

    @property
    def entries(self) -> Tuple[DocumentEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _index_of(self, entry_id: str) -> int:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        raise NotFoundError(f"Entry {entry_id} not found")

    def add_entry(self) -> DocumentEntry:
        """
        Append a row pre-filled from the last one, except document name and file.

        Raises:
            EntryLimitExceededError: If the batch is full; the batch is unchanged
        """
        if len(self._entries) >= self.max_entries:
            raise EntryLimitExceededError(
                f"You can add maximum {self.max_entries} documents at a time."
            )
        last = self._entries[-1]
        entry = last.model_copy(
            update={
                "id": DocumentEntry().id,
                "document_name": "",
                "file": None,
            }
        )
        self._entries.append(entry)
        return entry

    def remove_entry(self, entry_id: str) -> None:
        if len(self._entries) == 1:
            raise ValidationError("At least one document is required.")
        del self._entries[self._index_of(entry_id)]

    def update_entry(self, entry_id: str, **changes) -> DocumentEntry:
        index = self._index_of(entry_id)
        updated = self._entries[index].model_copy(update=changes)
        self._entries[index] = updated
        return updated

    def attach_file(self, entry_id: str, attachment: FileAttachment) -> DocumentEntry:
        if attachment.size > self.max_file_size:
            raise ValidationError(
                f"File size must be less than {self.max_file_size // (1024 * 1024)}MB"
            )
        return self.update_entry(entry_id, file=attachment)

    def validate(self) -> None:
        validate_entries(self._entries, self.max_entries)
