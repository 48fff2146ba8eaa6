from typing import Any, Iterable, List, Sequence

from pydantic import BaseModel

from common.core.constants import SheetName
from common.core.telemetry import get_logger, trace_span
from common.providers.sheets.factory import get_sheets_backend
from common.providers.sheets.interface import SheetsBackendInterface
from packages.documents.models.domain.master_data import MasterDataEntry
from packages.store.app_state import AppState

logger = get_logger(__name__)

DEFAULT_CATEGORIES = ["Personal", "Company", "Director"]

# Master sheet columns
COMPANY_NAME_COLUMN = 0
DOCUMENT_TYPE_COLUMN = 1
CATEGORY_COLUMN = 2


class MasterDataOptions(BaseModel):
    """Autocomplete lists for the document form."""

    document_types: List[str]
    categories: List[str]
    company_names: List[str]


def _unique(values: Iterable[str]) -> List[str]:
    """First-seen order, blanks dropped."""
    seen = {}
    for value in values:
        if isinstance(value, str) and value.strip() and value not in seen:
            seen[value] = None
    return list(seen)


def _cell(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def parse_master_rows(rows: Sequence[Sequence[Any]]) -> List[MasterDataEntry]:
    entries = []
    for row in rows:
        company_name = _cell(row, COMPANY_NAME_COLUMN)
        document_type = _cell(row, DOCUMENT_TYPE_COLUMN)
        category = _cell(row, CATEGORY_COLUMN)
        if company_name or document_type or category:
            entries.append(
                MasterDataEntry(
                    company_name=company_name,
                    document_type=document_type,
                    category=category,
                )
            )
    return entries


class MasterDataService:
    """Keeps the master picklists in the local store in sync with the ``Master`` sheet."""

    def __init__(self, backend: SheetsBackendInterface, state: AppState):
        self.backend = backend
        self.state = state

    @trace_span
    async def refresh(self) -> List[MasterDataEntry]:
        rows = await self.backend.fetch_rows(SheetName.MASTER.value)
        # Skip header row
        entries = parse_master_rows(rows[1:])
        self.state.set_remote_master_data(entries)
        logger.info(f"Loaded {len(entries)} master data rows")
        return entries

    def options(self) -> MasterDataOptions:
        """Remote values first, then locally added ones; categories also get the defaults."""
        remote = self.state.remote_master_data
        local = self.state.master_data
        return MasterDataOptions(
            document_types=_unique(
                [m.document_type for m in remote] + [m.document_type for m in local]
            ),
            categories=_unique(
                [m.category for m in remote]
                + [m.category for m in local]
                + DEFAULT_CATEGORIES
            ),
            company_names=_unique(
                [m.company_name for m in remote] + [m.company_name for m in local]
            ),
        )


def get_master_data_service(state: AppState) -> MasterDataService:
    """Get master data service bound to one session's store."""
    return MasterDataService(get_sheets_backend(), state)
