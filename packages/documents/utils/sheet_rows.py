"""
Fixed-position layout of the remote ``Documents`` sheet.

A Timestamp, B Serial No, C Document name, D Document Type, E Category,
F Name, G Need Renewal, H Renewal Date, I Image (file URL), J Status,
K Planned1, L Actual1, M Issue date, N-P concern person name/mobile/department,
Q Company Name.
"""

from datetime import datetime
from typing import Any, List, Optional, Sequence

from packages.documents.models.domain.document import (
    PENDING_SERIAL,
    DocumentEntry,
    DocumentItem,
    DocumentStatus,
)

TIMESTAMP = 0
SERIAL_NO = 1
DOCUMENT_NAME = 2
DOCUMENT_TYPE = 3
CATEGORY = 4
NAME = 5
NEEDS_RENEWAL = 6
RENEWAL_DATE = 7
FILE_URL = 8
STATUS = 9
PLANNED = 10
ACTUAL = 11
ISSUE_DATE = 12
CONCERN_PERSON_NAME = 13
CONCERN_PERSON_MOBILE = 14
CONCERN_PERSON_DEPARTMENT = 15
COMPANY_NAME = 16

ROW_WIDTH = 17


def format_timestamp(now: datetime) -> str:
    return now.strftime("%Y-%m-%d %H:%M:%S")


def format_renewal_date(renewal_date: Optional[str], now: datetime) -> str:
    """Renewal date with the current time appended, so sheet formulas see a datetime."""
    if not renewal_date:
        return ""
    return f"{renewal_date} {now.strftime('%H:%M')}"


def build_document_row(
    entry: DocumentEntry, file_url: Optional[str], now: datetime
) -> List[Any]:
    """Insert payload for one entry. The serial stays empty for the server to fill."""
    row: List[Any] = [None] * ROW_WIDTH
    row[TIMESTAMP] = format_timestamp(now)
    row[SERIAL_NO] = ""
    row[DOCUMENT_NAME] = entry.document_name
    row[DOCUMENT_TYPE] = entry.document_type or ""
    row[CATEGORY] = entry.category or ""
    row[NAME] = entry.name or ""
    row[NEEDS_RENEWAL] = "Yes" if entry.needs_renewal else "No"
    row[RENEWAL_DATE] = format_renewal_date(entry.renewal_date, now)
    row[FILE_URL] = file_url or ""
    # Status, Planned1 and Actual1 are left null for the sheet to manage
    row[ISSUE_DATE] = entry.issue_date or ""
    row[CONCERN_PERSON_NAME] = entry.concern_person_name or ""
    row[CONCERN_PERSON_MOBILE] = entry.concern_person_mobile or ""
    row[CONCERN_PERSON_DEPARTMENT] = entry.concern_person_department or ""
    row[COMPANY_NAME] = entry.company_name or ""
    return row


def _text(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def parse_document_row(row: Sequence[Any]) -> Optional[DocumentItem]:
    """Decode a sheet row; rows without a document name are skipped."""
    document_name = _text(row, DOCUMENT_NAME)
    if not document_name:
        return None

    needs_renewal = _text(row, NEEDS_RENEWAL).lower() == "yes"
    renewal_date = _text(row, RENEWAL_DATE)
    file_url = _text(row, FILE_URL)
    timestamp = _text(row, TIMESTAMP)

    return DocumentItem(
        serial_no=_text(row, SERIAL_NO) or PENDING_SERIAL,
        document_name=document_name,
        document_type=_text(row, DOCUMENT_TYPE),
        category=_text(row, CATEGORY),
        name=_text(row, NAME),
        company_name=_text(row, COMPANY_NAME),
        needs_renewal=needs_renewal,
        renewal_date=renewal_date[:10] if needs_renewal and renewal_date else None,
        file_url=file_url or None,
        date=timestamp[:10],
        status=_text(row, STATUS) or DocumentStatus.ACTIVE.value,
        issue_date=_text(row, ISSUE_DATE) or None,
        concern_person_name=_text(row, CONCERN_PERSON_NAME),
        concern_person_mobile=_text(row, CONCERN_PERSON_MOBILE),
        concern_person_department=_text(row, CONCERN_PERSON_DEPARTMENT),
    )
