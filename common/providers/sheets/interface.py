from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from common.providers.sheets.models import (
    EmailRequest,
    FileUploadRequest,
    ScriptResponse,
    ShareLogRequest,
)


class SheetsBackendInterface(ABC):
    """Remote spreadsheet-backed script endpoint that owns all canonical state."""

    @abstractmethod
    async def fetch_rows(
        self, sheet: str, params: Optional[Dict[str, str]] = None
    ) -> List[List[Any]]:
        """
        Read every row of a sheet, header row included.

        Args:
            sheet: Sheet name
            params: Extra query parameters (e.g. credentials)

        Returns:
            Raw rows as returned by the endpoint

        Raises:
            RemoteServiceError: On transport, status, JSON or envelope failure
        """
        pass

    @abstractmethod
    async def insert_row(self, sheet_name: str, row: List[Any]) -> ScriptResponse:
        """
        Append a fixed-position row. The response may carry a ``serialNo``.

        Raises:
            RemoteServiceError: If the insert did not succeed
        """
        pass

    @abstractmethod
    async def upload_file(
        self, sheet_name: str, upload: FileUploadRequest
    ) -> ScriptResponse:
        """
        Upload a file; a successful response carries ``fileUrl``.

        Raises:
            RemoteServiceError: On transport or envelope failure
        """
        pass

    @abstractmethod
    async def send_email(self, email: EmailRequest) -> ScriptResponse:
        """
        Ask the endpoint to send an email.

        Returns the envelope even when ``success`` is false so callers can
        surface the ``error`` message.
        """
        pass

    @abstractmethod
    async def log_share(self, entry: ShareLogRequest) -> ScriptResponse:
        """Record a share event remotely."""
        pass
