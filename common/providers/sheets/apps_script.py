"""Google Apps Script implementation of the sheets backend."""

import json
import time
from typing import Any, Callable, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from common.core.constants import ScriptAction
from common.core.exceptions import RemoteServiceError
from common.core.telemetry import get_logger, trace_span
from common.providers.sheets.interface import SheetsBackendInterface
from common.providers.sheets.models import (
    EmailRequest,
    FileUploadRequest,
    ScriptResponse,
    ShareLogRequest,
)

logger = get_logger(__name__)


class AppsScriptBackend(SheetsBackendInterface):
    """Talks to a deployed Apps Script web app over HTTP."""

    def __init__(
        self,
        script_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the backend.

        Args:
            script_url: Deployed web app URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used to stub the network)
            clock: Wall clock used for the cache-busting ``_t`` parameter
        """
        if not script_url:
            raise ValueError("GOOGLE_SCRIPT_URL is required for the sheets backend")
        self.script_url = script_url
        self.timeout = timeout
        self._transport = transport
        self._clock = clock

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            follow_redirects=True,  # Apps Script answers through a redirect
        )

    @staticmethod
    def _parse(response: httpx.Response) -> ScriptResponse:
        if response.status_code >= 400:
            raise RemoteServiceError(
                f"Server error: {response.status_code}",
                status_code=response.status_code,
            )
        try:
            payload = json.loads(response.text)
        except ValueError as e:
            raise RemoteServiceError("Server returned non-JSON response") from e
        if not isinstance(payload, dict):
            raise RemoteServiceError("Invalid response structure")
        try:
            return ScriptResponse.model_validate(payload)
        except PydanticValidationError as e:
            raise RemoteServiceError("Invalid response structure") from e

    async def _post(
        self, action: ScriptAction, sheet_name: Optional[str], data: Any
    ) -> ScriptResponse:
        body: Dict[str, Any] = {"action": action.value, "data": data}
        if sheet_name:
            body["sheetName"] = sheet_name
        try:
            async with self._client() as client:
                response = await client.post(self.script_url, json=body)
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Request to script endpoint failed: {e}") from e
        return self._parse(response)

    @trace_span
    async def fetch_rows(
        self, sheet: str, params: Optional[Dict[str, str]] = None
    ) -> List[List[Any]]:
        query = {"sheet": sheet, **(params or {})}
        query["_t"] = str(int(self._clock() * 1000))

        logger.info(f"Fetching sheet {sheet}")
        try:
            async with self._client() as client:
                response = await client.get(self.script_url, params=query)
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Request to script endpoint failed: {e}") from e

        result = self._parse(response)
        if not result.success or not isinstance(result.data, list):
            raise RemoteServiceError("Invalid response structure")
        logger.debug(f"Fetched {len(result.rows)} rows from sheet {sheet}")
        return result.rows

    @trace_span
    async def insert_row(self, sheet_name: str, row: List[Any]) -> ScriptResponse:
        result = await self._post(ScriptAction.INSERT, sheet_name, row)
        if not result.success:
            raise RemoteServiceError(
                f"Insert into {sheet_name} failed: {result.error or 'unknown error'}"
            )
        return result

    @trace_span
    async def upload_file(
        self, sheet_name: str, upload: FileUploadRequest
    ) -> ScriptResponse:
        logger.info(f"Uploading file {upload.file_name} ({upload.mime_type})")
        return await self._post(
            ScriptAction.UPLOAD_FILE, sheet_name, upload.model_dump(by_alias=True)
        )

    @trace_span
    async def send_email(self, email: EmailRequest) -> ScriptResponse:
        logger.info(f"Sending email for {email.document_name}")
        return await self._post(
            ScriptAction.SEND_EMAIL, None, email.model_dump(by_alias=True)
        )

    @trace_span
    async def log_share(self, entry: ShareLogRequest) -> ScriptResponse:
        return await self._post(
            ScriptAction.LOG_SHARE, None, entry.model_dump(by_alias=True)
        )
