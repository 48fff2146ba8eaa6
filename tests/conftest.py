# Shared pytest configuration and fixtures for all test types
import os

# Settings are validated once at import time, so the environment must be set first
os.environ.setdefault("GOOGLE_SCRIPT_URL", "https://script.test/macros/s/test/exec")
os.environ.setdefault("GOOGLE_DRIVE_FOLDER_ID", "test-folder")
os.environ.setdefault("UPLOAD_RATE_LIMITER", "none")
os.environ.setdefault("ENVIRONMENT", "local")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from slowapi import Limiter  # noqa: E402
from slowapi.util import get_remote_address  # noqa: E402
from unittest.mock import AsyncMock, patch  # noqa: E402

from common.providers.caching.memory_cache import MemoryCache  # noqa: E402
from common.providers.sheets.interface import SheetsBackendInterface  # noqa: E402
from common.providers.sheets.models import ScriptResponse  # noqa: E402

# Create test limiter with no limits and in-memory storage
test_limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri="memory://",
    enabled=False,
)

# Patch the limiter before importing the app so decorators use test limiter
with patch("common.providers.rate_limiter.limiter.limiter", test_limiter):
    from api.main import app

from packages.auth.models.domain.authenticated_user import (  # noqa: E402
    ADMIN_PERMISSIONS,
    AuthenticatedUser,
    UserRole,
)
from packages.documents.models.domain.document import DocumentItem  # noqa: E402

from tests.fixtures import CREDENTIALS_HEADER  # noqa: E402


@pytest.fixture
def mock_backend():
    """Remote script endpoint stub; every call succeeds unless a test says otherwise."""
    backend = AsyncMock(spec=SheetsBackendInterface)
    backend.fetch_rows = AsyncMock(return_value=[])
    backend.insert_row = AsyncMock(
        return_value=ScriptResponse(success=True, serial_no="SN-001")
    )
    backend.upload_file = AsyncMock(
        return_value=ScriptResponse(
            success=True, file_url="https://drive.google.com/file/d/abc123/view"
        )
    )
    backend.send_email = AsyncMock(return_value=ScriptResponse(success=True))
    backend.log_share = AsyncMock(return_value=ScriptResponse(success=True))
    return backend


@pytest.fixture
def admin_user():
    return AuthenticatedUser(
        user_id="admin",
        name="Admin User",
        role=UserRole.ADMIN,
        permissions=list(ADMIN_PERMISSIONS),
    )


@pytest.fixture
def sample_documents():
    return [
        DocumentItem(
            id="doc-1",
            serial_no="SN-001",
            document_name="Trade License",
            document_type="License",
            category="Company",
            name="Acme Ltd",
            renewal_date="2025-03-31",
            needs_renewal=True,
            file_url="https://drive.google.com/file/d/file1/view?usp=sharing",
            date="2025-01-10",
        ),
        DocumentItem(
            id="doc-2",
            serial_no="SN-002",
            document_name="PAN Card",
            document_type="Identity",
            category="Personal",
            name="Jane Doe",
            date="2025-01-11",
        ),
    ]


@pytest.fixture
def session_cache():
    """Fresh session storage per test."""
    cache = MemoryCache()
    with patch("common.providers.caching.factory._cache_provider", cache):
        yield cache


@pytest_asyncio.fixture
async def client(mock_backend, session_cache):
    """API client wired to the stubbed script endpoint."""
    with patch("common.providers.sheets.factory._sheets_backend", mock_backend):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest_asyncio.fixture
async def logged_in_session(client, mock_backend, session_cache):
    """Log in as an admin through the API and return the session."""
    mock_backend.fetch_rows.return_value = [
        CREDENTIALS_HEADER,
        ["Admin User", "admin", "secret", "admin", "", ""],
    ]
    response = await client.post(
        "/api/v1/auth/login", json={"username": "admin", "password": "secret"}
    )
    assert response.status_code == 200
    token = response.json()["token"]
    mock_backend.fetch_rows.reset_mock()
    mock_backend.fetch_rows.return_value = []

    return await session_cache.get(f"session:{token}")


@pytest.fixture
def auth_headers(logged_in_session):
    return {"Authorization": f"Bearer {logged_in_session.token}"}
