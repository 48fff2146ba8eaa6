from typing import Optional

from common.core.config import get_settings
from common.core.telemetry import get_logger

from .apps_script import AppsScriptBackend
from .interface import SheetsBackendInterface

logger = get_logger(__name__)

# Global instance
_sheets_backend: Optional[SheetsBackendInterface] = None


def get_sheets_backend() -> SheetsBackendInterface:
    """Get the configured sheets backend."""
    global _sheets_backend

    if _sheets_backend is None:
        settings = get_settings()
        _sheets_backend = AppsScriptBackend(
            script_url=settings.google_script_url,
            timeout=settings.script_timeout_seconds,
        )
        logger.info("Initialized Apps Script sheets backend")

    return _sheets_backend
