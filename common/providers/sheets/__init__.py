from .interface import SheetsBackendInterface
from .models import EmailRequest, FileUploadRequest, ScriptResponse, ShareLogRequest
from .factory import get_sheets_backend
from .apps_script import AppsScriptBackend

__all__ = [
    "SheetsBackendInterface",
    "AppsScriptBackend",
    "EmailRequest",
    "FileUploadRequest",
    "ScriptResponse",
    "ShareLogRequest",
    "get_sheets_backend",
]
