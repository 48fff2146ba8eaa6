import re
from datetime import date, datetime
from typing import Optional
from urllib.parse import quote

WHATSAPP_BASE_URL = "https://wa.me/"
# Characters left unescaped by encodeURIComponent
URI_COMPONENT_SAFE = "-_.!~*'()"

_DRIVE_FILE_ID = re.compile(r"/file/d/([^/]+)")
_DRIVE_OPEN_ID = re.compile(r"[?&]id=([^&]+)")


def get_preview_url(url: Optional[str]) -> str:
    """Rewrite Google Drive links to their embeddable ``/preview`` form."""
    if not url:
        return ""
    if "drive.google.com" in url:
        match = _DRIVE_FILE_ID.search(url) or _DRIVE_OPEN_ID.search(url)
        if match:
            return f"https://drive.google.com/file/d/{match.group(1)}/preview"
    return url


def build_whatsapp_url(message: str) -> str:
    return f"{WHATSAPP_BASE_URL}?text={quote(message, safe=URI_COMPONENT_SAFE)}"


def format_display_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def format_date_string(value: Optional[str]) -> str:
    """Show an ISO date as DD/MM/YYYY; anything unparseable is shown unchanged."""
    if not value:
        return ""
    try:
        return format_display_date(datetime.strptime(value.strip()[:10], "%Y-%m-%d"))
    except ValueError:
        return value
