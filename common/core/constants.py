from enum import Enum


class Environment(str, Enum):
    """Environment profiles."""

    LOCAL = "local"
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class RateLimiterType(str, Enum):
    """Upload pacing policies."""

    FIXED_INTERVAL = "fixed_interval"
    MOVING_WINDOW = "moving_window"
    NONE = "none"


class SheetName(str, Enum):
    """Sheets exposed by the remote script endpoint."""

    CREDENTIALS = "Pass"
    DOCUMENTS = "Documents"
    MASTER = "Master"


class ScriptAction(str, Enum):
    """Write actions understood by the remote script endpoint."""

    INSERT = "insert"
    UPLOAD_FILE = "uploadFile"
    SEND_EMAIL = "sendEmail"
    LOG_SHARE = "logShare"
