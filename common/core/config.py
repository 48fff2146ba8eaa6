from functools import lru_cache
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import Environment, RateLimiterType
from common.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "Document & Subscription System"
    api_version: str = "0.1.0"
    debug: bool = False
    api_rate_limits: List[str] = ["20/second", "600/minute"]

    # Remote script endpoint (spreadsheet-backed)
    google_script_url: str
    google_drive_folder_id: Optional[str] = None
    script_timeout_seconds: float = 30.0

    # Upload pacing
    upload_rate_limiter: RateLimiterType = RateLimiterType.FIXED_INTERVAL
    upload_interval_seconds: float = 1.0  # Gap between uploads to avoid Drive throttling
    upload_rate_limit: str = "1/second"  # Only used by the moving window limiter

    # Document submission
    max_entries_per_submission: int = 10
    max_file_size_bytes: int = 50 * 1024 * 1024

    # Sharing
    share_link_expiry_days: int = 7
    share_close_delay_seconds: float = 1.5

    # Sessions
    session_ttl_seconds: int = 60 * 60 * 12

    @property
    def uploads_enabled(self) -> bool:
        """Files can only be uploaded once a destination folder is configured."""
        return bool(self.google_drive_folder_id)

    @property
    def cors_allowed_origins(self) -> List[str]:
        """Auto-select CORS origins based on environment."""
        if self.environment == Environment.LOCAL:
            return [
                "http://localhost:5173",
                "http://localhost:3000",
            ]
        return ["https://www.botivate.com"]


@lru_cache
def get_settings() -> Settings:
    """
    Load and validate settings once.

    Raises:
        ConfigurationError: If a required variable is missing or a value is invalid
    """
    try:
        return Settings()
    except PydanticValidationError as e:
        missing = [
            ".".join(str(part) for part in error["loc"]).upper()
            for error in e.errors()
            if error["type"] == "missing"
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                missing=missing,
            ) from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e
