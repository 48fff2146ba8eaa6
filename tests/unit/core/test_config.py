import pytest

from common.core.config import Settings, get_settings
from common.core.constants import Environment, RateLimiterType
from common.core.exceptions import ConfigurationError


@pytest.fixture
def fresh_settings():
    """Clear the settings cache around a test so env changes take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_SCRIPT_URL", "https://script.test/exec")
        monkeypatch.delenv("GOOGLE_DRIVE_FOLDER_ID", raising=False)
        monkeypatch.delenv("UPLOAD_RATE_LIMITER", raising=False)

        settings = Settings(_env_file=None)

        assert settings.max_entries_per_submission == 10
        assert settings.max_file_size_bytes == 50 * 1024 * 1024
        assert settings.share_link_expiry_days == 7
        assert settings.share_close_delay_seconds == 1.5
        assert settings.upload_rate_limiter == RateLimiterType.FIXED_INTERVAL
        assert settings.upload_interval_seconds == 1.0
        assert settings.uploads_enabled is False

    def test_uploads_enabled_with_folder(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_SCRIPT_URL", "https://script.test/exec")
        monkeypatch.setenv("GOOGLE_DRIVE_FOLDER_ID", "folder-1")

        assert Settings(_env_file=None).uploads_enabled is True

    def test_cors_origins_follow_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_SCRIPT_URL", "https://script.test/exec")

        monkeypatch.setenv("ENVIRONMENT", "local")
        local = Settings(_env_file=None)
        monkeypatch.setenv("ENVIRONMENT", "production")
        production = Settings(_env_file=None)

        assert local.environment == Environment.LOCAL
        assert "http://localhost:5173" in local.cors_allowed_origins
        assert "http://localhost:5173" not in production.cors_allowed_origins


class TestGetSettings:
    def test_missing_script_url_names_the_variable(self, monkeypatch, fresh_settings):
        monkeypatch.delenv("GOOGLE_SCRIPT_URL", raising=False)
        monkeypatch.chdir("/")  # No stray .env file

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert exc_info.value.missing == ["GOOGLE_SCRIPT_URL"]
        assert "GOOGLE_SCRIPT_URL" in str(exc_info.value)

    def test_invalid_value_is_configuration_error(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("GOOGLE_SCRIPT_URL", "https://script.test/exec")
        monkeypatch.setenv("UPLOAD_RATE_LIMITER", "token_bucket")
        monkeypatch.chdir("/")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert exc_info.value.missing == []

    def test_validated_once(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("GOOGLE_SCRIPT_URL", "https://script.test/exec")

        assert get_settings() is get_settings()
