"""
Name: Settings Tests

Responsibilities:
  - Environment parsing, validation and derived properties
"""

import pytest
from pydantic import ValidationError

from staffing.crosscutting.config import Settings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.unit
class TestSettings:
    def test_defaults_select_file_backend(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        settings = Settings()

        assert settings.uses_postgres is False
        assert settings.lock_retries == 60
        assert settings.lock_retry_delay_seconds == pytest.approx(0.025)
        assert settings.data_path.name == "data"

    def test_database_url_selects_postgres(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@localhost:5432/staffing")

        assert get_settings().uses_postgres is True

    def test_blank_database_url_is_file_backend(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "   ")

        assert Settings().uses_postgres is False

    def test_data_dir_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))

        assert Settings().data_path == tmp_path.resolve()

    @pytest.mark.parametrize("name", ["LOCK_RETRIES", "LOCK_RETRY_DELAY_MS"])
    def test_lock_policy_must_be_positive(self, monkeypatch, name):
        monkeypatch.setenv(name, "0")

        with pytest.raises(ValidationError):
            Settings()

    def test_pool_bounds_are_cross_checked(self, monkeypatch):
        monkeypatch.setenv("DB_POOL_MIN_SIZE", "10")
        monkeypatch.setenv("DB_POOL_MAX_SIZE", "2")

        with pytest.raises(ValueError, match="db_pool_min_size"):
            Settings().validate_pool_params()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
